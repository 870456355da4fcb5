import logging
import sys
from pathlib import Path
from dotenv import load_dotenv

from studyguide.errors import GenerationError
from studyguide.generation.pipeline import generate
from studyguide.models.llm_client import LLMConfig
from studyguide.utils.io import load_syllabus, write_json
from studyguide.utils.validation import require_valid_syllabus

ROOT = Path(__file__).resolve().parents[2]
ENV_PATH = ROOT / ".env"
load_dotenv(ENV_PATH)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    #parse args
    if len(sys.argv) < 2:
        print("Usage: python -m studyguide.experiments.run_guide <syllabus.pdf|txt> [out.json]")
        sys.exit(2)

    syllabus_path = sys.argv[1].strip()
    if len(sys.argv) > 2:
        out_path = Path(sys.argv[2].strip())
    else:
        out_path = Path("data/guides") / (Path(syllabus_path).stem + ".json")

    print(f"\nSyllabus selected: {syllabus_path}")

    #load + validate
    syllabus = load_syllabus(syllabus_path)
    syllabus_text = require_valid_syllabus(syllabus["text"])
    print(f"Loaded {len(syllabus_text)} characters from {syllabus['source_name']}")

    #generate
    cfg = LLMConfig()
    print(f"Generating with {cfg.model} (fallback {cfg.fallback_model})...")

    try:
        guide = generate(syllabus_text, cfg=cfg)
    except GenerationError as e:
        print(f"\nGeneration failed: {e.category}")
        sys.exit(1)

    write_json(str(out_path), guide.to_dict())

    #print final results
    print("\n===== STUDY GUIDE =====")
    print("Course:", guide.core.course_name, guide.core.course_code or "")
    print("Weeks planned:", len(guide.core.week_by_week or []))
    print("Flashcards:", len(guide.content.flashcard_deck or []))
    print("Exams with strategy:", len(guide.strategy.exam_strategy or []))
    print("Priority intel:", "yes" if guide.priority is not None else "missing")
    print("\nGuide saved to:", out_path)


if __name__ == "__main__":
    main()
