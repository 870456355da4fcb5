import os
import json
from typing import Dict, Any
from pathlib import Path

from studyguide.utils.pdf_parser import extract_text_from_pdf
from studyguide.utils.validation import validate_pdf_file, validate_pdf_content


# Loading syllabus text from PDF/TXT
def load_syllabus(path: str) -> Dict[str, Any]:

    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Syllabus file not found: {path}")

    if path.suffix.lower() == ".pdf":
        check = validate_pdf_file(str(path))
        if not check.valid:
            raise ValueError(check.error)

        extracted = extract_text_from_pdf(str(path))

        check = validate_pdf_content(extracted["text"], extracted["page_count"])
        if not check.valid:
            raise ValueError(check.error)
        return extracted

    elif path.suffix.lower() in (".txt", ".md"):
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
        return {"source_name": path.name, "text": text, "page_count": 0}

    else:
        raise ValueError(f"Unsupported syllabus format: {path.suffix}")


# Final guide JSON
def write_json(path: str, data: Dict[str, Any]):

    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False, default=str)
