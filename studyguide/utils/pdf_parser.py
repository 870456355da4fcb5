import fitz  # PyMuPDF
from typing import Dict, Any, List
import os


# clean lines by stripping whitespace and removing empties
def _clean_lines(lines: List[str]) -> List[str]:

    cleaned = []
    for line in lines:
        line = line.strip()
        if not line:
            continue
        cleaned.append(line)
    return cleaned


# Main PDF to syllabus text extraction
def extract_text_from_pdf(pdf_path: str) -> Dict[str, Any]:

    if not os.path.exists(pdf_path):
        raise FileNotFoundError(f"PDF not found: {pdf_path}")

    pages = []
    with fitz.open(pdf_path) as doc:
        page_count = doc.page_count
        for page in doc:
            lines = _clean_lines(page.get_text("text").split("\n"))
            if lines:
                pages.append("\n".join(lines))

    return {
        "source_name": os.path.basename(pdf_path),
        "text": "\n\n".join(pages),
        "page_count": page_count,
    }
