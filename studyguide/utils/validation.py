from dataclasses import dataclass
from typing import Optional
import os

MIN_SYLLABUS_CHARS = 100
MAX_SYLLABUS_CHARS = 500_000

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
MAX_PAGES = 50
MIN_EXTRACTED_CHARS = 50


@dataclass
class ValidationResult:
    valid: bool
    error: Optional[str] = None


# Syllabus text as submitted to the generator
def validate_syllabus_text(text) -> ValidationResult:

    if not isinstance(text, str):
        return ValidationResult(False, "Syllabus text is required")

    if len(text) < MIN_SYLLABUS_CHARS:
        return ValidationResult(False, "Syllabus text too short - please upload a valid syllabus")

    if len(text) > MAX_SYLLABUS_CHARS:
        return ValidationResult(False, "Syllabus text too long - please upload a smaller PDF")

    return ValidationResult(True)


def require_valid_syllabus(text) -> str:
    result = validate_syllabus_text(text)
    if not result.valid:
        raise ValueError(result.error)
    return text


# Uploaded file, before extraction
def validate_pdf_file(path: str) -> ValidationResult:

    if not path:
        return ValidationResult(False, "No file provided")

    if not path.lower().endswith(".pdf"):
        return ValidationResult(False, "Only PDF files are allowed")

    if not os.path.exists(path):
        return ValidationResult(False, "No file provided")

    if os.path.getsize(path) > MAX_FILE_SIZE:
        return ValidationResult(
            False, f"File too large. Maximum size is {MAX_FILE_SIZE // (1024 * 1024)}MB"
        )

    return ValidationResult(True)


# Text pulled out of a PDF
def validate_pdf_content(text: str, page_count: int) -> ValidationResult:

    if not text or len(text.strip()) < MIN_EXTRACTED_CHARS:
        return ValidationResult(
            False, "Could not extract text from PDF. It may be scanned or image-based."
        )

    if page_count > MAX_PAGES:
        return ValidationResult(
            False, f"PDF has too many pages ({page_count}). Maximum is {MAX_PAGES} pages."
        )

    return ValidationResult(True)
