"""Tests for input and PDF validation."""
import pytest

from studyguide.utils.validation import (
    MAX_PAGES,
    MAX_SYLLABUS_CHARS,
    MIN_SYLLABUS_CHARS,
    require_valid_syllabus,
    validate_pdf_content,
    validate_pdf_file,
    validate_syllabus_text,
)


class TestSyllabusText:

    def test_bounds(self) -> None:
        assert validate_syllabus_text("a" * MIN_SYLLABUS_CHARS).valid
        assert validate_syllabus_text("a" * MAX_SYLLABUS_CHARS).valid

    def test_too_short(self) -> None:
        result = validate_syllabus_text("a" * (MIN_SYLLABUS_CHARS - 1))
        assert not result.valid
        assert "too short" in result.error

    def test_too_long(self) -> None:
        result = validate_syllabus_text("a" * (MAX_SYLLABUS_CHARS + 1))
        assert not result.valid
        assert "too long" in result.error

    def test_not_a_string(self) -> None:
        assert not validate_syllabus_text(None).valid
        assert not validate_syllabus_text(12345).valid

    def test_require_raises(self) -> None:
        with pytest.raises(ValueError, match="too short"):
            require_valid_syllabus("short")


class TestPdf:

    def test_wrong_extension(self, tmp_path) -> None:
        path = tmp_path / "syllabus.docx"
        path.write_bytes(b"x")
        assert validate_pdf_file(str(path)).error == "Only PDF files are allowed"

    def test_too_large(self, tmp_path) -> None:
        path = tmp_path / "big.pdf"
        path.write_bytes(b"0" * (10 * 1024 * 1024 + 1))
        assert "too large" in validate_pdf_file(str(path)).error

    def test_ok_file(self, tmp_path) -> None:
        path = tmp_path / "ok.pdf"
        path.write_bytes(b"%PDF-1.4")
        assert validate_pdf_file(str(path)).valid

    def test_scanned_content(self) -> None:
        assert "scanned" in validate_pdf_content("   \n  ", 3).error

    def test_too_many_pages(self) -> None:
        result = validate_pdf_content("x" * 500, MAX_PAGES + 1)
        assert not result.valid
        assert str(MAX_PAGES + 1) in result.error
