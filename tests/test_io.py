"""Tests for syllabus loading and guide output."""
import json

import fitz
import pytest

from studyguide.utils.io import load_syllabus, write_json
from studyguide.utils.pdf_parser import extract_text_from_pdf

LINE = "CHEM 210 Organic Chemistry - Week 1: Bonding and molecular structure"


def _make_pdf(path, pages):
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text)
    doc.save(str(path))
    doc.close()


def test_extract_text_from_pdf(tmp_path):
    pdf = tmp_path / "chem.pdf"
    _make_pdf(pdf, [LINE, "Week 2: Stereochemistry"])

    extracted = extract_text_from_pdf(str(pdf))

    assert extracted["page_count"] == 2
    assert extracted["source_name"] == "chem.pdf"
    assert "Bonding and molecular structure" in extracted["text"]
    assert "Stereochemistry" in extracted["text"]


def test_load_pdf_rejects_blank_document(tmp_path):
    pdf = tmp_path / "scan.pdf"
    _make_pdf(pdf, [""])

    with pytest.raises(ValueError, match="scanned"):
        load_syllabus(str(pdf))


def test_load_text_file(tmp_path):
    txt = tmp_path / "syllabus.txt"
    txt.write_text(LINE, encoding="utf-8")

    loaded = load_syllabus(str(txt))

    assert loaded["text"] == LINE
    assert loaded["source_name"] == "syllabus.txt"


def test_load_missing_and_unsupported(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_syllabus(str(tmp_path / "nope.pdf"))

    other = tmp_path / "syllabus.docx"
    other.write_bytes(b"x")
    with pytest.raises(ValueError, match="Unsupported"):
        load_syllabus(str(other))


def test_write_json_creates_parents(tmp_path):
    out = tmp_path / "guides" / "bio.json"
    write_json(str(out), {"courseName": "Biología"})

    assert json.loads(out.read_text(encoding="utf-8")) == {"courseName": "Biología"}
