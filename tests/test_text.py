import pytest

from question_bank.errors import InsufficientContentError, InvalidPageRangeError
from question_bank.extraction import extract_full_text, extract_page_content, normalize_whitespace


def test_normalize_whitespace():
    assert normalize_whitespace("  a\n\nb \t c  ") == "a b c"


def test_full_text_concatenates_pages(text_pdf):
    text = extract_full_text(text_pdf)
    assert "Introduction to Carbon Accounting" in text
    assert "2. Inventory Methods" in text
    assert "\n\n" in text
    assert "  " not in text


def test_full_text_respects_page_cap(text_pdf):
    text = extract_full_text(text_pdf, max_pages=1)
    assert "Inventory Methods" not in text


def test_full_text_too_short_raises(blank_pdf):
    with pytest.raises(InsufficientContentError) as info:
        extract_full_text(blank_pdf)
    assert info.value.length < 50
    assert info.value.minimum == 50


def test_page_content_prefixes_and_skips(text_pdf):
    content = extract_page_content(text_pdf, "2-3, 9")
    assert content.pages == [2, 3]
    assert content.skipped == [9]
    assert content.text.startswith("Page 2: 2. Inventory Methods")
    assert "Page 3: " in content.text
    assert "Introduction" not in content.text


def test_page_content_cap(text_pdf):
    content = extract_page_content(text_pdf, "1-3", max_pages=1)
    assert content.pages == [1]


def test_page_content_invalid_range(text_pdf):
    with pytest.raises(InvalidPageRangeError):
        extract_page_content(text_pdf, "five")


def test_page_content_skips_near_empty_pages(blank_pdf):
    with pytest.raises(InsufficientContentError):
        extract_page_content(blank_pdf, "1-2")


def test_zero_page_cap_reads_nothing(text_pdf):
    assert extract_full_text(text_pdf, max_pages=0, min_chars=0) == ""
    content = extract_page_content(text_pdf, "1-3", max_pages=0, min_chars=0)
    assert content.pages == [] and content.text == ""
