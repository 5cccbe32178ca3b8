import pytest

from question_bank.errors import InvalidPageRangeError, PDFProcessingError
from question_bank.extraction import (
    TextFragment,
    build_outline,
    extract_outline,
    flatten_titles,
    is_heading,
)


def frag(text, size=11.0, page=1):
    return TextFragment(text=text, size=size, page=page)


@pytest.mark.parametrize("text", ["1. Overview", "3) Methods", "12、結論", "一、緒論", "第二章 碳盤查"])
def test_numbered_fragments_are_headings(text):
    assert is_heading(frag(text))


def test_large_font_is_heading():
    assert is_heading(frag("Greenhouse Gas Protocol", size=18))


def test_body_text_is_not_heading():
    assert not is_heading(frag("Scope 2 covers purchased electricity.", size=11))


def test_long_numbered_text_is_not_heading():
    assert not is_heading(frag("1. " + "x" * 100))


def test_large_bare_page_number_is_not_heading():
    assert not is_heading(frag("12", size=18))
    outline = build_outline([frag("12", size=18, page=3)], pages=[3])
    assert [item.title for item in outline] == ["Page 3"]


def test_subitems_nest_under_heading_on_same_page():
    outline = build_outline([
        frag("1. Overview"),
        frag("Key terms"),
        frag("Boundaries"),
        frag("1.1 Organisational scope"),
        frag("Chapter Two", size=20, page=2),
        frag("42", page=2),
    ])
    assert [item.title for item in outline] == ["1. Overview", "Chapter Two"]
    first = outline[0]
    assert [c.title for c in first.children] == ["Key terms", "Boundaries", "1.1 Organisational scope"]
    assert [c.id for c in first.children] == ["1.1", "1.2", "1.3"]
    assert all(c.level == 2 for c in first.children)
    # bare page numbers are not sub-items
    assert outline[1].children == []


def test_pages_without_heading_get_page_entry():
    outline = build_outline([frag("plain text", page=2)], pages=[1, 2])
    assert [(item.title, item.page) for item in outline] == [("Page 1", 1), ("Page 2", 2)]
    assert outline[0].children == []


def test_flatten_titles_with_selection():
    outline = build_outline([frag("1. Overview"), frag("Key terms"), frag("2. Methods")])
    assert flatten_titles(outline) == ["1. Overview", "Key terms", "2. Methods"]
    assert flatten_titles(outline, ["1.1", "2"]) == ["Key terms", "2. Methods"]


def test_extract_outline_from_pdf(text_pdf):
    outline = extract_outline(text_pdf)
    assert [item.title for item in outline] == [
        "Introduction to Carbon Accounting",
        "2. Inventory Methods",
        "Page 3",
    ]
    assert [c.title for c in outline[0].children] == ["Scope definitions"]
    assert [c.title for c in outline[1].children] == ["2.1 Data collection"]


def test_extract_outline_respects_page_range(text_pdf):
    outline = extract_outline(text_pdf, page_range="2, 9")
    assert [item.title for item in outline] == ["2. Inventory Methods"]


def test_extract_outline_rejects_empty_range(text_pdf):
    with pytest.raises(InvalidPageRangeError):
        extract_outline(text_pdf, page_range="9-1")


def test_garbage_bytes_raise_processing_error():
    with pytest.raises(PDFProcessingError):
        extract_outline(b"this is not a pdf")


def test_zero_page_cap_gives_empty_outline(text_pdf):
    assert extract_outline(text_pdf, max_pages=0) == []
