import pytest

from conftest import make_pdf
from resume_tailor.services.pdf_service import extract_pdf_text
from resume_tailor.utils.errors import UnreadablePdf


def test_extracts_text_from_valid_pdf(resume_pdf: bytes) -> None:
    text = extract_pdf_text(resume_pdf)
    assert "John Doe" in text
    assert "Python" in text


def test_multi_line_pdf_keeps_every_line() -> None:
    pdf = make_pdf("Jane Roe", "Data Engineer", "Skills: SQL, Spark")
    text = extract_pdf_text(pdf)
    for expected in ("Jane Roe", "Data Engineer", "Spark"):
        assert expected in text


@pytest.mark.parametrize(
    "payload",
    [
        b"this is not a pdf at all",
        b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog",
        b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR",
    ],
)
def test_non_pdf_buffer_is_unreadable(payload: bytes) -> None:
    with pytest.raises(UnreadablePdf):
        extract_pdf_text(payload)


def test_empty_buffer_is_unreadable() -> None:
    with pytest.raises(UnreadablePdf):
        extract_pdf_text(b"")


def test_pdf_without_text_is_unreadable() -> None:
    with pytest.raises(UnreadablePdf) as exc_info:
        extract_pdf_text(make_pdf())
    assert "scanned image" in exc_info.value.message
