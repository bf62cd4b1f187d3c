import pytest

from docintel.pdf.base import BasePdfExtractor, PdfText
from docintel.pdf.exceptions import PdfExtractionError
from docintel.pdf.pdfplumber_adapter import PdfPlumberAdapter
from docintel.pdf.pymupdf_adapter import PyMuPdfAdapter

ADAPTERS = [PdfPlumberAdapter, PyMuPdfAdapter]


@pytest.mark.parametrize("adapter_cls", ADAPTERS)
class TestPdfAdapters:
    def test_extract_returns_text(
        self, adapter_cls: type[BasePdfExtractor], sample_pdf_bytes: bytes
    ) -> None:
        result = adapter_cls().extract(sample_pdf_bytes)
        assert isinstance(result, PdfText)
        assert "Hello PDF World" in result.text
        assert result.page_count == 1

    def test_extract_multi_page(
        self, adapter_cls: type[BasePdfExtractor], multi_page_pdf_bytes: bytes
    ) -> None:
        result = adapter_cls().extract(multi_page_pdf_bytes)
        assert result.page_count == 2
        assert "Page one content" in result.pages[0]
        assert "Page two content" in result.pages[1]

    def test_max_pages_limits_pages_read(
        self, adapter_cls: type[BasePdfExtractor], multi_page_pdf_bytes: bytes
    ) -> None:
        result = adapter_cls(max_pages=1).extract(multi_page_pdf_bytes)
        assert result.page_count == 1
        assert "Page two content" not in result.text

    def test_empty_pdf_has_no_text(
        self, adapter_cls: type[BasePdfExtractor], empty_pdf_bytes: bytes
    ) -> None:
        result = adapter_cls().extract(empty_pdf_bytes)
        assert result.text == ""

    def test_raises_on_invalid_bytes(self, adapter_cls: type[BasePdfExtractor]) -> None:
        with pytest.raises(PdfExtractionError):
            adapter_cls().extract(b"not a pdf")


class TestPdfText:
    def test_joins_non_empty_pages(self) -> None:
        assert PdfText(pages=["one", "", "three"]).text == "one\nthree"
