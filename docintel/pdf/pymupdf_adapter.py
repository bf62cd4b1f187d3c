import pymupdf

from docintel.pdf.base import BasePdfExtractor, PdfText
from docintel.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    engine = "pymupdf"

    def extract(self, pdf_bytes: bytes) -> PdfText:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                texts: list[str] = []
                for index, page in enumerate(doc):
                    if self._max_pages and index >= self._max_pages:
                        break
                    texts.append(page.get_text().strip())
            return PdfText(pages=texts)
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf could not read the PDF: {exc}") from exc
