import io

import pdfplumber

from docintel.pdf.base import BasePdfExtractor, PdfText
from docintel.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfExtractor):
    engine = "pdfplumber"

    def extract(self, pdf_bytes: bytes) -> PdfText:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = pdf.pages[: self._max_pages] if self._max_pages else pdf.pages
                return PdfText(pages=[(page.extract_text() or "").strip() for page in pages])
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber could not read the PDF: {exc}") from exc
