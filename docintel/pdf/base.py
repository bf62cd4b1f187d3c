from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class PdfText:
    """Text layer of a PDF, one entry per page."""

    pages: list[str]

    @property
    def text(self) -> str:
        return "\n".join(page for page in self.pages if page).strip()

    @property
    def page_count(self) -> int:
        return len(self.pages)


class BasePdfExtractor(ABC):
    """Contract for the local PDF text-layer readers.

    These run without any provider and only see embedded text; scanned
    pages come back empty.
    """

    engine: str = ""

    def __init__(self, max_pages: int | None = None) -> None:
        self._max_pages = max_pages

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> PdfText:
        """Read the text layer from PDF bytes.

        Raises:
            PdfExtractionError: if the bytes are not a readable PDF.
        """
