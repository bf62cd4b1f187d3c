from docintel.config.settings import Settings
from docintel.pdf.base import BasePdfExtractor
from docintel.pdf.pdfplumber_adapter import PdfPlumberAdapter
from docintel.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Builds the local text-layer reader named by settings.pdf_engine."""

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        adapter.engine: adapter for adapter in (PdfPlumberAdapter, PyMuPdfAdapter)
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {sorted(cls.ADAPTERS)}"
            )
        return adapter_cls(max_pages=settings.pdf_max_pages or None)
