import io

import docx

from docintel.extraction.exceptions import OfficeExtractionError

DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class DocxTextExtractor:
    """Reads paragraph and table text from .docx bytes using python-docx."""

    def extract(self, content: bytes) -> str:
        try:
            document = docx.Document(io.BytesIO(content))
        except Exception as exc:
            raise OfficeExtractionError(f"Failed to parse DOCX file: {exc}") from exc

        lines = [para.text for para in document.paragraphs if para.text.strip()]
        for table in document.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    lines.append(" | ".join(cells))
        return "\n".join(lines).strip()
