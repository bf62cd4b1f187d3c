"""Last-resort summary built from the document text itself."""

import re
from collections.abc import Mapping

from docintel.extraction.fields import format_amount

SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")
MIN_SENTENCE_CHARS = 20
MAX_SENTENCES = 3
PREVIEW_CHARS = 200


def heuristic_summary(
    text: str,
    fields: Mapping[str, object] | None = None,
    doc_type: str = "document",
) -> str:
    """First three meaningful sentences plus issuer, amount and date hints."""
    if not text or not text.strip():
        return f"This is a {doc_type or 'document'}. No text content was extracted."

    fields = fields or {}
    sentences = [
        sentence.strip()
        for sentence in SENTENCE_BOUNDARY.split(text)
        if len(sentence.strip()) > MIN_SENTENCE_CHARS
    ][:MAX_SENTENCES]

    if not sentences:
        preview = text[:PREVIEW_CHARS]
        return preview + ("..." if len(text) > PREVIEW_CHARS else "")

    summary = " ".join(sentences)
    if fields.get("issuer"):
        summary += f" Issuer: {fields['issuer']}."
    amount = format_amount(fields.get("amount_due"))
    if amount:
        summary += f" Amount: {amount}."
    if fields.get("invoice_date"):
        summary += f" Date: {fields['invoice_date']}."
    return summary
