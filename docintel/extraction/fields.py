from docintel.extraction.models import ExtractedField, ExtractionResult

# (source key, output key, confidence, redacted)
PROVIDER_FIELDS: tuple[tuple[str, str, float, bool], ...] = (
    ("issuer", "issuer", 0.95, False),
    ("account_number", "account_number", 0.90, True),
    ("invoice_date", "date", 0.99, False),
    ("due_date", "due_date", 0.96, False),
    ("amount_due", "amount_due", 0.97, False),
    ("line_items", "line_items", 0.92, False),
    ("recipient_name", "recipient_name", 0.90, False),
    ("recipient_email", "recipient_email", 0.88, False),
    ("phone", "phone", 0.75, False),
)

LOCAL_FIELD_CONFIDENCE: dict[str, float] = {
    "recipient_email": 0.7,
    "invoice_date": 0.6,
    "amount_due": 0.6,
    "phone": 0.75,
}


def to_field_list(result: ExtractionResult) -> list[ExtractedField]:
    """Project an extraction result onto the flat field list callers display."""
    fields: list[ExtractedField] = []
    for source_key, key, confidence, redacted in PROVIDER_FIELDS:
        value = _display_value(source_key, result.fields.get(source_key))
        if not value:
            continue
        if result.local:
            if source_key not in LOCAL_FIELD_CONFIDENCE:
                continue
            confidence = LOCAL_FIELD_CONFIDENCE[source_key]
        fields.append(
            ExtractedField(key=key, value=value, confidence=confidence, is_redacted=redacted)
        )
    return fields


def format_amount(amount: object) -> str:
    if isinstance(amount, dict):
        value = amount.get("value")
        if value is None:
            return ""
        return f"{amount.get('currency') or ''} {value}".strip()
    if amount is None:
        return ""
    return str(amount)


def _display_value(key: str, value: object) -> str:
    if value is None or value == "":
        return ""
    if key == "amount_due":
        return format_amount(value)
    if key == "line_items":
        if isinstance(value, list) and value:
            return f"{len(value)} items"
        return ""
    if isinstance(value, (dict, list)):
        return ""
    return str(value)
