"""Regex field extraction for text that never reaches a provider."""

import re

EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
DATE_PATTERN = re.compile(r"\b(\d{4}[-/]\d{1,2}[-/]\d{1,2}|\d{1,2}[-/]\d{1,2}[-/]\d{4})\b")
AMOUNT_PATTERN = re.compile(
    r"(?P<currency>USD|INR|EUR|GBP|₹|\$|€|£)\s*(?P<value>\d[\d,]*(?:\.\d+)?)",
    re.IGNORECASE,
)
PHONE_PATTERN = re.compile(r"(\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")

CURRENCY_CODES = {
    "₹": "INR",
    "$": "USD",
    "€": "EUR",
    "£": "GBP",
}

RESUME_MARKERS = ("resume", "cv")


def is_resume_like(file_name: str, doc_type: str = "") -> bool:
    if doc_type.lower() in RESUME_MARKERS:
        return True
    name = file_name.lower()
    return any(marker in name for marker in RESUME_MARKERS)


def parse_amount(text: str) -> dict[str, object] | None:
    """First currency amount in text as {"value": float, "currency": ISO code}."""
    match = AMOUNT_PATTERN.search(text)
    if match is None:
        return None
    token = match.group("currency")
    currency = CURRENCY_CODES.get(token, token.upper())
    try:
        value = float(match.group("value").replace(",", ""))
    except ValueError:
        return None
    return {"value": value, "currency": currency}


def extract_local_fields(
    text: str,
    *,
    file_name: str = "",
    doc_type: str = "",
) -> dict[str, object]:
    """Pull email, date, amount (and phone for resumes) out of plain text."""
    fields: dict[str, object] = {}

    email = EMAIL_PATTERN.search(text)
    if email:
        fields["recipient_email"] = email.group(0)

    date = DATE_PATTERN.search(text)
    if date:
        fields["invoice_date"] = date.group(0)

    amount = parse_amount(text)
    if amount is not None:
        fields["amount_due"] = amount

    if is_resume_like(file_name, doc_type):
        phone = PHONE_PATTERN.search(text)
        if phone:
            fields["phone"] = phone.group(0).strip()

    return fields
