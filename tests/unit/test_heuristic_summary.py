from docintel.summarization.heuristic import heuristic_summary

TEXT = (
    "Acme Utilities sent the March electricity bill. "
    "The total usage was higher than last month. "
    "Payment is due within fifteen days of the statement. "
    "Late payments incur a small fee. Thanks!"
)


class TestHeuristicSummary:
    def test_first_three_meaningful_sentences(self) -> None:
        assert heuristic_summary(TEXT) == (
            "Acme Utilities sent the March electricity bill. "
            "The total usage was higher than last month. "
            "Payment is due within fifteen days of the statement."
        )

    def test_appends_field_hints(self) -> None:
        fields = {
            "issuer": "Acme",
            "amount_due": {"value": 80.0, "currency": "USD"},
            "invoice_date": "2024-03-01",
        }
        summary = heuristic_summary(TEXT, fields)
        assert summary.endswith(" Issuer: Acme. Amount: USD 80.0. Date: 2024-03-01.")

    def test_short_fragments_fall_back_to_preview(self) -> None:
        text = "Hi. Ok. " * 40
        summary = heuristic_summary(text)
        assert summary == text[:200] + "..."

    def test_short_text_preview_without_ellipsis(self) -> None:
        assert heuristic_summary("Total: 5") == "Total: 5"

    def test_empty_text(self) -> None:
        assert heuristic_summary("   ", doc_type="invoice") == (
            "This is a invoice. No text content was extracted."
        )
