import math

import pytest

from docintel.summarization.chunker import split_text


class TestSplitText:
    def test_empty_text_yields_no_chunks(self) -> None:
        assert split_text("", 10, 2) == []

    def test_text_within_limit_is_one_chunk(self) -> None:
        chunks = split_text("a" * 8000, 8000, 500)
        assert len(chunks) == 1
        assert chunks[0].start_offset == 0
        assert chunks[0].end_offset == 8000

    def test_one_char_over_limit_gives_two_chunks(self) -> None:
        text = "a" * 8001
        chunks = split_text(text, 8000, 500)
        assert len(chunks) == 2
        assert chunks[1].start_offset == 7500
        assert chunks[1].end_offset == 8001
        assert chunks[1].text == text[7500:]

    def test_chunks_overlap_by_configured_amount(self) -> None:
        chunks = split_text("abcdefghijklmnopqrstuvwxyz", 10, 3)
        for previous, current in zip(chunks, chunks[1:]):
            assert previous.end_offset - current.start_offset == 3
            assert previous.text[-3:] == current.text[:3]

    @pytest.mark.parametrize(
        ("length", "max_chars", "overlap"),
        [(1, 1, 0), (25, 10, 0), (26, 10, 3), (100, 7, 6), (999, 50, 10)],
    )
    def test_covers_every_character(self, length: int, max_chars: int, overlap: int) -> None:
        text = "".join(chr(97 + i % 26) for i in range(length))
        chunks = split_text(text, max_chars, overlap)
        covered: set[int] = set()
        for chunk in chunks:
            assert len(chunk.text) <= max_chars
            assert chunk.text == text[chunk.start_offset:chunk.end_offset]
            covered.update(range(chunk.start_offset, chunk.end_offset))
        assert covered == set(range(length))
        assert len(chunks) <= math.ceil(length / (max_chars - overlap))

    def test_rejects_non_positive_max_chars(self) -> None:
        with pytest.raises(ValueError, match="max_chars"):
            split_text("abc", 0, 0)

    @pytest.mark.parametrize("overlap", [-1, 10, 11])
    def test_rejects_overlap_outside_range(self, overlap: int) -> None:
        with pytest.raises(ValueError, match="overlap"):
            split_text("abc", 10, overlap)
