from dataclasses import dataclass


@dataclass(frozen=True)
class Chunk:
    """A contiguous, possibly overlapping slice of a larger text."""

    start_offset: int
    end_offset: int
    text: str


def split_text(text: str, max_chars: int, overlap: int) -> list[Chunk]:
    """Split text into windows of at most max_chars sharing `overlap` chars.

    Window k starts at k * (max_chars - overlap), so each chunk repeats the
    last `overlap` characters of the previous one. Splitting stops at the
    first window that reaches the end of the text.

    Raises:
        ValueError: if max_chars <= 0 or overlap is outside [0, max_chars).
    """
    if max_chars <= 0:
        raise ValueError(f"max_chars must be positive, got {max_chars}")
    if overlap < 0 or overlap >= max_chars:
        raise ValueError(f"overlap must be in [0, {max_chars}), got {overlap}")

    chunks: list[Chunk] = []
    step = max_chars - overlap
    start = 0
    while start < len(text):
        end = min(len(text), start + max_chars)
        chunks.append(Chunk(start_offset=start, end_offset=end, text=text[start:end]))
        if end == len(text):
            break
        start += step
    return chunks
