from pathlib import Path

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "templates"


class PromptLoadError(Exception):
    """Raised when a prompt template cannot be read."""


def load_prompt_template(name: str, path: Path | None = None) -> str:
    """Load a bundled prompt template by name.

    Args:
        name: Template name without extension, e.g. "form_mapper_system".
        path: Explicit file to read instead of the bundled template.

    Returns:
        The raw template text. User templates carry str.format placeholders;
        system templates are used verbatim.

    Raises:
        PromptLoadError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / f"{name}.txt"
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise PromptLoadError(f"Failed to load prompt template '{name}': {exc}") from exc
