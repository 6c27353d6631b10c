from pathlib import Path

from docucare.summarization.exceptions import SummarizationError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"

SUMMARY_PROMPT = "summary_prompt.txt"
QUESTION_PROMPT = "question_prompt.txt"


def load_prompt(name: str, path: Path | None = None) -> str:
    """Load a system instruction from a file.

    Args:
        name: File name inside the bundled prompts directory.
        path: Explicit file path, overriding *name*.

    Returns:
        The instruction text, stripped.

    Raises:
        SummarizationError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / name
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise SummarizationError(f"Failed to load prompt: {exc}") from exc
