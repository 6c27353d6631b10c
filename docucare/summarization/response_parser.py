"""Splits the model's summary output into a title and a body.

The summary instruction asks for a short title on the first line followed by
a blank line and the body. Parsing is positional; output that ignores the
format degrades to a title with an empty body instead of failing.
"""

from docucare.summarization.models import SummaryResult

DEFAULT_TITLE = "Medical Report"


def parse_summary(raw: str) -> SummaryResult:
    lines = raw.splitlines()
    title_idx = _first_non_blank(lines, 0)
    if title_idx is None:
        return SummaryResult(title=DEFAULT_TITLE, body="")

    title = lines[title_idx].strip()
    body_idx = _first_non_blank(lines, title_idx + 1)
    body = "" if body_idx is None else "\n".join(lines[body_idx:]).strip()
    return SummaryResult(title=title, body=body)


def _first_non_blank(lines: list[str], start: int) -> int | None:
    for idx in range(start, len(lines)):
        if lines[idx].strip():
            return idx
    return None
