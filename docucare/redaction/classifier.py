"""Line-level PII classifier for recognized page text.

Processing flow:
1. Transliterate each line to Latin-ASCII-lowercase via ICU.
2. Drop characters outside the allow-list and trim.
3. Test the normalized text against a fixed, ordered pattern set.
4. A line matching any pattern contributes its whole bounding box.

Whole lines are redacted rather than sub-spans: a wider black bar costs some
readability, a missed fragment leaks PII.
"""

from __future__ import annotations

import re
from typing import ClassVar

import icu  # type: ignore[import-untyped]

from docucare.logging.logger import Log
from docucare.ocr.models import BoundingBox, RecognizedLine

_MONTHS = (
    "jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec|january|february|"
    "march|april|june|july|august|september|october|november|december"
)


class PIIClassifier:
    """Flags recognized lines that look like patient identifiers."""

    _ICU_TRANSFORM: ClassVar[str] = "Any-Latin; Latin-ASCII; Lower"
    _DISALLOWED_RE: ClassVar[re.Pattern[str]] = re.compile(r"[^a-z0-9@._%+\-:/.,;() ]")

    _PATTERNS: ClassVar[list[tuple[str, str]]] = [
        ("EMAIL", r"[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}"),
        # month/day/year, day/month/year, day/month-name/year
        ("DOB", r"(0?[1-9]|1[012])[- /.](0?[1-9]|[12][0-9]|3[01])[- /.](19|20)?\d\d"),
        ("DOB", r"(0?[1-9]|[12][0-9]|3[01])[- /.](0?[1-9]|1[012])[- /.](19|20)?\d\d"),
        ("DOB", rf"(0?[1-9]|[12][0-9]|3[01])[- /.]({_MONTHS})[- /.](19|20)?\d\d"),
        ("SSN", r"\d{3}[- ]?\d{2}[- ]?\d{4}"),
        ("POLICY_ID", r"(policy|member|insurance|id)[:\s]*[a-z0-9]{6,}"),
        ("NAME", r"\b(mr|ms|mrs|dr|miss|prof)\.?\s+[a-z]+"),
        ("NAME", r"(name|patient name|pat name)[:\s]"),
        ("AGE", r"age\s*[:\-]?\s*\d{1,3}(\s*(years?|yrs?|y))?"),
        ("AGE", r"\d{1,3}\s*(years?|yrs?|y)?\s*age"),
        ("AGE", r"\d{1,3}\s*(years?|yrs?|y)\b"),
        ("GENDER", r":\s*(male|female|m|f)\b"),
        ("GENDER", r"(sex|gender)\s*[:\-]?\s*(male|female|m|f)"),
    ]

    def __init__(self, patterns: list[tuple[str, str]] | None = None) -> None:
        self._transliterator: icu.Transliterator = icu.Transliterator.createInstance(
            self._ICU_TRANSFORM
        )
        self._rules = self._compile(patterns if patterns is not None else self._PATTERNS)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def classify(self, lines: list[RecognizedLine]) -> list[BoundingBox]:
        """Return the boxes of every line containing PII, in input order."""
        boxes = [line.box for line in lines if self.contains_pii(line.text)]
        if boxes:
            Log.debug(f"Flagged {len(boxes)} of {len(lines)} lines for redaction")
        return boxes

    def contains_pii(self, text: str) -> bool:
        normalized = self.normalize(text)
        if not normalized:
            return False
        return any(pattern.search(normalized) for _, pattern in self._rules)

    def normalize(self, text: str) -> str:
        transliterated = self._transliterator.transliterate(text)
        return self._DISALLOWED_RE.sub("", transliterated.lower()).strip()

    # ------------------------------------------------------------------
    # Pattern compilation
    # ------------------------------------------------------------------

    @staticmethod
    def _compile(patterns: list[tuple[str, str]]) -> list[tuple[str, re.Pattern[str]]]:
        rules: list[tuple[str, re.Pattern[str]]] = []
        for entity_type, source in patterns:
            try:
                rules.append((entity_type, re.compile(source, re.IGNORECASE)))
            except re.error as exc:
                Log.error(f"Skipping malformed {entity_type} pattern {source!r}: {exc}")
        return rules
