from dataclasses import dataclass


@dataclass(frozen=True)
class EncodedImage:
    """An image attachment ready for an inline request part."""

    mime_type: str
    data: str  # base64 payload


@dataclass(frozen=True)
class SummaryResult:
    """Title and body split out of the model's summary."""

    title: str
    body: str
