from dataclasses import dataclass


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned rectangle. Origin and units depend on the producer."""

    x: float
    y: float
    width: float
    height: float

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True)
class TextObservation:
    """Raw engine output: box normalized to [0, 1], origin bottom-left."""

    text: str
    box: BoundingBox


@dataclass(frozen=True)
class RecognizedLine:
    """A recognized text line with its box in pixels, origin top-left."""

    text: str
    box: BoundingBox
