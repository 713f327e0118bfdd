"""Draw instructions produced by the layout engine.

Coordinates are millimetres from the top-left corner of the page with ``y``
growing downward. Text ``y`` is the baseline. Renderers translate these into
their own drawing calls.
"""

from dataclasses import dataclass, field
from typing import Literal, Optional, Union

Align = Literal["left", "right", "center"]
Color = tuple[int, int, int]

BLACK: Color = (0, 0, 0)


@dataclass(frozen=True)
class Text:
    """Place text anchored at ``x`` according to ``align``."""

    x: float
    y: float
    text: str
    size: float
    bold: bool = False
    align: Align = "left"
    color: Color = BLACK
    ref: Optional[str] = None


@dataclass(frozen=True)
class Line:
    """Draw a straight rule."""

    x1: float
    y1: float
    x2: float
    y2: float
    width: float = 0.2


@dataclass(frozen=True)
class Rect:
    """Fill a rectangle."""

    x: float
    y: float
    width: float
    height: float
    fill: Color = (240, 240, 240)


Instruction = Union[Text, Line, Rect]


@dataclass(frozen=True)
class Page:
    """One page of draw instructions, in drawing order."""

    number: int
    instructions: tuple[Instruction, ...] = field(default_factory=tuple)

    def texts(self) -> list[Text]:
        """Text instructions on this page."""
        return [i for i in self.instructions if isinstance(i, Text)]
