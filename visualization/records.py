# --------------------------------------------------------
# File: visualization/records.py
# Record types of the line-oriented frame stream.
# --------------------------------------------------------

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional, Tuple, Union


class RecordKind(Enum):
    """Closed set of record kinds, keyed by their line prefix."""
    FRAME = "#"
    PATH = "p"
    RECT = "r"
    FILLED_RECT = "rf"


class ColorKind(Enum):
    """Closed set of color styles understood by frame viewers."""
    TAG = "tag"
    NONE = "none"
    NAMED = "named"
    TURBO = "turbo"


@dataclass(frozen=True)
class Pos:
    x: float
    y: float


@dataclass(frozen=True)
class Color:
    """
    Tagged color value.

    The payload depends on ``kind``: an integer index for ``TAG``, a color
    name for ``NAMED``, a position in ``[0, 1]`` for ``TURBO`` and nothing
    for ``NONE``.
    """
    kind: ColorKind
    value: Union[int, float, str, None] = None

    @classmethod
    def tag(cls, index: int) -> "Color":
        return cls(ColorKind.TAG, int(index))

    @classmethod
    def none(cls) -> "Color":
        return cls(ColorKind.NONE)

    @classmethod
    def named(cls, name: str) -> "Color":
        return cls(ColorKind.NAMED, name)

    @classmethod
    def turbo(cls, t: float) -> "Color":
        return cls(ColorKind.TURBO, float(t))


@dataclass(frozen=True)
class FrameHeader:
    """Starts a new frame and sets its bounding box."""
    lower: Pos
    upper: Pos
    kind: ClassVar[RecordKind] = RecordKind.FRAME


@dataclass(frozen=True)
class PathRecord:
    """Polyline through ``points``; the tour emits one 2-point path per edge."""
    points: Tuple[Pos, ...]
    label: Optional[str] = ""
    kind: ClassVar[RecordKind] = RecordKind.PATH


@dataclass(frozen=True)
class RectRecord:
    """Outlined rectangle spanned by two corners."""
    p1: Pos
    p2: Pos
    label: Optional[str] = ""
    kind: ClassVar[RecordKind] = RecordKind.RECT


@dataclass(frozen=True)
class FilledRectRecord:
    """Borderless rectangle filled with ``color``."""
    p1: Pos
    p2: Pos
    color: Color
    label: Optional[str] = ""
    kind: ClassVar[RecordKind] = RecordKind.FILLED_RECT


Element = Union[PathRecord, RectRecord, FilledRectRecord]
Record = Union[FrameHeader, PathRecord, RectRecord, FilledRectRecord]


@dataclass
class Frame:
    """A header plus the elements drawn inside its bounding box."""
    header: FrameHeader
    elements: List[Element] = field(default_factory=list)

    def records(self) -> List[Record]:
        return [self.header, *self.elements]

    def paths(self) -> List[PathRecord]:
        return [e for e in self.elements if e.kind is RecordKind.PATH]

    def rects(self) -> List[RectRecord]:
        return [e for e in self.elements if e.kind is RecordKind.RECT]
