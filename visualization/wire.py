# --------------------------------------------------------
# File: visualization/wire.py
# Serialize frame records to the text stream and parse the
# stream back into frames.
# --------------------------------------------------------

import re
from typing import Iterable, Iterator, List, Optional
from core.config import COORD_DECIMALS
from core.errors import ProtocolError
from visualization.records import (
    Color, ColorKind, FilledRectRecord, Frame, FrameHeader, PathRecord,
    Pos, Record, RecordKind, RectRecord,
)

_FLOAT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT = re.compile(r"\d+")
_WORD = re.compile(r"[A-Za-z]+")

# *****************************************
# Serialization
# *****************************************
def format_number(value: float) -> str:
    """Fixed-point rendering used for every coordinate in the stream."""
    return f"{float(value):.{COORD_DECIMALS}f}"


def format_pos(pos: Pos) -> str:
    return f"({format_number(pos.x)},{format_number(pos.y)})"


def format_color(color: Color) -> str:
    if color.kind is ColorKind.TAG:
        return f"tag({color.value})"
    if color.kind is ColorKind.NONE:
        return "none()"
    if color.kind is ColorKind.NAMED:
        return f"named({color.value})"
    if color.kind is ColorKind.TURBO:
        return f"turbo({format_number(color.value)})"
    raise ValueError(f"Unknown color kind: {color.kind}")


def _format_label(label: Optional[str]) -> str:
    """
    Renders the optional ``{{label}}`` suffix.

    The parser ends a label at the first ``}}``. A label that would close
    early, or that spans lines, raises :class:`ProtocolError`.
    """
    if label is None:
        return ""
    if "}}" in label or label.endswith("}") or "\n" in label:
        raise ProtocolError(f"Label cannot be serialized: {label!r}")
    return f" {{{{{label}}}}}"


def serialize(record: Record) -> str:
    """
    Renders one record as a single line of text, without the newline.

    Args:
        record: Any frame header or element record.

    Returns:
        The record's line, e.g. ``r (4.900000,4.900000) (5.100000,5.100000) {{3}}``.
    """
    kind = record.kind
    if kind is RecordKind.FRAME:
        return f"# {format_pos(record.lower)} {format_pos(record.upper)}"
    if kind is RecordKind.PATH:
        points = ",".join(format_pos(p) for p in record.points)
        return f"p [{points}]{_format_label(record.label)}"
    if kind is RecordKind.RECT:
        return f"r {format_pos(record.p1)} {format_pos(record.p2)}{_format_label(record.label)}"
    if kind is RecordKind.FILLED_RECT:
        return (f"rf {format_pos(record.p1)} {format_pos(record.p2)} "
                f"{format_color(record.color)}{_format_label(record.label)}")
    raise ValueError(f"Unknown record kind: {kind}")


def serialize_frame(frame: Frame) -> str:
    """Renders a whole frame, one newline-terminated line per record."""
    return "".join(serialize(r) + "\n" for r in frame.records())


# *****************************************
# Parsing
# *****************************************
class _LineScanner:
    """Cursor over one line of the stream with the grammar's token readers."""

    def __init__(self, text: str, line_number: int) -> None:
        self.text = text
        self.line_number = line_number
        self.i = 0

    def fail(self, what: str) -> ProtocolError:
        return ProtocolError(f"expected {what} at column {self.i + 1}: {self.text!r}", self.line_number)

    def skip_space(self) -> None:
        while self.i < len(self.text) and self.text[self.i] in " \t":
            self.i += 1

    def accept(self, token: str) -> bool:
        if self.text.startswith(token, self.i):
            self.i += len(token)
            return True
        return False

    def expect(self, token: str) -> None:
        if not self.accept(token):
            raise self.fail(repr(token))

    def _match(self, pattern: re.Pattern, what: str) -> str:
        m = pattern.match(self.text, self.i)
        if not m:
            raise self.fail(what)
        self.i = m.end()
        return m.group()

    def number(self) -> float:
        return float(self._match(_FLOAT, "a number"))

    def integer(self) -> int:
        return int(self._match(_INT, "an integer"))

    def word(self) -> str:
        return self._match(_WORD, "a color name")

    def pos(self) -> Pos:
        self.expect("(")
        self.skip_space()
        x = self.number()
        self.skip_space()
        self.expect(",")
        self.skip_space()
        y = self.number()
        self.skip_space()
        self.expect(")")
        return Pos(x, y)

    def pos_list(self) -> List[Pos]:
        self.expect("[")
        self.skip_space()
        points = []
        if not self.text.startswith("]", self.i):
            points.append(self.pos())
            while True:
                self.skip_space()
                if not self.accept(","):
                    break
                self.skip_space()
                points.append(self.pos())
        self.skip_space()
        self.expect("]")
        return points

    def color(self) -> Color:
        if self.accept("tag"):
            self.skip_space()
            self.expect("(")
            self.skip_space()
            index = self.integer()
            self.skip_space()
            self.expect(")")
            return Color.tag(index)
        if self.accept("none()"):
            return Color.none()
        if self.accept("named("):
            name = self.word()
            self.expect(")")
            return Color.named(name)
        if self.accept("turbo("):
            self.skip_space()
            t = self.number()
            self.skip_space()
            self.expect(")")
            return Color.turbo(t)
        raise self.fail("a color")

    def label(self) -> Optional[str]:
        if not self.accept("{{"):
            return None
        end = self.text.find("}}", self.i)
        if end < 0:
            raise self.fail("'}}'")
        label = self.text[self.i:end]
        self.i = end + 2
        return label

    def finish(self) -> None:
        self.skip_space()
        if self.i != len(self.text):
            raise self.fail("end of line")


def parse_record(line: str, line_number: int = 0) -> Record:
    """
    Parses a single stream line into its record.

    Raises:
        ProtocolError: If the line does not match any record grammar.
    """
    s = _LineScanner(line.rstrip("\r\n"), line_number)

    if s.accept("# "):
        s.skip_space()
        lower = s.pos()
        s.skip_space()
        upper = s.pos()
        s.finish()
        return FrameHeader(lower, upper)

    if s.accept("p "):
        s.skip_space()
        points = s.pos_list()
        s.skip_space()
        label = s.label()
        s.finish()
        return PathRecord(tuple(points), label)

    if s.accept("rf"):
        s.skip_space()
        p1 = s.pos()
        s.skip_space()
        p2 = s.pos()
        s.skip_space()
        color = s.color()
        s.skip_space()
        label = s.label()
        s.finish()
        return FilledRectRecord(p1, p2, color, label)

    if s.accept("r"):
        s.skip_space()
        p1 = s.pos()
        s.skip_space()
        p2 = s.pos()
        s.skip_space()
        label = s.label()
        s.finish()
        return RectRecord(p1, p2, label)

    raise s.fail("a record ('# ', 'p ', 'r' or 'rf')")


def iter_frames(lines: Iterable[str]) -> Iterator[Frame]:
    """
    Groups stream lines into frames, yielding each one once it is complete.

    Blank lines are skipped. A frame ends at the next header or at the end
    of the input.

    Raises:
        ProtocolError: On a malformed line or an element before any header.
    """
    current: Optional[Frame] = None
    for number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        record = parse_record(line, number)
        if record.kind is RecordKind.FRAME:
            if current is not None:
                yield current
            current = Frame(record)
        elif current is None:
            raise ProtocolError("element appears before the first frame header", number)
        else:
            current.elements.append(record)
    if current is not None:
        yield current


def parse_stream(text: str) -> List[Frame]:
    """Parses a complete stream into its list of frames."""
    return list(iter_frames(text.splitlines()))
