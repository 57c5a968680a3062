import pytest

from core.errors import ProtocolError
from visualization.records import (
    Color, FilledRectRecord, Frame, FrameHeader, PathRecord, Pos, RectRecord,
)
from visualization.wire import parse_record, parse_stream, serialize, serialize_frame


def test_header_format():
    header = FrameHeader(Pos(-1, -1), Pos(21, 21))
    assert serialize(header) == "# (-1.000000,-1.000000) (21.000000,21.000000)"


def test_path_format():
    path = PathRecord((Pos(0, 0), Pos(1.5, 2.25)))
    assert serialize(path) == "p [(0.000000,0.000000),(1.500000,2.250000)] {{}}"


def test_rect_format():
    rect = RectRecord(Pos(4.9, 4.9), Pos(5.1, 5.1), label="3")
    assert serialize(rect) == "r (4.900000,4.900000) (5.100000,5.100000) {{3}}"


def test_filled_rect_format():
    rect = FilledRectRecord(Pos(0, 0), Pos(1, 1), Color.tag(4), label="cell")
    assert serialize(rect) == "rf (0.000000,0.000000) (1.000000,1.000000) tag(4) {{cell}}"


def test_label_can_be_omitted():
    assert serialize(PathRecord((Pos(0, 0),), label=None)) == "p [(0.000000,0.000000)]"


def test_negative_and_large_values_stay_fixed_point():
    path = PathRecord((Pos(-0.5, 1e7),))
    assert serialize(path) == "p [(-0.500000,10000000.000000)] {{}}"


def test_frame_round_trip():
    frame = Frame(
        FrameHeader(Pos(-1, -1), Pos(21, 21)),
        [
            PathRecord((Pos(0, 0), Pos(1, 1))),
            PathRecord((Pos(1, 1), Pos(2, 0))),
            PathRecord((Pos(2, 0), Pos(0, 0))),
            PathRecord((Pos(0, 0), Pos(1, 1), Pos(2, 0), Pos(0, 0)), label="loop"),
            RectRecord(Pos(4.9, 4.9), Pos(5.1, 5.1), label="3"),
            RectRecord(Pos(0.9, 0.9), Pos(1.1, 1.1), label="1"),
        ],
    )
    text = serialize_frame(frame)
    assert text.count("\n") == 7

    frames = parse_stream(text)
    assert frames == [frame]


def test_multiple_frames_are_split_at_headers():
    text = (
        "# (0,0) (10,10)\n"
        "p [(0,0),(1,1)] {{}}\n"
        "# (0,0) (10,10)\n"
        "r (1,1) (2,2) {{a}}\n"
        "r (3,3) (4,4) {{b}}\n"
    )
    frames = parse_stream(text)
    assert len(frames) == 2
    assert len(frames[0].paths()) == 1
    assert [r.label for r in frames[1].rects()] == ["a", "b"]


def test_parser_accepts_loose_spacing():
    record = parse_record("p [ ( 1 , 2 ) , (3.5,-4e1) ]   {{edge}}  ")
    assert record == PathRecord((Pos(1, 2), Pos(3.5, -40.0)), "edge")

    record = parse_record("r(100, 100) (200, 200) {{rect}}")
    assert record == RectRecord(Pos(100, 100), Pos(200, 200), "rect")


def test_missing_label_parses_as_none():
    assert parse_record("r (0,0) (1,1)") == RectRecord(Pos(0, 0), Pos(1, 1), None)


def test_label_ends_at_first_closing_braces():
    record = parse_record("r (0,0) (1,1) {{a b}}")
    assert record.label == "a b"
    with pytest.raises(ProtocolError):
        parse_record("r (0,0) (1,1) {{a}} b}}")


@pytest.mark.parametrize("text, color", [
    ("tag(7)", Color.tag(7)),
    ("tag ( 7 )", Color.tag(7)),
    ("none()", Color.none()),
    ("named(red)", Color.named("red")),
    ("turbo(0.25)", Color.turbo(0.25)),
])
def test_filled_rect_colors(text, color):
    record = parse_record(f"rf (0,0) (1,1) {text} {{{{x}}}}")
    assert record == FilledRectRecord(Pos(0, 0), Pos(1, 1), color, "x")


def test_filled_rect_serializes_back():
    record = FilledRectRecord(Pos(0, 0), Pos(2, 2), Color.turbo(0.5), "heat")
    assert parse_record(serialize(record)) == record


@pytest.mark.parametrize("line", [
    "q (0,0)",
    "# (0,0)",
    "p (0,0),(1,1)",
    "r (0,0) (1,x)",
    "rf (0,0) (1,1) purple {{x}}",
    "r (0,0) (1,1) {{unterminated",
])
def test_malformed_lines_raise(line):
    with pytest.raises(ProtocolError):
        parse_record(line)


def test_element_before_header_raises_with_line_number():
    with pytest.raises(ProtocolError) as info:
        parse_stream("\np [(0,0),(1,1)] {{}}\n")
    assert info.value.line_number == 2


def test_empty_stream_has_no_frames():
    assert parse_stream("") == []


@pytest.mark.parametrize("label", ["a}}b", "ends}", "two\nlines"])
def test_labels_that_cannot_be_parsed_back_are_rejected(label):
    with pytest.raises(ProtocolError):
        serialize(RectRecord(Pos(0, 0), Pos(1, 1), label=label))
