import io

from core.point_set import PointSet, UniformSource
from core.tour import Tour
from visualization.records import FrameHeader, Pos
from visualization.renderer import RecordingRenderer, TextRenderer, build_frame
from visualization.wire import parse_stream, serialize_frame


def test_square_frame_bytes(square):
    out = io.StringIO()
    TextRenderer(out).draw(square, Tour([0, 2, 1, 3]))
    lines = out.getvalue().splitlines()

    assert lines[0] == "# (-1.000000,-1.000000) (11.000000,11.000000)"
    assert lines[1:5] == [
        "p [(0.000000,0.000000),(10.000000,10.000000)] {{}}",
        "p [(10.000000,10.000000),(10.000000,0.000000)] {{}}",
        "p [(10.000000,0.000000),(0.000000,10.000000)] {{}}",
        "p [(0.000000,10.000000),(0.000000,0.000000)] {{}}",
    ]
    assert lines[5] == "r (-0.100000,-0.100000) (0.100000,0.100000) {{0}}"
    assert lines[8] == "r (-0.100000,9.900000) (0.100000,10.100000) {{3}}"
    assert len(lines) == 9


def test_generated_points_use_generation_range_for_box():
    points = PointSet.generate(10, 20.0, UniformSource(768))
    frame = build_frame(points, Tour.identity(10))
    assert frame.header == FrameHeader(Pos(-1.0, -1.0), Pos(21.0, 21.0))


def test_frame_lists_edges_then_markers(random_points):
    tour = Tour.identity(len(random_points))
    frame = build_frame(random_points, tour)
    n = len(random_points)

    assert len(frame.paths()) == n
    assert len(frame.rects()) == n
    assert frame.elements[:n] == frame.paths()
    assert [r.label for r in frame.rects()] == [str(i) for i in range(n)]

    last = frame.paths()[-1]
    first_point = random_points[0]
    assert last.points[1] == Pos(first_point.x, first_point.y)


def test_text_output_parses_back_to_built_frame(random_points):
    tour = Tour.identity(len(random_points))
    out = io.StringIO()
    renderer = TextRenderer(out)
    renderer.draw(random_points, tour)
    renderer.draw(random_points, tour)

    frames = parse_stream(out.getvalue())
    assert renderer.frames_written == 2
    assert len(frames) == 2
    built = build_frame(random_points, tour)
    assert frames[0].header == built.header
    assert [r.label for r in frames[0].rects()] == [r.label for r in built.rects()]


def test_recording_renderer_forwards(square):
    out = io.StringIO()
    recorder = RecordingRenderer(forward_to=TextRenderer(out))
    recorder.draw(square, Tour.identity(4))
    assert len(recorder.frames) == 1
    assert out.getvalue() == serialize_frame(recorder.frames[0])
