import matplotlib.pyplot as plt
import pytest

from visualization.animator import FramePlayer, color_to_mpl
from visualization.records import Color
from visualization.wire import parse_stream

STREAM = (
    "# (-1,-1) (11,11)\n"
    "p [(0,0),(10,0)] {{}}\n"
    "p [(10,0),(5,8)] {{}}\n"
    "r (-0.1,-0.1) (0.1,0.1) {{0}}\n"
    "rf (4,4) (6,6) named(green) {{zone}}\n"
    "# (-1,-1) (11,11)\n"
    "p [(0,0),(10,0)] {{}}\n"
)


@pytest.fixture
def player():
    p = FramePlayer(parse_stream(STREAM))
    yield p
    plt.close(p.fig)


def test_draw_frame_creates_artists_per_element(player):
    frame = next(player.frames)
    artists = player.draw_frame(frame)
    # 2 lines, 2 patches and the labels "0" and "zone"
    assert len(artists) == 6
    assert player.ax.get_xlim() == (-1.0, 11.0)
    assert player.frames_shown == 1


def test_next_frame_replaces_previous_artists(player):
    player._update(0)
    artists = player._update(1)
    assert len(artists) == 1
    assert len(player.ax.lines) == 1
    assert len(player.ax.patches) == 0


def test_update_after_last_frame_draws_nothing(player):
    player._update(0)
    player._update(1)
    assert player._update(2) == []
    assert player.frames_shown == 2


def test_color_mapping():
    assert color_to_mpl(Color.tag(12)) == "C2"
    assert color_to_mpl(Color.none()) == "none"
    assert color_to_mpl(Color.named("green")) == "green"
    assert color_to_mpl(Color.named("nosuchcolor")) == "black"
    assert len(color_to_mpl(Color.turbo(0.5))) == 4
