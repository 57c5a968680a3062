# --------------------------------------------------------
# File: visualization/animator.py
# Replay a frame stream as a matplotlib animation.
# --------------------------------------------------------

import logging
import matplotlib
import matplotlib.pyplot as plt
import matplotlib.animation as animation
from matplotlib.colors import is_color_like
from matplotlib.patches import Rectangle
from typing import Iterable, List, Optional
from visualization.records import Color, ColorKind, Frame, RecordKind

logger = logging.getLogger(__name__)


def color_to_mpl(color: Color):
    """
    Maps a stream color to something matplotlib accepts.

    Tags cycle through the default property cycle, unknown names fall back
    to black.
    """
    if color.kind is ColorKind.TAG:
        return f"C{color.value % 10}"
    if color.kind is ColorKind.NONE:
        return "none"
    if color.kind is ColorKind.NAMED:
        return color.value if is_color_like(color.value) else "black"
    if color.kind is ColorKind.TURBO:
        t = min(max(float(color.value), 0.0), 1.0)
        return matplotlib.colormaps["turbo"](t)
    raise ValueError(f"Unknown color kind: {color.kind}")


class FramePlayer:
    """
    Plays parsed frames one after another in a matplotlib window.

    Attributes:
        frames (Iterator[Frame]): Source of frames, consumed lazily.
        interval (int): Delay between frames in milliseconds.
        fig (plt.Figure): The matplotlib figure object.
        ax (plt.Axes): The matplotlib axes object.
        dynamic_artists (List[plt.Artist]): Artists of the frame on screen,
            removed before the next frame is drawn.
        frames_shown (int): Number of frames drawn so far.
    """

    def __init__(self, frames: Iterable[Frame], interval: int = 50,
                 show_labels: bool = True) -> None:
        """
        Args:
            frames: Frames to play, e.g. from :func:`visualization.wire.iter_frames`.
            interval: Delay between frames in milliseconds.
            show_labels: Whether to print marker labels next to each marker.
        """
        self.frames = iter(frames)
        self.interval = interval
        self.show_labels = show_labels

        self.fig, self.ax = plt.subplots(figsize=(10, 10))
        self.dynamic_artists = []
        self.frames_shown = 0

    def _init_plot(self):
        """Prepares empty axes; called once before the first frame."""
        self.ax.clear()
        self.ax.set_aspect('equal', adjustable='box')
        self.ax.set_title("Waiting for frames...")
        return []

    def draw_frame(self, frame: Frame) -> List:
        """
        Replaces the artists on screen with those of ``frame``.

        Args:
            frame: The frame to draw.

        Returns:
            List[plt.Artist]: The artists created for this frame.
        """
        for artist in self.dynamic_artists:
            artist.remove()
        self.dynamic_artists = []

        lower, upper = frame.header.lower, frame.header.upper
        self.ax.set_xlim(min(lower.x, upper.x), max(lower.x, upper.x))
        self.ax.set_ylim(min(lower.y, upper.y), max(lower.y, upper.y))

        for elem in frame.elements:
            if elem.kind is RecordKind.PATH:
                if not elem.points:
                    continue
                xs = [p.x for p in elem.points]
                ys = [p.y for p in elem.points]
                ln, = self.ax.plot(xs, ys, 'b-', lw=1.0, zorder=1)
                self.dynamic_artists.append(ln)
            else:
                x0, x1 = sorted((elem.p1.x, elem.p2.x))
                y0, y1 = sorted((elem.p1.y, elem.p2.y))
                if elem.kind is RecordKind.FILLED_RECT:
                    patch = Rectangle((x0, y0), x1 - x0, y1 - y0,
                                      facecolor=color_to_mpl(elem.color), edgecolor='none', zorder=2)
                else:
                    patch = Rectangle((x0, y0), x1 - x0, y1 - y0,
                                      fill=False, edgecolor='red', lw=1.0, zorder=3)
                self.ax.add_patch(patch)
                self.dynamic_artists.append(patch)

            if self.show_labels and elem.label:
                tx = self._draw_label(elem)
                self.dynamic_artists.append(tx)

        self.frames_shown += 1
        self.ax.set_title(f"2-Opt Tour | Frame {self.frames_shown}")
        return self.dynamic_artists

    def _draw_label(self, elem):
        if elem.kind is RecordKind.PATH:
            anchor = elem.points[len(elem.points) // 2]
            x, y = anchor.x, anchor.y
        else:
            x = max(elem.p1.x, elem.p2.x)
            y = max(elem.p1.y, elem.p2.y)
        return self.ax.text(x, y, elem.label, fontsize=8, ha='left', va='bottom')

    def _update(self, frame_index):
        """
        Draws the next frame from the source.

        Args:
            frame_index: The current frame index (passed by FuncAnimation).
        """
        try:
            frame = next(self.frames)
        except StopIteration:
            return []
        return self.draw_frame(frame)

    def run(self, save_path: Optional[str] = None, save_count: int = 500) -> None:
        """
        Starts the animation loop.

        Args:
            save_path: If given, the animation is written to this file
                (format chosen by extension) instead of shown.
            save_count: Max frames to cache when saving.
        """
        anim = animation.FuncAnimation(
            self.fig,
            self._update,
            init_func=self._init_plot,
            interval=self.interval,
            blit=False,
            repeat=False,
            save_count=save_count,
            cache_frame_data=False,
        )
        if save_path:
            logger.info("Writing animation to %s", save_path)
            anim.save(save_path)
        else:
            plt.show()
