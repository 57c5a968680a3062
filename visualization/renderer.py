# --------------------------------------------------------
# File: visualization/renderer.py
# Turn a point set and tour snapshot into a frame and emit
# it to the text stream.
# --------------------------------------------------------

import sys
import numpy as np
from abc import ABC, abstractmethod
from typing import List, Optional, TextIO
from core.config import FRAME_PADDING, MARKER_MARGIN
from core.point_set import PointSet
from core.tour import Tour
from visualization.records import Frame, FrameHeader, PathRecord, Pos, RectRecord
from visualization.wire import serialize_frame


def build_frame(points: PointSet, tour: Tour,
                padding: float = FRAME_PADDING, margin: float = MARKER_MARGIN) -> Frame:
    """
    Builds the frame describing ``tour`` over ``points``.

    The frame holds the point set bounds padded by ``padding``, one 2-point
    path per tour edge in cyclic order, then one square marker of half-width
    ``margin`` per point in index order, labelled with the point index.
    Corner arithmetic is done in float32, the precision of the coordinates.

    Args:
        points: The point set being toured.
        tour: The current tour.
        padding: Extra space around the bounds.
        margin: Half-width of each point marker.

    Returns:
        Frame: The structured frame, ready for :func:`serialize_frame`.
    """
    pad = np.float32(padding)
    (x0, y0), (x1, y1) = points.bounds
    header = FrameHeader(
        Pos(float(np.float32(x0) - pad), float(np.float32(y0) - pad)),
        Pos(float(np.float32(x1) + pad), float(np.float32(y1) + pad)),
    )
    frame = Frame(header)

    coords = points.coordinates
    for a, b in tour.edges():
        frame.elements.append(PathRecord((
            Pos(float(coords[a, 0]), float(coords[a, 1])),
            Pos(float(coords[b, 0]), float(coords[b, 1])),
        )))

    m = np.float32(margin)
    for i in range(len(points)):
        x, y = coords[i]
        frame.elements.append(RectRecord(
            Pos(float(x - m), float(y - m)),
            Pos(float(x + m), float(y + m)),
            label=str(i),
        ))
    return frame


class Renderer(ABC):
    """
    Interface the optimizer calls once before searching and once per
    accepted swap. Implementations must finish drawing before returning.
    """

    @abstractmethod
    def draw(self, points: PointSet, tour: Tour) -> None:
        """
        Draws one frame of ``tour`` over ``points``.

        Args:
            points: The point set being toured.
            tour: The tour snapshot; must not be modified or retained.
        """
        pass


class TextRenderer(Renderer):
    """
    Writes each frame to a text stream in the wire format.

    Attributes:
        stream (TextIO): Destination; standard output unless given.
        frames_written (int): Number of frames emitted so far.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.frames_written = 0

    def draw(self, points: PointSet, tour: Tour) -> None:
        self.stream.write(serialize_frame(build_frame(points, tour)))
        self.stream.flush()
        self.frames_written += 1


class RecordingRenderer(Renderer):
    """
    Keeps every frame in memory, optionally forwarding to another renderer.

    Used to replay a run in the frame player after it finishes.
    """

    def __init__(self, forward_to: Optional[Renderer] = None) -> None:
        self.forward_to = forward_to
        self.frames: List[Frame] = []

    def draw(self, points: PointSet, tour: Tour) -> None:
        self.frames.append(build_frame(points, tour))
        if self.forward_to is not None:
            self.forward_to.draw(points, tour)
