# --------------------------------------------------------
# File: core/errors.py
# Exception hierarchy for the tour optimizer.
# --------------------------------------------------------

class TourError(Exception):
    """Base class for every error raised by this package."""


class InvalidInput(TourError, ValueError):
    """
    Raised when inputs cannot describe a valid tour problem.

    Examples are fewer than three points, a non-positive coordinate range,
    non-finite coordinates, or out-of-range reversal arguments.
    """


class NumericInstability(TourError, RuntimeError):
    """
    Raised when the tour stops being a permutation after a reversal.

    This never happens for legitimate inputs; it signals a bug in the
    rotate/reverse mechanics and the run must be aborted.
    """


class ProtocolError(TourError, ValueError):
    """Raised when frame stream text does not match the wire grammar."""

    def __init__(self, message: str, line_number: int = 0) -> None:
        self.line_number = line_number
        if line_number:
            message = f"line {line_number}: {message}"
        super().__init__(message)
