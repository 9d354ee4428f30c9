"""
Type definitions for the fingerspelling recognition system.
"""
import math
import numbers
from dataclasses import dataclass, fields
from enum import Enum
from typing import Optional, Protocol, Sequence, Tuple, runtime_checkable


Point = Tuple[float, float]


class IncompleteLandmarkSetError(ValueError):
    """Raised when a landmark set cannot be built from the given points."""


class Finger(Enum):
    """Finger selector for the per-finger predicates."""
    THUMB = "thumb"
    INDEX = "index"
    MIDDLE = "middle"
    RING = "ring"
    LITTLE = "little"


class CounterFamily(Enum):
    """Evidence counter a decision rule accumulates into."""
    LETTER = "letter"
    PINCH = "pinch"
    APART = "apart"


class GestureState(Enum):
    """Current classification reported by the gesture classifier."""
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"
    H = "H"
    I = "I"
    J = "J"
    K = "K"
    L = "L"
    M = "M"
    N = "N"
    O = "O"
    P = "P"
    Q = "Q"
    R = "R"
    S = "S"
    T = "T"
    U = "U"
    V = "V"
    W = "W"
    X = "X"
    Y = "Y"

    POSSIBLE_LETTER = "possible_letter"
    CLEAR = "clear"
    SPACEBAR = "spacebar"
    POSSIBLE_PINCH = "possible_pinch"
    POSSIBLE_APART = "possible_apart"
    APART = "apart"
    UNKNOWN = "unknown"

    @property
    def is_letter(self) -> bool:
        """True for the committed letter states A..Y."""
        return len(self.value) == 1

    @property
    def is_possible(self) -> bool:
        """True for the transitional states shown while evidence accumulates."""
        return self in (
            GestureState.POSSIBLE_LETTER,
            GestureState.POSSIBLE_PINCH,
            GestureState.POSSIBLE_APART,
        )


@dataclass(frozen=True)
class LandmarkSet:
    """
    The 21 hand landmarks of one frame in a single 2D image frame (y grows down).

    Field order matches the MediaPipe hand landmark indices 0..20.
    """
    wrist: Point
    thumb_cmc: Point
    thumb_mp: Point
    thumb_ip: Point
    thumb_tip: Point
    index_mcp: Point
    index_pip: Point
    index_dip: Point
    index_tip: Point
    middle_mcp: Point
    middle_pip: Point
    middle_dip: Point
    middle_tip: Point
    ring_mcp: Point
    ring_pip: Point
    ring_dip: Point
    ring_tip: Point
    little_mcp: Point
    little_pip: Point
    little_dip: Point
    little_tip: Point

    @classmethod
    def from_points(cls, points: Sequence[Optional[Sequence[float]]]) -> "LandmarkSet":
        """
        Build a landmark set from 21 (x, y) pairs in landmark index order.

        Args:
            points: Sequence of 21 (x, y) pairs

        Returns:
            LandmarkSet with float coordinates

        Raises:
            IncompleteLandmarkSetError: if a point is missing or not finite
        """
        names = [f.name for f in fields(cls)]
        if len(points) != len(names):
            raise IncompleteLandmarkSetError(
                f"Expected {len(names)} landmarks, got {len(points)}"
            )

        coords = []
        for name, point in zip(names, points):
            if point is None or len(point) < 2:
                raise IncompleteLandmarkSetError(f"Landmark '{name}' is missing")
            x, y = float(point[0]), float(point[1])
            if not (math.isfinite(x) and math.isfinite(y)):
                raise IncompleteLandmarkSetError(f"Landmark '{name}' is not finite")
            coords.append((x, y))

        return cls(*coords)

    def is_complete(self) -> bool:
        """Check that every landmark is a finite (x, y) pair."""
        for f in fields(self):
            point = getattr(self, f.name)
            if point is None or len(point) != 2:
                return False
            if not all(isinstance(v, numbers.Real) and math.isfinite(v) for v in point):
                return False
        return True

    def as_list(self) -> list:
        """Landmarks in index order."""
        return [getattr(self, f.name) for f in fields(self)]

    def joints(self, finger: Finger) -> Tuple[Point, Point, Point, Point]:
        """
        Joints of a finger from base to tip.

        The thumb returns (CMC, MP, IP, tip), the other fingers (MCP, PIP, DIP, tip).
        """
        if finger is Finger.THUMB:
            return self.thumb_cmc, self.thumb_mp, self.thumb_ip, self.thumb_tip
        prefix = finger.value
        return (
            getattr(self, f"{prefix}_mcp"),
            getattr(self, f"{prefix}_pip"),
            getattr(self, f"{prefix}_dip"),
            getattr(self, f"{prefix}_tip"),
        )

    def fingertips(self) -> Tuple[Point, Point, Point, Point, Point]:
        """Thumb, index, middle, ring and little fingertips."""
        return self.thumb_tip, self.index_tip, self.middle_tip, self.ring_tip, self.little_tip


@dataclass(frozen=True)
class Evidence:
    """Evidence counters carried between frames."""
    letter: int = 0
    pinch: int = 0
    apart: int = 0
    candidate: Optional[GestureState] = None  # state of the last winning rule

    def count(self, family: CounterFamily) -> int:
        return getattr(self, family.value)


@dataclass(frozen=True)
class Transition:
    """Result of one classifier step: the new state and whether to notify."""
    previous: GestureState
    state: GestureState
    evidence: Evidence
    notify: bool


@runtime_checkable
class StateSink(Protocol):
    """Callback notified synchronously whenever the classifier assigns a state."""

    def __call__(self, state: GestureState) -> None:
        ...
