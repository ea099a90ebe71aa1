"""
Type definitions for hand sign recognition system.
"""
from dataclasses import dataclass, field
from typing import List, Literal, Optional, Protocol, Sequence, Tuple, runtime_checkable


# A landmark point is (x, y, z); (x, y) is accepted with z = 0.0
Point = Tuple[float, float, float]
Hand = Sequence[Sequence[float]]

NUM_LANDMARKS = 21

# Gesture vocabulary
OPEN_HAND = "Open Hand"
THUMBS_UP = "Thumbs Up (Yes)"
POINTING = "No (Index Finger Shaking)"
FIST = "Fist (Sorry)"
PEACE_SIGN = "Peace Sign (Play)"
UNKNOWN = "Unknown"
NO_HAND = "No hand detected"
ALL_DONE = "All Done"
MORE = "More"
HELP = "Help"
UNKNOWN_TWO_HAND = "Unknown Two-Hand Gesture"

GestureLabel = Literal[
    "Open Hand",
    "Thumbs Up (Yes)",
    "No (Index Finger Shaking)",
    "Fist (Sorry)",
    "Peace Sign (Play)",
    "Unknown",
    "No hand detected",
    "All Done",
    "More",
    "Help",
    "Unknown Two-Hand Gesture",
]

GESTURE_LABELS: Tuple[str, ...] = (
    OPEN_HAND,
    THUMBS_UP,
    POINTING,
    FIST,
    PEACE_SIGN,
    UNKNOWN,
    NO_HAND,
    ALL_DONE,
    MORE,
    HELP,
    UNKNOWN_TWO_HAND,
)


@dataclass(frozen=True)
class FingerStates:
    """Extended (True) or flexed (False) state of each finger."""
    thumb: bool
    index: bool
    middle: bool
    ring: bool
    pinky: bool

    def as_tuple(self) -> Tuple[bool, bool, bool, bool, bool]:
        return (self.thumb, self.index, self.middle, self.ring, self.pinky)

    def count(self) -> int:
        """Number of extended fingers (0-5)."""
        return sum(self.as_tuple())


@dataclass
class FrameResult:
    """Outcome of classifying one frame."""
    hand_labels: List[str] = field(default_factory=list)
    finger_states: List[Optional[FingerStates]] = field(default_factory=list)
    frame_label: Optional[str] = None  # label appended to history, if any
    displayed: str = NO_HAND
    hands_used: int = 0


@runtime_checkable
class DisplayProto(Protocol):
    """Abstract protocol for sinks that present the displayed gesture."""

    async def show(self, gesture: str) -> None:
        """Present the current displayed gesture."""
        ...
