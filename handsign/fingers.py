"""
Finger-state extraction strategies.

Two interchangeable strategies turn 21 landmarks into a FingerStates record:

- AngleFingerExtractor measures the bend at the proximal joint of each finger.
- PositionFingerExtractor compares joint heights and the thumb's horizontal
  offset. It assumes an upright hand with a consistent handedness, so it is
  sensitive to hand rotation and to which hand is shown.
"""
from typing import Dict, Protocol, Tuple, runtime_checkable

from .landmarks import check_hand, joint_angle
from .types import FingerStates, Hand

# (base, proximal joint, tip) per finger
ANGLE_TRIPLETS: Dict[str, Tuple[int, int, int]] = {
    "thumb": (2, 3, 4),
    "index": (5, 6, 8),
    "middle": (9, 10, 12),
    "ring": (13, 14, 16),
    "pinky": (17, 18, 20),
}

# (base, pip, tip) for the four long fingers
POSITION_JOINTS: Dict[str, Tuple[int, int, int]] = {
    "index": (5, 6, 8),
    "middle": (9, 10, 12),
    "ring": (13, 14, 16),
    "pinky": (17, 18, 20),
}

THUMB_BASE = 2
THUMB_TIP = 4


@runtime_checkable
class FingerStateExtractor(Protocol):
    """Derives a FingerStates record from one hand."""

    def extract(self, hand: Hand) -> FingerStates:
        ...


class AngleFingerExtractor:
    """
    A finger is extended when the angle at its proximal joint exceeds a threshold.

    The thumb uses its own triplet and a lower threshold. An undefined angle
    (coincident landmarks) counts as flexed.
    """

    name = "angle"

    def __init__(self, finger_threshold_deg: float = 160.0, thumb_threshold_deg: float = 100.0):
        self.finger_threshold_deg = finger_threshold_deg
        self.thumb_threshold_deg = thumb_threshold_deg

    def _is_extended(self, hand: Hand, finger: str) -> bool:
        base, joint, tip = ANGLE_TRIPLETS[finger]
        angle = joint_angle(hand[base], hand[joint], hand[tip])
        if angle is None:
            return False
        threshold = self.thumb_threshold_deg if finger == "thumb" else self.finger_threshold_deg
        return angle > threshold

    def extract(self, hand: Hand) -> FingerStates:
        check_hand(hand)
        return FingerStates(**{finger: self._is_extended(hand, finger) for finger in ANGLE_TRIPLETS})


class PositionFingerExtractor:
    """A finger is extended when its tip sits above its lower joints in image space."""

    name = "position"

    def extract(self, hand: Hand) -> FingerStates:
        check_hand(hand)

        states = {}
        for finger, (base, pip, tip) in POSITION_JOINTS.items():
            # tip y < pip y < base y (inverted y-axis)
            states[finger] = hand[tip][1] < hand[pip][1] < hand[base][1]

        states["thumb"] = hand[THUMB_TIP][0] > hand[THUMB_BASE][0]
        return FingerStates(**states)


def make_extractor(strategy: str = "angle",
                   finger_threshold_deg: float = 160.0,
                   thumb_threshold_deg: float = 100.0) -> FingerStateExtractor:
    """
    Build a finger-state extractor by strategy name.

    Args:
        strategy: "angle" or "position"
        finger_threshold_deg: Angle threshold for index/middle/ring/pinky
        thumb_threshold_deg: Angle threshold for the thumb

    Returns:
        The extractor instance
    """
    if strategy == "angle":
        return AngleFingerExtractor(finger_threshold_deg, thumb_threshold_deg)
    if strategy == "position":
        return PositionFingerExtractor()
    raise ValueError(f"Unknown finger-state strategy: {strategy!r}")
