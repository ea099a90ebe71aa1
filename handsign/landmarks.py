"""
Hand landmark normalization and geometry helpers.
"""
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .types import Hand, Point, NUM_LANDMARKS


class FrameNotReady(ValueError):
    """Raised when the frame dimensions cannot be used for normalization."""


class MalformedHand(ValueError):
    """Raised when a hand does not carry exactly 21 landmarks."""


def check_hand(hand: Hand) -> None:
    """
    Validate the landmark count of a hand.

    Args:
        hand: Sequence of landmark points

    Raises:
        MalformedHand: If the hand does not have exactly 21 points
    """
    if hand is None or len(hand) != NUM_LANDMARKS:
        count = 0 if hand is None else len(hand)
        raise MalformedHand(f"Expected {NUM_LANDMARKS} landmarks, got {count}")


def _as_point(raw: Sequence[float]) -> Point:
    try:
        coords = [float(v) for v in raw]
    except (TypeError, ValueError) as e:
        raise MalformedHand(f"Landmark is not numeric: {raw!r}") from e
    if len(coords) < 2:
        raise MalformedHand(f"Landmark needs at least x and y, got {tuple(coords)}")
    z = coords[2] if len(coords) > 2 else 0.0
    return (coords[0], coords[1], z)


def _frame_ready(frame_width: float, frame_height: float) -> bool:
    try:
        return bool(np.isfinite(frame_width) and np.isfinite(frame_height)
                    and frame_width > 0 and frame_height > 0)
    except TypeError:
        return False


def normalize_hand(hand: Hand, frame_width: float, frame_height: float) -> List[Point]:
    """
    Convert pixel-space landmarks into frame-relative coordinates.

    Args:
        hand: 21 landmark points in pixel coordinates
        frame_width: Frame width in pixels
        frame_height: Frame height in pixels

    Returns:
        List of 21 (x, y, z) points with x and y divided by the frame size.
        z is passed through unchanged.

    Raises:
        FrameNotReady: If either frame dimension is not a positive finite number
        MalformedHand: If the hand does not have 21 points
    """
    if not _frame_ready(frame_width, frame_height):
        raise FrameNotReady(f"Frame not ready: {frame_width}x{frame_height}")
    check_hand(hand)

    points = np.array([_as_point(p) for p in hand], dtype=float)
    points[:, 0] /= frame_width
    points[:, 1] /= frame_height

    return [tuple(row) for row in points.tolist()]


def joint_angle(a: Sequence[float], b: Sequence[float], c: Sequence[float]) -> Optional[float]:
    """
    Angle at joint b formed by the points a-b-c, in degrees.

    Only the x and y coordinates are used.

    Returns:
        Angle in [0, 180], or None if either vector has zero length
    """
    v1 = np.array([a[0] - b[0], a[1] - b[1]], dtype=float)
    v2 = np.array([c[0] - b[0], c[1] - b[1]], dtype=float)

    n1 = np.linalg.norm(v1)
    n2 = np.linalg.norm(v2)
    if n1 == 0.0 or n2 == 0.0:
        return None

    cos_angle = np.clip(np.dot(v1, v2) / (n1 * n2), -1.0, 1.0)
    return float(np.degrees(np.arccos(cos_angle)))


def palm_center(hand: Hand) -> Tuple[float, float]:
    """
    Calculate the center of the palm.

    Args:
        hand: List of 21 hand landmarks

    Returns:
        (x, y) coordinates of palm center in the hand's coordinate space
    """
    # Palm landmarks: wrist (0) and the base of each finger (5, 9, 13, 17)
    palm_indices = [0, 5, 9, 13, 17]

    x_sum = sum(hand[i][0] for i in palm_indices)
    y_sum = sum(hand[i][1] for i in palm_indices)

    return (x_sum / len(palm_indices), y_sum / len(palm_indices))
