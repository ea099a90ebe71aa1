"""
Gesture classification: single-hand rules, two-hand composition and temporal smoothing.
"""
import logging
import threading
from collections import Counter, deque
from typing import Callable, Deque, Dict, FrozenSet, List, Optional, Sequence, Tuple

from .config import Cfg
from .fingers import FingerStateExtractor, make_extractor
from .landmarks import FrameNotReady, MalformedHand, normalize_hand
from .types import (
    ALL_DONE, FIST, HELP, MORE, NO_HAND, OPEN_HAND, PEACE_SIGN, POINTING,
    THUMBS_UP, UNKNOWN, UNKNOWN_TWO_HAND, FingerStates, FrameResult, Hand,
)

logger = logging.getLogger(__name__)

Rule = Tuple[str, Callable[[FingerStates], bool]]


def _all_extended(s: FingerStates) -> bool:
    return all(s.as_tuple())


def _thumb_only(s: FingerStates) -> bool:
    return s.thumb and not (s.index or s.middle or s.ring or s.pinky)


def _index_only(s: FingerStates) -> bool:
    return s.index and not (s.thumb or s.middle or s.ring or s.pinky)


def _all_flexed(s: FingerStates) -> bool:
    return not any(s.as_tuple())


def _index_middle(s: FingerStates) -> bool:
    return s.index and s.middle and not s.ring and not s.pinky


# Ordered: first match wins
SINGLE_HAND_RULES: List[Rule] = [
    (OPEN_HAND, _all_extended),
    (THUMBS_UP, _thumb_only),
    (POINTING, _index_only),
    (FIST, _all_flexed),
    (PEACE_SIGN, _index_middle),
]

TWO_HAND_RULES: Dict[FrozenSet[str], str] = {
    frozenset({OPEN_HAND}): ALL_DONE,
    frozenset({FIST}): MORE,
    frozenset({THUMBS_UP}): HELP,
}


def classify_hand(states: FingerStates, peace_allows_thumb: bool = True) -> str:
    """
    Map finger states to a single-hand gesture label.

    Args:
        states: Extended/flexed state of each finger
        peace_allows_thumb: If False, the peace sign also needs a flexed thumb

    Returns:
        Gesture label, "Unknown" if no rule matches
    """
    for label, matches in SINGLE_HAND_RULES:
        if not matches(states):
            continue
        if label == PEACE_SIGN and states.thumb and not peace_allows_thumb:
            continue
        return label
    return UNKNOWN


def compose_two_hands(first: str, second: str) -> str:
    """Combine two single-hand labels into a composite label (order does not matter)."""
    return TWO_HAND_RULES.get(frozenset({first, second}), UNKNOWN_TWO_HAND)


class GestureSmoother:
    """
    Rolling majority vote over the most recent frame labels.

    The history is a FIFO of fixed capacity. The vote returns the most frequent
    label, and ties go to the label inserted first. A frame without hands clears
    the history.
    """

    def __init__(self, capacity: int = 5):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._history: Deque[str] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    @property
    def history(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(self._history)

    def __len__(self) -> int:
        return len(self._history)

    def update(self, label: str) -> str:
        """Append a frame label and return the current vote."""
        with self._lock:
            self._history.append(label)
            return self._vote()

    def reset(self) -> str:
        """Clear history; the displayed gesture becomes "No hand detected"."""
        with self._lock:
            self._history.clear()
        return NO_HAND

    def vote(self) -> str:
        with self._lock:
            return self._vote()

    def _vote(self) -> str:
        if not self._history:
            return NO_HAND
        # Counter keeps first-seen order, and most_common is stable among ties
        return Counter(self._history).most_common(1)[0][0]


def _classify_hands(hands: Sequence[Hand], frame_width: float, frame_height: float,
                    extractor: FingerStateExtractor,
                    peace_allows_thumb: bool) -> Tuple[List[str], List[Optional[FingerStates]]]:
    labels: List[str] = []
    states_list: List[Optional[FingerStates]] = []
    for i, hand in enumerate(hands):
        try:
            normalized = normalize_hand(hand, frame_width, frame_height)
            states = extractor.extract(normalized)
        except (MalformedHand, TypeError) as e:
            logger.debug(f"Hand {i} classified as {UNKNOWN}: {e}")
            labels.append(UNKNOWN)
            states_list.append(None)
            continue
        labels.append(classify_hand(states, peace_allows_thumb))
        states_list.append(states)
    return labels, states_list


def _run_frame(hands: Optional[Sequence[Hand]], frame_width: float, frame_height: float,
               smoother: GestureSmoother, extractor: FingerStateExtractor,
               max_hands: int, peace_allows_thumb: bool) -> FrameResult:
    if hands is None or len(hands) == 0:
        return FrameResult(displayed=smoother.reset())

    used = list(hands[:max_hands])
    if len(hands) > len(used):
        logger.debug(f"{len(hands)} hands detected, using the first {len(used)}")

    try:
        labels, states = _classify_hands(used, frame_width, frame_height, extractor, peace_allows_thumb)
    except FrameNotReady as e:
        logger.warning(f"⚠️  {e}, skipping")
        return FrameResult(displayed=smoother.vote())

    if len(labels) >= 2:
        frame_label = compose_two_hands(labels[0], labels[1])
    else:
        frame_label = labels[0]

    return FrameResult(
        hand_labels=labels,
        finger_states=states,
        frame_label=frame_label,
        displayed=smoother.update(frame_label),
        hands_used=len(used),
    )


def classify_frame(hands: Optional[Sequence[Hand]], frame_width: float, frame_height: float,
                   smoother: GestureSmoother, extractor: Optional[FingerStateExtractor] = None,
                   max_hands: int = 2) -> str:
    """
    Classify one frame of detected hands into the displayed gesture.

    Args:
        hands: Zero or more hands of 21 pixel-space landmarks each
        frame_width: Frame width in pixels
        frame_height: Frame height in pixels
        smoother: Smoothing state carried across frames
        extractor: Finger-state strategy (angle-based if None)
        max_hands: Hands beyond this count are ignored

    Returns:
        Displayed gesture label. Never raises on bad input.
    """
    if extractor is None:
        extractor = make_extractor("angle")
    result = _run_frame(hands, frame_width, frame_height, smoother, extractor,
                        max_hands=max(1, min(max_hands, 2)), peace_allows_thumb=True)
    return result.displayed


class GestureProcessor:
    """
    Main gesture processor that turns detected hands into a displayed gesture.
    """

    def __init__(self, cfg: Cfg, extractor: Optional[FingerStateExtractor] = None):
        """Initialize gesture processor with configuration."""
        self.cfg = cfg
        c = cfg.classifier
        self.extractor = extractor or make_extractor(
            c.strategy,
            finger_threshold_deg=c.finger_angle_threshold_deg,
            thumb_threshold_deg=c.thumb_angle_threshold_deg,
        )
        self.smoother = GestureSmoother(cfg.smoothing.history_size)
        self.max_hands = min(c.max_hands, 2)
        self.displayed = NO_HAND

    def process_frame(self, hands: Optional[Sequence[Hand]],
                      frame_wh: Tuple[int, int]) -> FrameResult:
        """
        Process a frame and return the classification result.

        Args:
            hands: Hands in pixel coordinates (None or empty if no hand detected)
            frame_wh: Frame dimensions (width, height)

        Returns:
            FrameResult with per-hand labels and the displayed gesture
        """
        frame_width, frame_height = frame_wh
        result = _run_frame(
            hands, frame_width, frame_height, self.smoother, self.extractor,
            max_hands=self.max_hands,
            peace_allows_thumb=self.cfg.classifier.peace_allows_thumb,
        )

        if result.displayed != self.displayed:
            logger.info(f"Gesture: {self.displayed} -> {result.displayed}")
            self.displayed = result.displayed

        return result
