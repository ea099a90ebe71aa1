"""
Hand Sign Recognition System

Classifies hand gestures from 21 hand landmarks per detected hand, composes
two-hand signs and smooths the result over recent frames.
"""

__version__ = "0.1.0"
__author__ = "Hand Sign Recognition Team"

from .types import FingerStates, FrameResult, DisplayProto, GestureLabel
from .config import load_config, Cfg
from .display_mock import MockDisplay
from .landmarks import FrameNotReady, MalformedHand, normalize_hand, joint_angle, palm_center
from .fingers import FingerStateExtractor, AngleFingerExtractor, PositionFingerExtractor, make_extractor
from .gestures import GestureSmoother, GestureProcessor, classify_hand, compose_two_hands, classify_frame

__all__ = [
    "FingerStates",
    "FrameResult",
    "DisplayProto",
    "GestureLabel",
    "load_config",
    "Cfg",
    "MockDisplay",
    "FrameNotReady",
    "MalformedHand",
    "normalize_hand",
    "joint_angle",
    "palm_center",
    "FingerStateExtractor",
    "AngleFingerExtractor",
    "PositionFingerExtractor",
    "make_extractor",
    "GestureSmoother",
    "GestureProcessor",
    "classify_hand",
    "compose_two_hands",
    "classify_frame",
]
