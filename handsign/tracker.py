"""
Hand landmark detection using MediaPipe.
"""
import cv2
import mediapipe as mp
import numpy as np
from typing import List, Tuple

from .types import Hand, Point


class HandsTracker:
    """Hand landmark tracker using MediaPipe Hands."""

    def __init__(self, max_num_hands: int = 2, min_detection_conf: float = 0.6, min_tracking_conf: float = 0.6):
        """
        Initialize the hands tracker.

        Args:
            max_num_hands: Maximum number of hands to detect
            min_detection_conf: Minimum confidence for hand detection
            min_tracking_conf: Minimum confidence for hand tracking
        """
        self.mp_hands = mp.solutions.hands
        self.hands = self.mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=max_num_hands,
            min_detection_confidence=min_detection_conf,
            min_tracking_confidence=min_tracking_conf
        )

    def process(self, frame_bgr: np.ndarray) -> List[List[Point]]:
        """
        Process a frame and return landmarks for every detected hand.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            One list of 21 (x, y, z) points per hand, x and y in pixels.
            Empty if no hand was detected.
        """
        height, width = frame_bgr.shape[:2]

        # Convert BGR to RGB for MediaPipe
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.hands.process(frame_rgb)

        if not results.multi_hand_landmarks:
            return []

        return [
            [(lm.x * width, lm.y * height, lm.z) for lm in hand_landmarks.landmark]
            for hand_landmarks in results.multi_hand_landmarks
        ]

    def close(self) -> None:
        self.hands.close()

    @staticmethod
    def draw_landmarks(frame: np.ndarray, hand: Hand,
                       color: Tuple[int, int, int] = (0, 255, 0)) -> np.ndarray:
        """
        Draw hand landmarks on the frame.

        Args:
            frame: Input frame
            hand: Landmarks in pixel coordinates
            color: BGR color of the landmark dots

        Returns:
            Frame with landmarks drawn
        """
        for i, point in enumerate(hand):
            px, py = int(point[0]), int(point[1])
            cv2.circle(frame, (px, py), 3, color, -1)
            cv2.putText(frame, str(i), (px + 5, py - 5), cv2.FONT_HERSHEY_SIMPLEX, 0.3, (255, 255, 255), 1)

        return frame
