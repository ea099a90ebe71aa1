"""
Main application for hand sign recognition.
"""
import argparse
import asyncio
import logging
import os
import time
from typing import List, Optional

import cv2
import numpy as np
from dotenv import load_dotenv

from .config import load_config, STRATEGIES
from .display_mock import MockDisplay
from .gestures import GestureProcessor
from .landmarks import palm_center
from .tracker import HandsTracker
from .types import FrameResult, NO_HAND, NUM_LANDMARKS

logger = logging.getLogger(__name__)


class GestureRecognitionApp:
    """Main application class for hand sign recognition."""

    def __init__(self, config_path: Optional[str] = None, strategy: Optional[str] = None):
        """Initialize the application with configuration."""
        self.config = load_config(config_path)
        if strategy is not None:
            self.config.classifier.strategy = strategy

        self.tracker = HandsTracker(
            max_num_hands=self.config.mediapipe.max_num_hands,
            min_detection_conf=self.config.mediapipe.min_detection_confidence,
            min_tracking_conf=self.config.mediapipe.min_tracking_confidence
        )
        self.gesture_processor = GestureProcessor(self.config)
        self.display = MockDisplay()

        # Detection state shared between the loop and the detection task
        self.detecting = False
        self.last_hands: List = []
        self.last_result = FrameResult(displayed=NO_HAND)
        self.skipped_frames = 0
        self.closed = False

        # Initialize camera
        self.cap = cv2.VideoCapture(self.config.camera.index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.camera.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.camera.height)
        self.cap.set(cv2.CAP_PROP_FPS, self.config.camera.fps)

        if not self.cap.isOpened():
            raise RuntimeError(f"Failed to open camera {self.config.camera.index}")

    async def _detect(self, frame: np.ndarray) -> None:
        """Run landmark detection and classification for one frame."""
        try:
            hands = await asyncio.to_thread(self.tracker.process, frame)
            frame_wh = (frame.shape[1], frame.shape[0])  # (width, height)
            self.last_result = self.gesture_processor.process_frame(hands, frame_wh)
            self.last_hands = hands
            await self.display.show(self.last_result.displayed)
        except Exception:
            logger.exception("Detection failed, keeping the last result")
        finally:
            self.detecting = False

    def _draw_overlay(self, frame: np.ndarray) -> np.ndarray:
        result = self.last_result

        for i, hand in enumerate(self.last_hands[:result.hands_used]):
            if self.config.display.show_landmarks:
                frame = self.tracker.draw_landmarks(frame, hand)
            if i < len(result.hand_labels) and len(hand) == NUM_LANDMARKS:
                cx, cy = palm_center(hand)
                cv2.putText(frame, result.hand_labels[i], (int(cx), int(cy)),
                            cv2.FONT_HERSHEY_SIMPLEX, 0.5, (0, 255, 255), 2)

        recognized = result.displayed != NO_HAND and not result.displayed.startswith("Unknown")
        cv2.putText(frame, result.displayed, (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.8,
                    (0, 255, 0) if recognized else (0, 0, 255), 2)

        history = self.gesture_processor.smoother
        history_info = f"History: {len(history)}/{history.capacity}"
        cv2.putText(frame, history_info, (10, 60), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)

        if self.config.display.show_finger_states:
            for i, states in enumerate(result.finger_states):
                text = "malformed" if states is None else " ".join(
                    f"{name[0].upper()}:{int(flag)}"
                    for name, flag in zip(("thumb", "index", "middle", "ring", "pinky"), states.as_tuple())
                )
                cv2.putText(frame, f"Hand {i + 1}: {text}", (10, 85 + i * 20),
                            cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)

        cv2.putText(frame, "Press 'q' to quit", (10, frame.shape[0] - 20), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)
        return frame

    async def run(self):
        """Run the main application loop."""
        logger.info(f"Starting {self.config.display.window_name} "
                    f"(strategy={self.config.classifier.strategy}, "
                    f"history={self.config.smoothing.history_size})")
        logger.info("Press 'q' to quit")

        pending: Optional[asyncio.Task] = None
        last_report = time.time()

        try:
            while True:
                ret, frame = self.cap.read()
                if not ret:
                    logger.error("Failed to read frame from camera")
                    break

                # Only one detection in flight; otherwise this frame is display-only
                if not self.detecting:
                    self.detecting = True
                    pending = asyncio.create_task(self._detect(frame.copy()))
                else:
                    self.skipped_frames += 1

                frame = self._draw_overlay(frame)
                cv2.imshow(self.config.display.window_name, frame)

                if time.time() - last_report > 10.0:
                    logger.debug(f"Frames skipped while detecting: {self.skipped_frames}")
                    last_report = time.time()

                # Check for quit key
                if cv2.waitKey(1) & 0xFF == ord('q'):
                    break

                # Let the detection task make progress
                await asyncio.sleep(0)
        finally:
            if pending is not None and not pending.done():
                await pending
            self.close()

    def close(self) -> None:
        """Release camera, window and model resources."""
        if self.closed:
            return
        self.closed = True
        if hasattr(self, 'cap') and self.cap.isOpened():
            self.cap.release()
        if hasattr(self, 'tracker'):
            self.tracker.close()
        cv2.destroyAllWindows()


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Recognize hand signs from a webcam")
    parser.add_argument("--config", default=None, help="Path to a YAML config file")
    parser.add_argument("--strategy", choices=STRATEGIES, default=None,
                        help="Finger-state extraction strategy")
    return parser.parse_args(argv)


async def main(argv: Optional[List[str]] = None):
    """Entry point for the application."""
    load_dotenv()
    args = _parse_args(argv)

    config_path = args.config or os.getenv("HANDSIGN_CONFIG")
    level = os.getenv("HANDSIGN_LOG_LEVEL")

    try:
        if level is None:
            level = load_config(config_path).logging.level
        logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO),
                            format="%(asctime)s %(levelname)s %(name)s: %(message)s")

        app = GestureRecognitionApp(config_path=config_path, strategy=args.strategy)
        await app.run()
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
    except (FileNotFoundError, ValueError, RuntimeError) as e:
        logging.basicConfig(level=logging.INFO)
        logger.error(f"Error: {e}")
        raise SystemExit(1)


def run():
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
