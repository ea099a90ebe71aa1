"""
Mock display implementation for testing displayed gestures.
"""
import logging
from typing import List, Optional

logger = logging.getLogger(__name__)


class MockDisplay:
    """Mock display that logs gesture changes instead of rendering them."""

    def __init__(self):
        """Initialize the mock display."""
        self.shown: List[str] = []
        self.change_count = 0
        self.current: Optional[str] = None

    async def show(self, gesture: str) -> None:
        """Record the displayed gesture and log it when it changes."""
        self.shown.append(gesture)
        if gesture != self.current:
            self.change_count += 1
            self.current = gesture
            logger.info(f"[MockDisplay] Gesture: {gesture} (change #{self.change_count})")

    def reset_counters(self) -> None:
        """Reset recorded gestures for testing."""
        self.shown.clear()
        self.change_count = 0
        self.current = None
