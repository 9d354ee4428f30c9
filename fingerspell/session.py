"""
Hand-loss handling around a gesture classifier.
"""
import logging
from typing import Optional

from .config import SessionConfig
from .gestures import GestureClassifier
from .types import GestureState, LandmarkSet

logger = logging.getLogger(__name__)


class HandSession:
    """
    Feeds frames to a classifier and resets it when the hand goes missing.

    Features:
    - Complete landmark sets are classified and refresh the last-seen time
    - Missing or incomplete frames are ignored until the timeout expires
    - One classifier reset per loss episode
    """

    def __init__(self, classifier: GestureClassifier, hand_lost_reset_ms: int = 2000):
        """
        Initialize the session.

        Args:
            classifier: Classifier to drive
            hand_lost_reset_ms: Time without a hand before the classifier is reset
        """
        if hand_lost_reset_ms < 0:
            raise ValueError("hand_lost_reset_ms must not be negative")
        self.classifier = classifier
        self.hand_lost_reset_ms = hand_lost_reset_ms

        self._started_at: Optional[float] = None
        self._last_seen: Optional[float] = None
        self._hand_visible = False
        self._reset_pending = True

    @classmethod
    def from_config(cls, classifier: GestureClassifier, cfg: SessionConfig) -> "HandSession":
        return cls(classifier, hand_lost_reset_ms=cfg.hand_lost_reset_ms)

    @property
    def hand_visible(self) -> bool:
        """Whether the last frame carried a complete landmark set."""
        return self._hand_visible

    @property
    def last_seen(self) -> Optional[float]:
        """Timestamp in seconds of the last complete landmark set."""
        return self._last_seen

    def update(self, points: Optional[LandmarkSet], t_now: float) -> GestureState:
        """
        Process one frame.

        Args:
            points: Landmarks of the frame, or None if no hand was detected
            t_now: Current timestamp in seconds

        Returns:
            Classifier state after the frame
        """
        if self._started_at is None:
            self._started_at = t_now

        if points is not None and points.is_complete():
            if not self._hand_visible:
                logger.debug("Hand detected")
            self._hand_visible = True
            self._last_seen = t_now
            self._reset_pending = True
            return self.classifier.process_points_set(points)

        if self._hand_visible:
            logger.debug("Hand lost")
        self._hand_visible = False

        reference = self._last_seen if self._last_seen is not None else self._started_at
        time_since_hand_lost = (t_now - reference) * 1000  # ms
        if self._reset_pending and time_since_hand_lost > self.hand_lost_reset_ms:
            logger.info("No hand for %.0f ms, resetting classifier", time_since_hand_lost)
            self._reset_pending = False
            self.classifier.reset()

        return self.classifier.state
