"""
MediaPipe hand tracking and fingertip overlay drawing.
"""
import logging
from typing import Optional, Tuple

import cv2
import mediapipe as mp
import numpy as np

from .config import THRESHOLDS, GeometryThresholds
from .landmarks import landmark_set_from_observations
from .types import GestureState, LandmarkSet

logger = logging.getLogger(__name__)

# BGR
YELLOW = (0, 255, 255)
GREEN = (0, 255, 0)
RED = (0, 0, 255)


class HandsTracker:
    """Hand landmark tracker using MediaPipe Hands."""

    def __init__(self, max_num_hands: int = 1, min_detection_conf: float = 0.5,
                 min_tracking_conf: float = 0.5, thresholds: GeometryThresholds = THRESHOLDS):
        """
        Initialize the hands tracker.

        Args:
            max_num_hands: Maximum number of hands to detect
            min_detection_conf: Minimum confidence for hand detection
            min_tracking_conf: Minimum confidence for hand tracking
            thresholds: Per-landmark confidence cutoffs
        """
        self.mp_hands = mp.solutions.hands
        self.hands = self.mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=max_num_hands,
            min_detection_confidence=min_detection_conf,
            min_tracking_confidence=min_tracking_conf
        )
        self.thresholds = thresholds

    def process(self, frame_bgr: np.ndarray) -> Optional[LandmarkSet]:
        """
        Process a frame and return the landmarks of the first hand.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            LandmarkSet in pixel coordinates, or None if no hand passed the gate
        """
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.hands.process(frame_rgb)

        if not results.multi_hand_landmarks:
            return None

        height, width = frame_bgr.shape[:2]
        hand_landmarks = results.multi_hand_landmarks[0]

        # Hand landmarks carry no per-point visibility; use the hand score
        score = 1.0
        if results.multi_handedness:
            score = results.multi_handedness[0].classification[0].score

        observations = [
            (landmark.x * width, landmark.y * height, score)
            for landmark in hand_landmarks.landmark
        ]
        return landmark_set_from_observations(observations, self.thresholds)

    def close(self) -> None:
        self.hands.close()


def state_color(state: GestureState) -> Tuple[int, int, int]:
    """Fingertip colour for a classifier state."""
    if state.is_possible:
        return YELLOW
    if state.is_letter or state in (GestureState.CLEAR, GestureState.SPACEBAR):
        return GREEN
    return RED


def draw_fingertips(frame: np.ndarray, points: LandmarkSet, state: GestureState) -> np.ndarray:
    """
    Draw the five fingertips coloured by classifier state.

    Args:
        frame: Input frame
        points: Landmarks in pixel coordinates

    Returns:
        Frame with fingertips drawn
    """
    color = state_color(state)
    for x, y in points.fingertips():
        cv2.circle(frame, (int(x), int(y)), 8, color, -1)
    return frame


def draw_landmarks(frame: np.ndarray, points: LandmarkSet) -> np.ndarray:
    """Draw all 21 landmarks with their index."""
    for i, (x, y) in enumerate(points.as_list()):
        px, py = int(x), int(y)
        cv2.circle(frame, (px, py), 3, GREEN, -1)
        cv2.putText(frame, str(i), (px + 5, py - 5), cv2.FONT_HERSHEY_SIMPLEX, 0.3, (255, 255, 255), 1)
    return frame
