"""
Fingerspelling Recognition System

Classifies static ASL fingerspelling handshapes from 21 hand landmarks per
frame, with an optional MediaPipe webcam demo.
"""

__version__ = "0.1.0"

from .types import (
    CounterFamily,
    Evidence,
    Finger,
    GestureState,
    IncompleteLandmarkSetError,
    LandmarkSet,
    StateSink,
    Transition,
)
from .config import load_config, Cfg, GeometryThresholds, THRESHOLDS
from .gestures import GestureClassifier, HandFacts, DecisionRule, DECISION_RULES
from .session import HandSession
from .transcript import FingerspellingTranscript
from .sink_mock import MockStateSink

__all__ = [
    "CounterFamily",
    "Evidence",
    "Finger",
    "GestureState",
    "IncompleteLandmarkSetError",
    "LandmarkSet",
    "StateSink",
    "Transition",
    "load_config",
    "Cfg",
    "GeometryThresholds",
    "THRESHOLDS",
    "GestureClassifier",
    "HandFacts",
    "DecisionRule",
    "DECISION_RULES",
    "HandSession",
    "FingerspellingTranscript",
    "MockStateSink",
]
