"""
Configuration management for the fingerspelling recognition system.
"""
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass


@dataclass(frozen=True)
class GeometryThresholds:
    """
    Empirically tuned decision boundaries of the landmark predicates.

    Distances are expressed as ratios of a reference segment measured on the
    same hand, so they hold for any hand size or camera distance.
    """
    # thumb tip to index/middle tip closer than half the thumb tip-IP segment
    touching_ratio: float = 0.5
    # letter C: thumb-index gap strictly between 1x and 2x the reference
    c_spacing_min_ratio: float = 1.0
    c_spacing_max_ratio: float = 2.0
    # letter O: thumb-index gap under 1x the reference
    o_spacing_ratio: float = 1.0
    # tips x gap may be at most this multiple of the MCP x gap
    fingers_together_ratio: float = 1.2
    # curled finger: tip-MCP between these multiples of PIP-MCP
    curl_reach_min_ratio: float = 1.0
    curl_reach_max_ratio: float = 2.5
    # pinch distance multiple for fingertips resting on the palm
    palm_touch_ratio: float = 2.0
    # angle at the wrist under which two fingertips count as touching
    touching_max_angle_deg: float = 25.0
    # detector confidence gates
    tip_min_confidence: float = 0.5
    joint_min_confidence: float = 0.3


THRESHOLDS = GeometryThresholds()


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int
    width: int
    height: int
    fps: int
    mirror: bool


@dataclass
class MediaPipeConfig:
    """MediaPipe Hands configuration settings."""
    max_num_hands: int
    min_detection_confidence: float
    min_tracking_confidence: float


@dataclass
class ClassifierConfig:
    """Gesture classifier configuration."""
    pinch_max_distance: float
    evidence_counter_state_trigger: int
    notify_on_every_assignment: bool


@dataclass
class SessionConfig:
    """Hand-loss handling configuration."""
    hand_lost_reset_ms: int


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    show_landmarks: bool
    show_fingertips: bool
    window_name: str


@dataclass
class TranscriptConfig:
    """Transcript configuration settings."""
    target_letter: Optional[str]


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig
    mediapipe: MediaPipeConfig
    classifier: ClassifierConfig
    session: SessionConfig
    display: DisplayConfig
    transcript: TranscriptConfig


DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.default.yaml"


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses the packaged config.default.yaml

    Returns:
        Configuration object with all settings

    Raises:
        FileNotFoundError: if the config file does not exist
        ValueError: if a classifier or session value is out of range
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f)

    return _dict_to_config(data)


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    camera_data = data['camera']
    camera = CameraConfig(
        index=camera_data['index'],
        width=camera_data['width'],
        height=camera_data['height'],
        fps=camera_data['fps'],
        mirror=camera_data.get('mirror', True)
    )

    mp_data = data['mediapipe']
    mediapipe = MediaPipeConfig(
        max_num_hands=mp_data['max_num_hands'],
        min_detection_confidence=mp_data['min_detection_confidence'],
        min_tracking_confidence=mp_data['min_tracking_confidence']
    )

    classifier_data = data['classifier']
    classifier = ClassifierConfig(
        pinch_max_distance=float(classifier_data['pinch_max_distance']),
        evidence_counter_state_trigger=int(classifier_data['evidence_counter_state_trigger']),
        notify_on_every_assignment=bool(classifier_data.get('notify_on_every_assignment', True))
    )
    if classifier.evidence_counter_state_trigger < 1:
        raise ValueError("classifier.evidence_counter_state_trigger must be at least 1")
    if classifier.pinch_max_distance < 0:
        raise ValueError("classifier.pinch_max_distance must not be negative")

    session = SessionConfig(
        hand_lost_reset_ms=int(data['session']['hand_lost_reset_ms'])
    )
    if session.hand_lost_reset_ms < 0:
        raise ValueError("session.hand_lost_reset_ms must not be negative")

    display_data = data['display']
    display = DisplayConfig(
        show_landmarks=display_data['show_landmarks'],
        show_fingertips=display_data['show_fingertips'],
        window_name=display_data['window_name']
    )

    target = (data.get('transcript') or {}).get('target_letter')
    transcript = TranscriptConfig(
        target_letter=str(target).upper() if target else None
    )

    return Cfg(
        camera=camera,
        mediapipe=mediapipe,
        classifier=classifier,
        session=session,
        display=display,
        transcript=transcript
    )
