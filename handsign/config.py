"""
Configuration management for hand sign recognition system.
"""
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass

STRATEGIES = ("angle", "position")


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int
    width: int
    height: int
    fps: int


@dataclass
class MediaPipeConfig:
    """MediaPipe Hands configuration settings."""
    max_num_hands: int
    min_detection_confidence: float
    min_tracking_confidence: float


@dataclass
class ClassifierConfig:
    """Finger-state extraction and gesture rule settings."""
    strategy: str
    finger_angle_threshold_deg: float
    thumb_angle_threshold_deg: float
    peace_allows_thumb: bool
    max_hands: int


@dataclass
class SmoothingConfig:
    """Temporal smoothing configuration."""
    history_size: int


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    show_landmarks: bool
    show_finger_states: bool
    window_name: str


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig
    mediapipe: MediaPipeConfig
    classifier: ClassifierConfig
    smoothing: SmoothingConfig
    display: DisplayConfig
    logging: LoggingConfig


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses config.default.yaml

    Returns:
        Configuration object with all settings
    """
    if path is None:
        # Use default config file in project root
        project_root = Path(__file__).parent.parent
        path = project_root / "config.default.yaml"

    config_path = Path(path)
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
        fps=camera_data['fps']
    )

    mp_data = data['mediapipe']
    mediapipe = MediaPipeConfig(
        max_num_hands=mp_data['max_num_hands'],
        min_detection_confidence=mp_data['min_detection_confidence'],
        min_tracking_confidence=mp_data['min_tracking_confidence']
    )

    classifier_data = data['classifier']
    classifier = ClassifierConfig(
        strategy=classifier_data['strategy'],
        finger_angle_threshold_deg=float(classifier_data['finger_angle_threshold_deg']),
        thumb_angle_threshold_deg=float(classifier_data['thumb_angle_threshold_deg']),
        peace_allows_thumb=bool(classifier_data.get('peace_allows_thumb', True)),
        max_hands=int(classifier_data.get('max_hands', 2))
    )
    if classifier.strategy not in STRATEGIES:
        raise ValueError(f"classifier.strategy must be one of {STRATEGIES}, got {classifier.strategy!r}")
    if classifier.max_hands < 1:
        raise ValueError("classifier.max_hands must be at least 1")

    smoothing = SmoothingConfig(history_size=int(data['smoothing']['history_size']))
    if smoothing.history_size < 1:
        raise ValueError("smoothing.history_size must be at least 1")

    display_data = data['display']
    display = DisplayConfig(
        show_landmarks=display_data['show_landmarks'],
        show_finger_states=display_data['show_finger_states'],
        window_name=display_data['window_name']
    )

    logging_data = data.get('logging') or {}
    logging_cfg = LoggingConfig(level=str(logging_data.get('level', 'INFO')).upper())

    return Cfg(
        camera=camera,
        mediapipe=mediapipe,
        classifier=classifier,
        smoothing=smoothing,
        display=display,
        logging=logging_cfg
    )
