"""
Coloring session configuration for Brush Color.

Classes:
    ColoringConfig: Tunable fill, history and loading settings

Functions:
    load_config: Load a ColoringConfig from a JSON file
    save_config: Save a ColoringConfig to a JSON file
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from BC_Libs.constants import (
    DEFAULT_COLOR,
    DEFAULT_DEVICE_PIXEL_RATIO,
    DEFAULT_PALETTE,
    FILL_TOLERANCE,
    MATCH_TOLERANCE,
    MAX_IMAGE_SIZE,
    MAX_UNDO_STATES,
    OUTLINE_THRESHOLD,
)
from BC_Libs.FillLib.region_classifier import RegionClassifier, hex_to_rgba

logger = logging.getLogger(__name__)


def _clamp_channel(value: Any) -> int:
    return int(max(0, min(255, int(value))))


@dataclass
class ColoringConfig:
    """Configuration for a coloring session.

    Attributes:
        outline_threshold: Channels below this on all of R, G, B mark line art
        fill_tolerance: Per-channel tolerance for region membership
        match_tolerance: Per-channel tolerance for "already that color"
        max_undo_states: Undo history depth
        max_image_size: Longest side of a loaded image, in logical pixels
        device_pixel_ratio: Buffer pixels per logical pixel
        default_color: Initial fill color
        palette: Colors offered by the palette
    """
    outline_threshold: int = OUTLINE_THRESHOLD
    fill_tolerance: int = FILL_TOLERANCE
    match_tolerance: int = MATCH_TOLERANCE
    max_undo_states: int = MAX_UNDO_STATES
    max_image_size: int = MAX_IMAGE_SIZE
    device_pixel_ratio: float = DEFAULT_DEVICE_PIXEL_RATIO
    default_color: str = DEFAULT_COLOR
    palette: List[str] = field(default_factory=lambda: list(DEFAULT_PALETTE))

    def __post_init__(self) -> None:
        self.outline_threshold = _clamp_channel(self.outline_threshold)
        self.fill_tolerance = _clamp_channel(self.fill_tolerance)
        self.match_tolerance = _clamp_channel(self.match_tolerance)

        if int(self.max_undo_states) < 1:
            raise ValueError(f"max_undo_states must be >= 1, got {self.max_undo_states}")
        if int(self.max_image_size) < 1:
            raise ValueError(f"max_image_size must be >= 1, got {self.max_image_size}")
        if float(self.device_pixel_ratio) <= 0:
            raise ValueError(f"device_pixel_ratio must be > 0, got {self.device_pixel_ratio}")

        self.max_undo_states = int(self.max_undo_states)
        self.max_image_size = int(self.max_image_size)
        self.device_pixel_ratio = float(self.device_pixel_ratio)

        # Raises ValueError for colors the fill engine could not use
        hex_to_rgba(self.default_color)
        for color in self.palette:
            hex_to_rgba(color)
        self.palette = [str(color) for color in self.palette]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ColoringConfig":
        """Create from dictionary, ignoring unknown keys."""
        normalized = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        palette = normalized.get("palette")
        if palette is not None:
            normalized["palette"] = list(palette)
        return cls(**normalized)

    def build_classifier(self) -> RegionClassifier:
        return RegionClassifier(
            outline_threshold=self.outline_threshold,
            fill_tolerance=self.fill_tolerance,
            match_tolerance=self.match_tolerance,
        )


def load_config(config_path: Path) -> ColoringConfig:
    """
    Load configuration from a JSON file.

    A missing file yields the default configuration.

    Raises:
        ValueError: If the file is not valid JSON or holds invalid values
    """
    config_path = Path(config_path)
    if not config_path.exists():
        logger.debug(f"No config at {config_path}, using defaults")
        return ColoringConfig()

    try:
        payload = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid config file {config_path}: {exc}") from exc

    if not isinstance(payload, dict):
        raise ValueError(f"Config file must contain a JSON object: {config_path}")

    config = ColoringConfig.from_dict(payload)
    logger.info(f"Loaded config from {config_path}")
    return config


def save_config(config: ColoringConfig, config_path: Path) -> Path:
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(config.to_dict(), indent=2), encoding="utf-8")
    return config_path
