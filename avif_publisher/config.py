"""Configuration objects and loading for AVIF Publisher."""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from avif_publisher.core.encoder import DEFAULT_CRF
from avif_publisher.core.models import ConfigError

DEFAULT_FFMPEG = "ffmpeg"
DEFAULT_IMAGES_DIR = "images"

# libaom-av1 accepts crf values in this range
CRF_RANGE = (0, 63)


@dataclass
class ConvertConfig:
    """Settings shared by both command-line tools."""

    max_width: Optional[int] = None
    crf: int = DEFAULT_CRF
    ffmpeg: str = DEFAULT_FFMPEG
    images_dir: str = DEFAULT_IMAGES_DIR

    def with_overrides(self, **overrides: Any) -> "ConvertConfig":
        """Return a copy with every non-None override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)


def _validate(data: Dict[str, Any], source: Path) -> None:
    known = {f.name for f in fields(ConvertConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys in {source}: {', '.join(unknown)}")

    max_width = data.get("max_width")
    if max_width is not None and (not isinstance(max_width, int) or max_width <= 0):
        raise ConfigError(f"max_width must be a positive integer in {source}, got {max_width!r}")

    crf = data.get("crf", DEFAULT_CRF)
    low, high = CRF_RANGE
    if not isinstance(crf, int) or not low <= crf <= high:
        raise ConfigError(f"crf must be in range [{low}, {high}] in {source}, got {crf!r}")


def load_config(path: Optional[Path] = None) -> ConvertConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to a YAML mapping. None returns the defaults.

    Returns:
        ConvertConfig populated from the file

    Raises:
        ConfigError: If the file is unreadable, not a mapping, or invalid
    """
    if path is None:
        return ConvertConfig()

    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Failed to read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML in {path}: {e}") from e

    if data is None:
        return ConvertConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a mapping")

    _validate(data, path)
    return ConvertConfig(**data)
