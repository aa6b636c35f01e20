"""Transcode dispatch for the external AVIF encoder.

The encoder is modelled as a callable taking an EncodeRequest, so the
template selection and argument building can be tested without ffmpeg.
"""

import enum
import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from avif_publisher.core.models import EncodeError

logger = logging.getLogger(__name__)

DEFAULT_CRF = 32
VIDEO_CODEC = "libaom-av1"

# Opaque background the transparent template composites onto
BACKGROUND_SOURCE = "color=white:s=1x1"
FLATTEN_FILTER = "[1][0]scale2ref[bg][img];[bg][img]overlay"


class EncodeTemplate(enum.Enum):
    """Fixed encoder argument templates, one per kind of source."""

    ANIMATED = "animated"
    TRANSPARENT = "transparent"
    GENERIC = "generic"


@dataclass(frozen=True)
class EncodeRequest:
    """A single invocation of the encoder."""

    source: Path
    destination: Path
    template: EncodeTemplate
    max_width: Optional[int] = None
    crf: int = DEFAULT_CRF


Encoder = Callable[[EncodeRequest], None]


def select_template(extension: str) -> EncodeTemplate:
    """Pick the encoder template for a file extension (case-insensitive)."""
    ext = extension.lower()
    if ext == ".gif":
        return EncodeTemplate.ANIMATED
    if ext == ".png":
        return EncodeTemplate.TRANSPARENT
    return EncodeTemplate.GENERIC


def scale_filter(max_width: Optional[int]) -> Optional[str]:
    """Build the width-capping scale filter, or None when uncapped.

    ``h=-2`` keeps the aspect ratio and rounds the height to an even value,
    which yuv420p output requires.
    """
    if not max_width or max_width <= 0:
        return None
    return f"scale=w=min(iw\\,{max_width}):h=-2"


def scaled_dimensions(width: int, height: int, max_width: Optional[int]) -> Tuple[int, int]:
    """Reference model of the output size produced by :func:`scale_filter`.

    ffmpeg applies the rule itself; this mirrors it so the sizing can be
    checked without running the encoder.

    Width is capped at ``max_width``. Height keeps the aspect ratio and is
    rounded to the nearest even integer, never below 2.

    Args:
        width: Source width in pixels
        height: Source height in pixels
        max_width: Width cap, or None for no cap

    Returns:
        Tuple of (width, height)
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Source dimensions must be positive, got {width}x{height}")

    if not max_width or max_width <= 0:
        return width, height

    out_width = min(width, max_width)
    # Integer rounding to the nearest multiple of two, halves rounded up
    half_height = (out_width * height + width) // (2 * width)
    return out_width, max(2, half_height * 2)


def build_encoder_args(
    source: Path,
    destination: Path,
    template: EncodeTemplate,
    max_width: Optional[int] = None,
    crf: int = DEFAULT_CRF,
    binary: str = "ffmpeg",
) -> List[str]:
    """Build the full encoder command line for one request.

    Args:
        source: Input image
        destination: Output file the encoder writes
        template: Which fixed template to use
        max_width: Optional width cap
        crf: Constant rate factor
        binary: Encoder executable

    Returns:
        Argument vector suitable for subprocess.run
    """
    scale = scale_filter(max_width)
    cmd = [binary, "-y", "-i", str(source)]

    if template is EncodeTemplate.ANIMATED:
        if scale:
            cmd += ["-vf", scale]
        cmd += ["-vsync", "vfr", "-pix_fmt", "rgb8", "-loop", "0",
                "-c:v", VIDEO_CODEC, "-crf", str(crf)]
    elif template is EncodeTemplate.TRANSPARENT:
        graph = FLATTEN_FILTER if scale is None else f"{FLATTEN_FILTER},{scale}"
        cmd += ["-f", "lavfi", "-i", BACKGROUND_SOURCE,
                "-filter_complex", graph,
                "-c:v", VIDEO_CODEC, "-pix_fmt", "yuv420p", "-crf", str(crf)]
    else:
        if scale:
            cmd += ["-vf", scale]
        cmd += ["-c:v", VIDEO_CODEC, "-crf", str(crf)]

    cmd.append(str(destination))
    return cmd


class FFmpegEncoder:
    """Encoder capability backed by an ffmpeg subprocess."""

    def __init__(self, binary: str = "ffmpeg"):
        self.binary = binary

    def __call__(self, request: EncodeRequest) -> None:
        cmd = build_encoder_args(
            request.source,
            request.destination,
            request.template,
            max_width=request.max_width,
            crf=request.crf,
            binary=self.binary,
        )
        logger.debug("Running: %s", " ".join(cmd))

        try:
            proc = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                errors="replace",
            )
        except OSError as e:
            raise EncodeError(f"Failed to launch {self.binary} for {request.source}: {e}") from e

        if proc.returncode != 0:
            detail = proc.stderr.strip().splitlines()[-1:] or [f"exit status {proc.returncode}"]
            raise EncodeError(f"Encoding failed for {request.source}: {detail[0]}")
