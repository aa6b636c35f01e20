"""
AVIF Publisher - Convert images to AVIF and prepare Markdown posts

Small command-line tools built on a shared library:
- img2avif converts images to AVIF via ffmpeg
- wiz2blog prepares a Markdown post for a static site
- Content-addressed (MD5) output names
- Image reference rewriting
"""

from avif_publisher.core.models import AvifPublisherError, BatchResult, ConversionResult, PostResult
from avif_publisher.core.naming import canonical_name
from avif_publisher.core.converter import ImageConverter
from avif_publisher.core.encoder import FFmpegEncoder
from avif_publisher.core.processor import PostProcessor

__version__ = "0.1.0"

__all__ = [
    "AvifPublisherError",
    "BatchResult",
    "ConversionResult",
    "PostResult",
    "canonical_name",
    "ImageConverter",
    "FFmpegEncoder",
    "PostProcessor",
]
