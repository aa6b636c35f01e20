"""Core components for AVIF Publisher."""

from avif_publisher.core.models import (
    AvifPublisherError,
    BatchResult,
    ConversionFailure,
    ConversionResult,
    EncodeError,
    PostResult,
    PreconditionError,
)
from avif_publisher.core.naming import canonical_name
from avif_publisher.core.encoder import EncodeRequest, EncodeTemplate, FFmpegEncoder
from avif_publisher.core.converter import ImageConverter
from avif_publisher.core.discovery import collect_images, find_document
from avif_publisher.core.processor import PostProcessor

__all__ = [
    "AvifPublisherError",
    "BatchResult",
    "ConversionFailure",
    "ConversionResult",
    "EncodeError",
    "PostResult",
    "PreconditionError",
    "canonical_name",
    "EncodeRequest",
    "EncodeTemplate",
    "FFmpegEncoder",
    "ImageConverter",
    "collect_images",
    "find_document",
    "PostProcessor",
]
