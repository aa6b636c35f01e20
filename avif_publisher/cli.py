"""Command-line entry points: ``img2avif`` and ``wiz2blog``."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from avif_publisher.config import ConvertConfig, load_config
from avif_publisher.core.converter import ImageConverter
from avif_publisher.core.discovery import find_document
from avif_publisher.core.encoder import Encoder, FFmpegEncoder
from avif_publisher.core.models import AvifPublisherError
from avif_publisher.core.processor import PostProcessor

logger = logging.getLogger("avif_publisher.cli")

IMG2AVIF_EPILOG = """\
examples:
  img2avif image.jpg                     keep the original size
  img2avif -w 940 image.jpg              cap the width at 940 pixels
  img2avif -w 800 image1.jpg image2.png  convert several images

supported input formats: jpg, jpeg, png, gif, bmp, webp, avif
output: AVIF files named after the MD5 digest of their content
"""


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-w", "--max-width",
        type=_positive_int,
        default=None,
        help="Maximum image width in pixels (default: no limit)",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="YAML configuration file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )


def _load_settings(args: argparse.Namespace) -> ConvertConfig:
    return load_config(args.config).with_overrides(max_width=args.max_width)


def build_img2avif_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="img2avif",
        description="Convert images to AVIF files named by their content digest.",
        epilog=IMG2AVIF_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("paths", nargs="*", type=Path, help="Images to convert")
    parser.add_argument(
        "-k", "--keep-source",
        action="store_true",
        help="Keep the original image after transcoding",
    )
    _add_common_arguments(parser)
    return parser


def build_wiz2blog_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wiz2blog",
        description=(
            "Prepare the Markdown post in a directory: add front matter, convert "
            "images under images/ to AVIF and update their references."
        ),
    )
    parser.add_argument(
        "-d", "--directory",
        type=Path,
        default=Path("."),
        help="Directory containing the post (default: current directory)",
    )
    _add_common_arguments(parser)
    return parser


def img2avif(argv: Optional[Sequence[str]] = None, encoder: Optional[Encoder] = None) -> int:
    parser = build_img2avif_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if not args.paths:
        print("error: provide at least one image path\n", file=sys.stderr)
        parser.print_help(sys.stderr)
        return 1

    try:
        settings = _load_settings(args)
    except AvifPublisherError as e:
        logger.error("%s", e)
        return 1

    converter = ImageConverter(
        encoder or FFmpegEncoder(settings.ffmpeg),
        max_width=settings.max_width,
        crf=settings.crf,
        remove_source=not args.keep_source,
    )
    result = converter.convert_all(args.paths)

    for conversion in result.conversions:
        print(f"{conversion.source.name} -> {conversion.output.name}")

    if result.failures or result.skipped:
        logger.info(
            "%d converted, %d failed, %d skipped",
            len(result.conversions),
            len(result.failures),
            len(result.skipped),
        )
    return 0


def wiz2blog(argv: Optional[Sequence[str]] = None, encoder: Optional[Encoder] = None) -> int:
    args = build_wiz2blog_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        settings = _load_settings(args)
        document = find_document(args.directory)

        converter = ImageConverter(
            encoder or FFmpegEncoder(settings.ffmpeg),
            max_width=settings.max_width,
            crf=settings.crf,
        )
        processor = PostProcessor(converter, images_dir=settings.images_dir)
        result = processor.process(document)
    except AvifPublisherError as e:
        logger.error("%s", e)
        return 1

    for original, canonical in sorted(result.mapping.items()):
        print(f"{original} -> {canonical}")
    if result.failures:
        logger.warning("%d images could not be converted", len(result.failures))
    logger.info("Done: %s", result.path)
    return 0
