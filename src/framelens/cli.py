"""Command-line interface for framelens.

Provides the main entry point for capturing a test frame, running OCR
line reconstruction on an image file, or watching a monitor for a
number of frames.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="framelens",
        description="Screen frame change detection and OCR line reconstruction",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/framelens.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("capture-test", help="Capture one monitor frame and save it as PNG")

    ocr_parser = subparsers.add_parser("ocr", help="Reconstruct OCR lines from an image file")
    ocr_parser.add_argument("image", type=Path, help="Image file to recognize")

    watch_parser = subparsers.add_parser("watch", help="Process monitor frames and report changes")
    watch_parser.add_argument(
        "--frames", type=int, default=10,
        help="Number of frames to process",
    )
    watch_parser.add_argument(
        "--save-text", action="store_true",
        help="Write new/current/previous text files for each frame",
    )

    return parser.parse_args(argv)


async def _capture_test(settings) -> None:
    """Capture a single frame and save to file."""
    from framelens.capture.adapter import capture_frame
    from framelens.capture.screen import ScreenCaptureBackend
    from framelens.utils.imaging import save_png

    result = await asyncio.wait_for(
        capture_frame(
            ScreenCaptureBackend(),
            monitor_id=settings.capture.monitor_id,
            capture_windows=settings.capture.capture_windows,
        ),
        timeout=settings.capture.capture_timeout,
    )
    outfile = settings.output.capture_test_file
    save_png(result.image, outfile)
    print(f"Saved frame to {outfile} ({result.width}x{result.height})")
    print(f"Hash: {result.image_hash:016x}  Duration: {result.capture_duration.total_seconds():.3f}s")
    for window in result.windows:
        marker = "*" if window.is_focused else " "
        print(f" {marker} {window.app_name or '?'}: {window.title}")


def _ocr_file(settings, image_path: Path) -> None:
    """Run OCR on an image file and print the line records."""
    from framelens.ocr import create_ocr_engine
    from framelens.utils.imaging import load_image

    engine = create_ocr_engine(settings.ocr)
    result = engine.perform_ocr(load_image(image_path))
    print(result.to_json())
    print()
    print(result.text)


async def _watch(settings, frames: int) -> None:
    """Process ``frames`` frames at the configured interval."""
    from framelens.capture.screen import ScreenCaptureBackend
    from framelens.domain.errors import FramelensError
    from framelens.ocr import create_ocr_engine
    from framelens.pipeline.frame import FramePipeline

    engine = create_ocr_engine(settings.ocr) if settings.ocr.enabled else None
    pipeline = FramePipeline(ScreenCaptureBackend(), engine, settings)

    for frame_number in range(1, frames + 1):
        try:
            report = await pipeline.process_frame(
                frame_number, capture_timeout=settings.capture.capture_timeout
            )
        except asyncio.TimeoutError:
            logger.error("Frame %d capture timed out after %.1fs", frame_number, settings.capture.capture_timeout)
        except FramelensError as e:
            logger.error("Frame %d failed: %s", frame_number, e)
        else:
            lines = len(report.ocr.lines) if report.ocr else 0
            print(
                f"[{report.capture.timestamp.strftime('%H:%M:%S')}] frame {frame_number}: "
                f"score={report.score:.3f} max_frame={pipeline.tracker.max_frame_number} "
                f"lines={lines} new={len(report.new_lines)}"
            )
        if frame_number < frames:
            await asyncio.sleep(settings.capture.capture_interval)

    max_frame = pipeline.tracker.max_frame
    if max_frame is not None:
        print(f"\nMost changed frame: {max_frame.frame_number} (score {max_frame.score:.3f})")


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the framelens CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return

    from framelens.config.settings import load_settings
    from framelens.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    if args.command == "capture-test":
        logger.info("Running capture test")
        asyncio.run(_capture_test(settings))

    elif args.command == "ocr":
        logger.info("Running OCR on %s", args.image)
        _ocr_file(settings, args.image)

    elif args.command == "watch":
        if args.save_text:
            settings.output.save_text_files = True
        logger.info("Watching monitor %d for %d frames", settings.capture.monitor_id, args.frames)
        asyncio.run(_watch(settings, args.frames))


if __name__ == "__main__":
    main()
