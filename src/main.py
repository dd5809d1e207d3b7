# src/main.py - v1
"""CLI entry point: extract and stats commands.

Usage:
    kfextract extract -i <directory> [options]
    kfextract stats <output_dir>
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from kfextract.version import __version__

if TYPE_CHECKING:
    from kfextract.config.settings import Settings

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point. Returns the process exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    from pydantic import ValidationError

    from kfextract.config.settings import ConfigurationError, load_settings

    try:
        settings = load_settings()
    except (ConfigurationError, ValidationError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    _setup_logging(settings, args.verbose)

    try:
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def cli() -> None:
    """Console-script wrapper around main()."""
    sys.exit(main())


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="kfextract",
        description=f"kfextract v{__version__}: batch video keyframe extraction",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- extract ---
    p_extract = subparsers.add_parser(
        "extract", help="Extract keyframes from every video under a directory",
    )
    p_extract.add_argument(
        "-i", "--input", type=Path, required=True,
        help="Input directory to scan recursively",
    )
    p_extract.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Output directory (default: ./keyframes_output)",
    )
    p_extract.add_argument(
        "-t", "--threads", type=_positive_int, default=None,
        help="Parallel worker count (default: number of CPUs)",
    )
    p_extract.add_argument(
        "-q", "--quality", type=int, default=None,
        help="Keyframe JPEG quality, 1-31, 1 is best (default: 2)",
    )
    p_extract.add_argument(
        "--extensions", default=None,
        help="Comma-separated extension filter (default: mp4,mov,avi,mkv,flv)",
    )
    p_extract.add_argument(
        "--decoder", default=None,
        help="Decoder executable (default: ffmpeg on PATH)",
    )
    p_extract.set_defaults(func=_cmd_extract)

    # --- stats ---
    p_stats = subparsers.add_parser(
        "stats", help="Show keyframe counts for an output directory",
    )
    p_stats.add_argument(
        "output_dir", type=Path, help="Output directory to inspect",
    )
    p_stats.set_defaults(func=_cmd_stats)

    return parser


async def _cmd_extract(args: argparse.Namespace, settings: Settings) -> int:
    """Execute a batch extraction run."""
    from kfextract.api.facade import build_config, extract_keyframes
    from kfextract.decoder.ffmpeg_decoder import FFmpegDecoder

    directory: Path = args.input
    if not directory.is_dir():
        logger.error("Not a directory: %s", directory)
        return 1

    config = build_config(
        directory,
        settings=settings,
        output_root=args.output,
        threads=args.threads,
        quality=args.quality,
        extensions=args.extensions,
    )
    if not config.allowed_extensions:
        logger.error("No extensions given: %r", args.extensions)
        return 1

    decoder = FFmpegDecoder(binary=args.decoder or settings.decoder_binary)
    result = await extract_keyframes(
        config, decoder=decoder, settings=settings, on_discovered=_print_found,
    )

    print(f"\nBatch complete:")
    print(f"  Files found:  {result.total}")
    print(f"  Extracted:    {result.extracted}")
    print(f"  Skipped:      {result.skipped}")
    print(f"  Failed:       {result.failed}")
    print(f"  Duration:     {result.duration_seconds:.1f}s")

    if not result.ok:
        print(f"\nFailed tasks:\n{result.summary()}", file=sys.stderr)
        return 1
    return 0


async def _cmd_stats(args: argparse.Namespace, settings: Settings) -> int:
    """Display keyframe statistics for an output directory."""
    from kfextract.storage.layout import list_outputs

    output_dir: Path = args.output_dir
    if not output_dir.is_dir():
        logger.error("Not a directory: %s", output_dir)
        return 1

    outputs = list_outputs(output_dir)
    empty = [o.name for o in outputs if o.frame_count == 0]

    print(f"\nStatistics for {output_dir}:")
    print(f"  Videos:       {len(outputs)}")
    print(f"  Keyframes:    {sum(o.frame_count for o in outputs)}")
    print(f"  Empty dirs:   {len(empty)}")
    for name in empty:
        print(f"    {name}")
    return 0


def _print_found(count: int) -> None:
    print(f"Found {count} video files to process", flush=True)


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {n}")
    return n


def _setup_logging(settings: Settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from kfextract.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
