"""Command-line interface for passport parsing and batch CSV export.

Provides subcommands for parsing a text file, scanning a single passport
image, and processing a folder of text files and images into a CSV.
"""

import argparse
import base64
import csv
import json
import sys
import time
from pathlib import Path

from src.extraction.models import ParsedPassport
from src.extraction.passport_parser import parse_passport_text
from src.ocr.errors import OCRServiceError
from src.ocr.text_detector import TextDetector, build_text_detector
from src.utils.config import load_config
from src.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

_TEXT_EXTENSIONS = (".txt",)
_IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".tiff", ".tif", ".webp")
_META_COLUMNS = ["filename", "status", "processing_time_s", "error"]
_FIELD_COLUMNS = list(ParsedPassport().to_dict())


def _find_inputs(input_dir: Path) -> list[Path]:
    """Find all text and image files in a directory.

    Args:
        input_dir: Directory to scan.

    Returns:
        Sorted list of supported file paths.
    """
    supported = _TEXT_EXTENSIONS + _IMAGE_EXTENSIONS
    return sorted(
        path
        for path in input_dir.iterdir()
        if path.is_file() and path.suffix.lower() in supported
    )


def _read_text(file_path: Path, detector: TextDetector | None) -> str:
    """Return the recognized text for a text file or an image file."""
    if file_path.suffix.lower() in _TEXT_EXTENSIONS:
        return file_path.read_text(encoding="utf-8")
    if detector is None:
        detector = build_text_detector(load_config().ocr)
    image_b64 = base64.b64encode(file_path.read_bytes()).decode("ascii")
    return detector.detect_text(image_b64)


def process_folder(
    input_dir: Path,
    output_csv: Path,
    verbose: bool = False,
) -> dict[str, int]:
    """Parse every passport text or image in a folder and export to CSV.

    Args:
        input_dir: Directory containing ``.txt`` files and/or images.
        output_csv: Path for the output CSV file.
        verbose: Whether to print per-file progress.

    Returns:
        Summary dict with total, successful, and failed counts.
    """
    files = _find_inputs(input_dir)
    if not files:
        logger.warning("No passport files found in %s", input_dir)
        return {"total": 0, "successful": 0, "failed": 0}

    logger.info("Found %d passport files to process", len(files))

    detector: TextDetector | None = None
    if any(f.suffix.lower() in _IMAGE_EXTENSIONS for f in files):
        detector = build_text_detector(load_config().ocr)

    results: list[dict[str, object]] = []
    successful = 0
    failed = 0

    for i, file_path in enumerate(files, 1):
        if verbose:
            print(f"Processing [{i}/{len(files)}]: {file_path.name}")

        start_time = time.time()
        try:
            parsed = parse_passport_text(_read_text(file_path, detector))
            result: dict[str, object] = {
                "filename": file_path.name,
                "status": "success",
                "error": None,
            }
            result.update(parsed.to_dict())
            successful += 1
        except (OCRServiceError, OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to process %s: %s", file_path.name, exc)
            result = {
                "filename": file_path.name,
                "status": "failed",
                "error": str(exc),
            }
            failed += 1
        result["processing_time_s"] = round(time.time() - start_time, 2)
        results.append(result)

    _write_csv(results, output_csv)
    logger.info("Results written to %s", output_csv)

    summary = {"total": len(files), "successful": successful, "failed": failed}
    _print_summary(summary, output_csv)
    return summary


def _write_csv(results: list[dict[str, object]], output_path: Path) -> None:
    """Write parse results to a CSV file with a fixed column order."""
    if not results:
        return

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", newline="") as f:
        writer = csv.DictWriter(
            f, fieldnames=_META_COLUMNS + _FIELD_COLUMNS, extrasaction="ignore"
        )
        writer.writeheader()
        writer.writerows(results)


def _print_summary(summary: dict[str, int], output_csv: Path) -> None:
    """Print batch processing summary to stdout."""
    print(f"\n{'=' * 50}")
    print("Batch Processing Complete")
    print(f"{'=' * 50}")
    print(f"Total:      {summary['total']}")
    print(f"Successful: {summary['successful']}")
    print(f"Failed:     {summary['failed']}")
    print(f"Output:     {output_csv}")


def scan_image(file_path: Path) -> dict[str, object]:
    """Run text detection on one image and parse the passport fields.

    Args:
        file_path: Path to the passport image.

    Returns:
        Dictionary with filename, raw_text, and parsed fields.
    """
    raw_text = _read_text(file_path, None)
    return {
        "filename": file_path.name,
        "raw_text": raw_text,
        "parsed": parse_passport_text(raw_text).to_dict(),
    }


def _emit(result: dict[str, object], output: Path | None) -> None:
    output_str = json.dumps(result, indent=2)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(output_str)
        print(f"Output written to {output}")
    else:
        print(output_str)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and dispatch to the appropriate command.

    Args:
        argv: Command-line arguments (defaults to sys.argv).
    """
    parser = argparse.ArgumentParser(
        description="Passport OCR Processor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser(
        "parse", help="Parse passport fields from a text file"
    )
    parse_parser.add_argument("file", type=Path, help="Text file with OCR output")
    parse_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")

    scan_parser = subparsers.add_parser("scan", help="OCR and parse a passport image")
    scan_parser.add_argument("file", type=Path, help="Passport image to process")
    scan_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")

    batch_parser = subparsers.add_parser("batch", help="Process a folder of passports")
    batch_parser.add_argument(
        "input_dir", type=Path, help="Directory with text files or images"
    )
    batch_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("results.csv"),
        help="Output CSV file (default: results.csv)",
    )
    batch_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose output"
    )

    args = parser.parse_args(argv)

    setup_logging(load_config().log_level)

    if args.command == "parse":
        if not args.file.exists():
            print(f"Error: {args.file} does not exist", file=sys.stderr)
            sys.exit(1)
        parsed = parse_passport_text(args.file.read_text(encoding="utf-8"))
        _emit(parsed.to_dict(), args.output)
    elif args.command == "scan":
        if not args.file.exists():
            print(f"Error: {args.file} does not exist", file=sys.stderr)
            sys.exit(1)
        try:
            result = scan_image(args.file)
        except OCRServiceError as exc:
            print(f"Error: {exc.message}", file=sys.stderr)
            sys.exit(1)
        except ValueError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            sys.exit(1)
        _emit(result, args.output)
    elif args.command == "batch":
        if not args.input_dir.is_dir():
            print(f"Error: {args.input_dir} is not a directory", file=sys.stderr)
            sys.exit(1)
        try:
            process_folder(args.input_dir, args.output, args.verbose)
        except ValueError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    main()
