"""
CLI entry point for dispatch roster extraction and reporting.

Usage:
    # Read a roster photo and save the editable unit list
    python -m dispatch_roster extract roster.jpg -o units.json

    # Parse a transcript that was already OCR'd
    python -m dispatch_roster extract --text transcript.txt -o units.json

    # Render the hand-over report from an (edited) unit list
    python -m dispatch_roster render --recipient "أحمد | A-1" --deputy "سارة | B-2" --units units.json
"""

import argparse
import logging
import sys
from pathlib import Path

from dispatch_roster.config import OCRConfig, OCREngine, RosterConfig
from dispatch_roster.pipeline import ExtractionOutcome, RosterExtractor, extract_from_text
from dispatch_roster.report import ValidationError
from dispatch_roster.session import RosterSession
from dispatch_roster.utils import setup_logging


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="dispatch-roster",
        description=(
            "Dispatch roster OCR & report: extract the unit list from a roster "
            "photo and render the operations hand-over report."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s extract roster.jpg -o units.json
  %(prog)s extract --text transcript.txt
  %(prog)s render --recipient "Name | A-1" --deputy "Name | B-2" --units units.json

Environment variables:
  ROSTER_RECIPIENT  - default recipient ("Name | Code")
  ROSTER_DEPUTY     - default deputy ("Name | Code")
  TESSERACT_CMD     - path to the tesseract binary
        """,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # extract
    extract = subparsers.add_parser("extract", help="Extract units from a roster photo")
    extract.add_argument(
        "image_path",
        type=str,
        nargs="?",
        default=None,
        help="Path to the roster photo",
    )
    extract.add_argument(
        "--text",
        type=str,
        default=None,
        help="Parse an existing OCR transcript file instead of running OCR",
    )
    extract.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Write the unit list as JSON to this path",
    )
    extract.add_argument(
        "--engines",
        type=str,
        default="tesseract",
        help="OCR engines to use (comma-separated: tesseract,easyocr)",
    )
    extract.add_argument(
        "--max-width",
        type=int,
        default=1600,
        help="Downscale photos wider than this before OCR (default: 1600)",
    )
    extract.add_argument(
        "--no-preprocess",
        action="store_true",
        help="Disable image preprocessing",
    )

    # render
    render = subparsers.add_parser("render", help="Render the hand-over report")
    render.add_argument("--recipient", type=str, default=None, help='Recipient, "Name | Code"')
    render.add_argument("--deputy", type=str, default=None, help='Deputy, "Name | Code"')
    render.add_argument(
        "--units",
        type=str,
        default=None,
        help="JSON unit list produced by 'extract' (default: no units)",
    )
    render.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Write the report to this path. Default: stdout",
    )

    return parser.parse_args(argv)


def parse_engines(engines_str: str) -> list[OCREngine]:
    """Parse 'tesseract,easyocr' into OCR engine members, ignoring unknown names."""
    engine_map = {engine.value: engine for engine in OCREngine}
    return [
        engine_map[name.strip()]
        for name in engines_str.split(",")
        if name.strip() in engine_map
    ]


def run_extract(args: argparse.Namespace) -> int:
    config = RosterConfig(
        ocr=OCRConfig(
            engines=parse_engines(args.engines),
            max_width=args.max_width,
            enable_preprocessing=not args.no_preprocess,
        )
    )

    if args.text:
        text_path = Path(args.text)
        if not text_path.exists():
            print(f"Error: transcript file not found: {text_path}", file=sys.stderr)
            return 1
        result = extract_from_text(text_path.read_text(encoding="utf-8"))
    elif args.image_path:
        image_path = Path(args.image_path)
        if not image_path.exists():
            print(f"Error: image file not found: {image_path}", file=sys.stderr)
            return 1
        try:
            extractor = RosterExtractor(config)
        except (ImportError, RuntimeError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        result = extractor.extract_file(image_path)
    else:
        print("Error: give an image path or --text", file=sys.stderr)
        return 1

    print(result.message)
    if result.outcome is ExtractionOutcome.FAILED:
        if args.verbose and result.error:
            print(f"  {result.error}", file=sys.stderr)
        return 1

    session = RosterSession.from_config(config)
    session.apply_extraction(result)

    for i, unit in enumerate(session.units, 1):
        print(f"  {i:3d}. {unit.code:10s} {unit.name}  [{unit.status.label}]")

    if args.output:
        session.save_units(args.output)
        print(f"\nUnits saved to: {args.output}")

    return 0


def run_render(args: argparse.Namespace) -> int:
    session = RosterSession.from_config(
        RosterConfig(recipient=args.recipient, deputy=args.deputy)
    )

    if args.units:
        try:
            session.load_units(args.units)
        except (OSError, ValueError) as e:
            print(f"Error reading units: {e}", file=sys.stderr)
            return 1

    try:
        report = session.generate_report()
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(report, encoding="utf-8")
        print(f"Report saved to: {output_path}")
    else:
        print(report)

    return 0


def main(argv=None) -> int:
    args = parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "extract":
        return run_extract(args)
    return run_render(args)


if __name__ == "__main__":
    sys.exit(main())
