"""ednaseq command-line interface."""

import argparse
import json
import logging
import sys
from typing import List, Optional

from ednaseq.io import read_sequence_file
from ednaseq.stats import summarize_records
from ednaseq.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ednaseq",
        description="Parse and score eDNA sequence files",
    )
    subparsers = parser.add_subparsers(dest="command")

    parse_parser = subparsers.add_parser("parse", help="Print parsed and scored records")
    parse_parser.add_argument("file", help="FASTA, FASTQ or plain-line file (optionally .gz)")
    parse_parser.add_argument(
        "--format",
        choices=["json", "tsv"],
        default="json",
        help="Output format (default: json)",
    )

    summary_parser = subparsers.add_parser("summary", help="Print batch statistics")
    summary_parser.add_argument("file", help="FASTA, FASTQ or plain-line file (optionally .gz)")
    summary_parser.add_argument(
        "--min-quality",
        type=float,
        default=None,
        help="Score counted as high quality (default: 80)",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging()

    if args.command is None:
        parser.print_help()
        return 1

    try:
        records = read_sequence_file(args.file)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Cannot read %s: %s", args.file, exc)
        return 1

    if args.command == "parse":
        if args.format == "tsv":
            print("header\tlength\tquality_score\tsequence")
            for record in records:
                print(f"{record.header}\t{record.length}\t"
                      f"{record.quality_score:.2f}\t{record.sequence}")
        else:
            print(json.dumps([record.to_dict() for record in records], indent=2))
    elif args.command == "summary":
        summary = summarize_records(records, min_quality=args.min_quality)
        print(json.dumps(summary.to_dict(), indent=2))

    return 0


if __name__ == "__main__":
    sys.exit(main())
