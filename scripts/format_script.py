#!/usr/bin/env python3
"""Format a screenplay text file from the command line."""

import argparse
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from screenplay import format_script
from screenplay.document import count_elements


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Format raw screenplay text")
    parser.add_argument("path", help="Text file to format, or - for stdin")
    parser.add_argument(
        "--dialogue",
        action="store_true",
        help="Classify text following a character cue as dialogue",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print the number of blocks per element kind to stderr",
    )
    return parser.parse_args()


def read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main() -> None:
    """Read, format and print a screenplay."""
    args = parse_args()

    try:
        raw = read_input(args.path)
    except OSError as e:
        print(f"Cannot read {args.path}: {e}", file=sys.stderr)
        sys.exit(1)

    formatted, elements = format_script(raw, detect_dialogue=args.dialogue)
    print(formatted)

    if args.stats:
        for kind, count in sorted(count_elements(elements).items()):
            print(f"{kind:<15} {count}", file=sys.stderr)


if __name__ == "__main__":
    main()
