import argparse
import logging
import os
import sys
from pathlib import Path


# ruff: noqa: T201
# Add project root to sys.path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from pydiffer import seqmatcher_json
from pydiffer.seqmatcher import Differ, Tag


logger = logging.getLogger("pydiffer_spans")

# Marker per tag and which side's items it shows.
MARKERS = {
    Tag.EQUAL: ('=', 'a'),
    Tag.INSERT: ('+', 'b'),
    Tag.DELETE: ('-', 'a'),
    Tag.REPLACE: ('%', 'b'),
}


def load_items(path: Path, split: str, encoding: str):
    """Reads a file and splits it into the items to compare."""
    if split == "bytes":
        return path.read_bytes()
    text = path.read_text(encoding=encoding)
    if split == "lines":
        return text.splitlines(keepends=True)
    if split == "words":
        return text.split()
    return text

def format_item(item, split: str) -> str:
    if split == "lines":
        return item.rstrip('\r\n')
    if split == "words":
        return item
    if split == "bytes":
        return f"0x{item:02x}"
    return repr(item)

def print_spans(spans, items_a, items_b, split: str) -> None:
    for span in spans:
        print(f"{span.tag} a[{span.a_start}:{span.a_end}] b[{span.b_start}:{span.b_end}]")
        marker, side = MARKERS[span.tag]
        if side == 'a':
            items = items_a[span.a_start:span.a_end]
        else:
            items = items_b[span.b_start:span.b_end]
        for item in items:
            print(f"{marker} {format_item(item, split)}")

def main() -> None:
    parser = argparse.ArgumentParser(description="List the spans turning one file into another.")
    parser.add_argument("file_a", help="Original file")
    parser.add_argument("file_b", help="Changed file")
    parser.add_argument("--split", default="lines", choices=["lines", "words", "chars", "bytes"],
                        help="How to split the files into items (default: lines)")
    parser.add_argument("--encoding", default="utf-8", help="Text encoding (default: utf-8)")
    parser.add_argument("--json", action="store_true", help="Print spans as a JSON array")
    parser.add_argument("--skip-equal", action="store_true", help="Leave out equal spans")
    parser.add_argument("--longest", action="store_true", help="Only print the longest common run")
    parser.add_argument("--no-autojunk", action="store_true", help="Don't drop popular items from the index")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s: %(message)s')

    try:
        items_a = load_items(Path(args.file_a), args.split, args.encoding)
        items_b = load_items(Path(args.file_b), args.split, args.encoding)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    differ = Differ(items_a, items_b, autojunk=not args.no_autojunk)

    if args.longest:
        match = differ.longest_match(0, len(items_a), 0, len(items_b))
        if args.json:
            print(seqmatcher_json.dumps(match))
        else:
            print(f"a[{match.a_start}:{match.a_start + match.length}] "
                  f"b[{match.b_start}:{match.b_start + match.length}] length {match.length}")
        sys.exit(0 if match.length == len(items_a) == len(items_b) else 1)

    spans = differ.spans()
    logger.debug(f"{len(spans)} spans between {len(items_a)} and {len(items_b)} items")
    if args.skip_equal:
        shown = [span for span in spans if span.tag != Tag.EQUAL]
    else:
        shown = spans

    if args.json:
        print(seqmatcher_json.dumps(shown))
    else:
        print_spans(shown, items_a, items_b, args.split)

    sys.exit(0 if all(span.tag == Tag.EQUAL for span in spans) else 1)

if __name__ == "__main__":
    main()
