import logging
from collections.abc import Iterable, Sequence

from pydiffer.seqmatcher import Span, Tag


logger = logging.getLogger(__name__)


def apply_spans(a: Sequence, b: Sequence, spans: Iterable[Span]) -> list:
    """
    Rebuilds b as a list by replaying spans over a.

    Equal copies a's range, delete skips it, insert and replace take b's
    range instead. The spans must walk a and b contiguously from index 0,
    as Differ.spans() produces them.

    Raises ValueError on a gap, an overlap, or a range outside a or b.
    """
    result = []
    a_pos = b_pos = 0

    for span in spans:
        tag, a_start, a_end, b_start, b_end = span
        if a_start != a_pos or b_start != b_pos:
            raise ValueError(
                f"Span {tuple(span)} does not continue at a={a_pos}, b={b_pos}")
        if a_end < a_start or b_end < b_start or a_end > len(a) or b_end > len(b):
            raise ValueError(f"Span {tuple(span)} is out of range")

        if tag == Tag.EQUAL:
            result.extend(a[a_start:a_end])
        elif tag in (Tag.INSERT, Tag.REPLACE):
            result.extend(b[b_start:b_end])
        elif tag != Tag.DELETE:
            raise ValueError(f"Unknown span tag: {tag!r}")

        a_pos, b_pos = a_end, b_end

    if a_pos != len(a) or b_pos != len(b):
        raise ValueError(
            f"Spans stop at a={a_pos}, b={b_pos} before the end ({len(a)}, {len(b)})")

    logger.debug(f"Rebuilt {len(result)} items from {len(a)}")
    return result
