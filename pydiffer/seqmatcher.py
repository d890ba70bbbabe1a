import logging
from collections import namedtuple
from collections.abc import Hashable, Sequence
from enum import Enum


logger = logging.getLogger(__name__)

# Popularity filter: only applied when b has at least this many items.
AUTOJUNK_MIN_LEN = 200


class Tag(str, Enum):
    """Kind of a Span. Values compare equal to difflib's opcode tags."""

    EQUAL = 'equal'
    INSERT = 'insert'
    DELETE = 'delete'
    REPLACE = 'replace'

    def __str__(self) -> str:
        return self.value


Match = namedtuple('Match', 'a_start b_start length')
Match.__doc__ = """One contiguous run: a[a_start:a_start+length] == b[b_start:b_start+length]."""


class Span(namedtuple('Span', 'tag a_start a_end b_start b_end')):
    """
    One edit (or equal region) turning a into b.

    The ranges are half-open, so a Span unpacks exactly like a difflib
    opcode: ``tag, i1, i2, j1, j2 = span``.
    """

    __slots__ = ()

    @classmethod
    def equal(cls, a_start: int, a_end: int, b_start: int, b_end: int) -> 'Span':
        return cls(Tag.EQUAL, a_start, a_end, b_start, b_end)

    @classmethod
    def insert(cls, a_start: int, a_end: int, b_start: int, b_end: int) -> 'Span':
        return cls(Tag.INSERT, a_start, a_end, b_start, b_end)

    @classmethod
    def delete(cls, a_start: int, a_end: int, b_start: int, b_end: int) -> 'Span':
        return cls(Tag.DELETE, a_start, a_end, b_start, b_end)

    @classmethod
    def replace(cls, a_start: int, a_end: int, b_start: int, b_end: int) -> 'Span':
        return cls(Tag.REPLACE, a_start, a_end, b_start, b_end)


class Differ:
    """
    Compares two sequences of hashable items and reports how to turn a into b.

    The items can be lines, words, characters, bytes or any custom record,
    as long as ``__hash__`` and ``__eq__`` use the same data. Items that are
    equal but hash differently (or the reverse) silently produce wrong
    matches; this is not checked.

    The matching follows difflib.SequenceMatcher without the isjunk hook:
    b is indexed once, then the longest common run is searched recursively
    in the unmatched regions on each side of the best match.

    Please see https://github.com/python/cpython/blob/3.14/Lib/difflib.py

    >>> d = Differ("qabxcd", "abycdf")
    >>> [str(s.tag) for s in d.spans()]
    ['delete', 'equal', 'replace', 'equal', 'insert']
    """

    def __init__(self,
        a: Sequence[Hashable],
        b: Sequence[Hashable],
        autojunk: bool = True,
    ) -> None:
        self.a = a
        self.b = b
        self.autojunk = autojunk
        self.b2j: dict[Hashable, list[int]] = {}
        self.bpopular: set[Hashable] = set()
        self.__chain_b()

    def __chain_b(self) -> None:
        # Build b2j ignoring popularity first; purging afterwards is much
        # cheaper than testing every element while indexing.
        b = self.b
        b2j = self.b2j

        for i, elt in enumerate(b):
            indices = b2j.setdefault(elt, [])
            indices.append(i)

        popular = self.bpopular
        n = len(b)
        if self.autojunk and n >= AUTOJUNK_MIN_LEN:
            ntest = n // 100 + 1
            for elt, idxs in b2j.items():
                if len(idxs) > ntest:
                    popular.add(elt)
            for elt in popular:  # separate loop, can't resize b2j while iterating
                del b2j[elt]

        logger.debug(f"Indexed {n} items of b: {len(b2j)} distinct, {len(popular)} popular purged")

    def _check_range(self, name: str, start: int, end: int, length: int) -> None:
        if start < 0 or start > end or end > length:
            raise ValueError(
                f"Invalid range for sequence {name}: [{start}, {end}) with length {length}")

    def longest_match(self, a_start: int, a_end: int, b_start: int, b_end: int) -> Match:
        """
        Find the longest matching run in a[a_start:a_end] and b[b_start:b_end].

        Ties go to the run starting earliest in a, then earliest in b. If
        nothing matches, returns ``Match(a_start, b_start, 0)``; an empty
        range always does.

        Raises ValueError if a range is reversed, negative or runs past the
        end of its sequence.
        """
        self._check_range('a', a_start, a_end, len(self.a))
        self._check_range('b', b_start, b_end, len(self.b))

        a, b, b2j = self.a, self.b, self.b2j
        besti, bestj, bestsize = a_start, b_start, 0
        # during an iteration of the loop, j2len[j] = length of longest
        # indexed match ending with a[i-1] and b[j]
        j2len: dict[int, int] = {}
        nothing: list[int] = []
        for i in range(a_start, a_end):
            j2lenget = j2len.get
            newj2len = {}
            for j in b2j.get(a[i], nothing):
                # a[i] matches b[j]
                if j < b_start:
                    continue
                if j >= b_end:
                    break
                k = newj2len[j] = j2lenget(j - 1, 0) + 1
                if k > bestsize:
                    besti, bestj, bestsize = i - k + 1, j - k + 1, k
            j2len = newj2len

        # Popular elements aren't in b2j, so the best run can't contain
        # them yet. Extend it on both ends by plain equality.
        while besti > a_start and bestj > b_start and \
              a[besti - 1] == b[bestj - 1]:
            besti, bestj, bestsize = besti - 1, bestj - 1, bestsize + 1
        while besti + bestsize < a_end and bestj + bestsize < b_end and \
              a[besti + bestsize] == b[bestj + bestsize]:
            bestsize += 1

        return Match(besti, bestj, bestsize)

    def matches(self) -> list[Match]:
        """Return the list of matching runs, ordered and non-overlapping.

        Each Match ``(i, j, n)`` means ``a[i:i+n] == b[j:j+n]``. Runs are
        monotonically increasing in i and in j, and adjacent runs are merged,
        so two consecutive entries never describe touching equal blocks.

        The last entry is a sentinel, ``(len(a), len(b), 0)``, and is the
        only one with length 0.

        >>> Differ("abxcd", "abcd").matches()
        [Match(a_start=0, b_start=0, length=2), Match(a_start=3, b_start=2, length=2), Match(a_start=5, b_start=4, length=0)]
        """
        la, lb = len(self.a), len(self.b)

        # Naturally recursive, but a work list keeps the stack depth
        # independent of the input size. Results are sorted at the end so
        # the pop order doesn't matter.
        queue = [(0, la, 0, lb)]
        found = []
        while queue:
            alo, ahi, blo, bhi = queue.pop()
            i, j, k = x = self.longest_match(alo, ahi, blo, bhi)
            # a[alo:i] vs b[blo:j] unknown
            # a[i:i+k] same as b[j:j+k]
            # a[i+k:ahi] vs b[j+k:bhi] unknown
            if k:   # if k is 0, there was no matching run
                found.append(x)
                if alo < i and blo < j:
                    queue.append((alo, i, blo, j))
                if i + k < ahi and j + k < bhi:
                    queue.append((i + k, ahi, j + k, bhi))
        found.sort()

        # Collapse runs that touch on both axes into one.
        i1 = j1 = k1 = 0
        non_adjacent = []
        for i2, j2, k2 in found:
            if i1 + k1 == i2 and j1 + k1 == j2:
                k1 += k2
            else:
                # k1 == 0 is the empty run we started with
                if k1:
                    non_adjacent.append(Match(i1, j1, k1))
                i1, j1, k1 = i2, j2, k2
        if k1:
            non_adjacent.append(Match(i1, j1, k1))

        non_adjacent.append(Match(la, lb, 0))
        logger.debug(f"Found {len(non_adjacent) - 1} matching runs between {la} and {lb} items")
        return non_adjacent

    def spans(self) -> list[Span]:
        """
        Return the spans (equal, insert, delete, replace) turning a into b.

        If both the matches and the spans are needed, call matches() once and
        pass the result to spans_for_matches() instead.
        """
        return spans_for_matches(self.matches())


def spans_for_matches(matches: Sequence[Match]) -> list[Span]:
    """
    Return the spans turning a into b, given precomputed matches.

    The matches must be ordered and non-overlapping, as returned by
    Differ.matches(), including the trailing sentinel; without it a gap
    after the last real match is not reported.
    """
    spans = []
    i = j = 0
    for ai, bj, size in matches:
        if i < ai and j < bj:
            spans.append(Span.replace(i, ai, j, bj))
        elif i < ai:
            spans.append(Span.delete(i, ai, j, j))
        elif j < bj:
            spans.append(Span.insert(i, i, j, bj))
        i, j = ai + size, bj + size
        if size:
            spans.append(Span.equal(ai, i, bj, j))
    return spans
