# Copyright (c) 2013-2025, Andrea Zoppi
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# 1. Redistributions of source code must retain the above copyright notice,
#    this list of conditions and the following disclaimer.
#
# 2. Redistributions in binary form must reproduce the above copyright
#    notice, this list of conditions and the following disclaimer in the
#    documentation and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
# AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE
# ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE
# LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR
# CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF
# SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS
# INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN
# CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE)
# ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
# POSSIBILITY OF SUCH DAMAGE.

r"""S-record document model.

It scans a sequence of text lines for checksum mismatches, repairs them, and
looks up the line holding a given address.
Lines which are not records are ignored by :func:`scan` and passed through
unchanged by :func:`repair`.
"""

from typing import Iterable
from typing import Iterator
from typing import List
from typing import MutableSequence
from typing import NamedTuple
from typing import Optional
from typing import Sequence

from .checksum import checksum_span
from .checksum import compute_expected_checksum
from .checksum import extract_declared_checksum
from .checksum import format_checksum
from .records import SrecLine


class Mismatch(NamedTuple):
    r"""Checksum mismatch of a record line."""

    index: int
    r"""Zero-based line index."""

    expected: int
    r"""Computed checksum."""

    actual: int
    r"""Declared checksum."""


class RepairResult(NamedTuple):
    r"""Outcome of :func:`repair`."""

    lines: List[str]
    r"""Repaired lines."""

    count: int
    r"""Number of lines actually modified."""


def check_line(index: int, line: str) -> Optional[Mismatch]:
    r"""Checks a single line.

    Args:
        index (int):
            Line index, reported back.

        line (str):
            Line of text.

    Returns:
        :class:`Mismatch`: The mismatch, or ``None`` if the checksums match
        or are not applicable.
    """

    expected = compute_expected_checksum(line)
    if expected is None:
        return None

    actual = extract_declared_checksum(line)
    if actual is None or actual == expected:
        return None

    return Mismatch(index, expected, actual)


def repair_line(line: str) -> str:
    r"""Repairs a single line.

    Only the last two hexadecimal digits are rewritten, so that any
    separators and line terminators are kept.

    Args:
        line (str):
            Line of text.

    Returns:
        str: Repaired line, or `line` itself if no repair was needed.

    Examples:
        >>> repair_line('S9030000FB\n')
        'S9030000FC\n'
        >>> repair_line('S1 04 0000 01 FF')
        'S1 04 0000 01 FA'
    """

    mismatch = check_line(0, line)
    if mismatch is None:
        return line

    start, endex = checksum_span(line)
    high, low = format_checksum(mismatch.expected)
    chars = list(line)
    chars[start] = high
    chars[endex - 1] = low
    return ''.join(chars)


class ScanResult:
    r"""Lazy checksum mismatch sequence.

    Each iteration scans the underlying lines again, so that it reflects
    their current contents.

    Args:
        lines (str list):
            Lines of text.
    """

    def __init__(self, lines: Sequence[str]):

        self._lines = lines

    def __bool__(self) -> bool:

        for _ in self:
            return True
        return False

    def __iter__(self) -> Iterator[Mismatch]:

        for index, line in enumerate(self._lines):
            mismatch = check_line(index, line)
            if mismatch is not None:
                yield mismatch

    def __len__(self) -> int:

        return sum(1 for _ in self)

    def __repr__(self) -> str:

        return f'<{type(self).__name__} {list(self)!r}>'


def scan(lines: Sequence[str]) -> ScanResult:
    r"""Scans lines for checksum mismatches.

    Args:
        lines (str list):
            Lines of text.

    Returns:
        :class:`ScanResult`: Mismatches, by ascending line index.

    Examples:
        >>> list(scan(['S9030000FC', 'hello', 'S9030000FB']))
        [Mismatch(index=2, expected=252, actual=251)]
    """

    return ScanResult(lines)


def repair(lines: Iterable[str]) -> RepairResult:
    r"""Repairs checksum mismatches.

    Args:
        lines (str list):
            Lines of text; left untouched.

    Returns:
        :class:`RepairResult`: Repaired copy of `lines`, and the number of
        modified lines.
    """

    repaired = []
    count = 0

    for line in lines:
        fixed = repair_line(line)
        if fixed != line:
            count += 1
        repaired.append(fixed)

    return RepairResult(repaired, count)


def find_address(lines: Iterable[str], address: int) -> Optional[int]:
    r"""Finds the line holding an address.

    Only *data* records (``S1``, ``S2``, ``S3``) are considered; a record
    matches if `address` falls within its data field.

    Args:
        lines (str list):
            Lines of text.

        address (int):
            Target address.

    Returns:
        int: Index of the first matching line, or ``None`` if not found.

    Examples:
        >>> find_address(['S00600004844521B', 'S1070100DEADBEEFBF'], 0x102)
        1
        >>> find_address(['S1070100DEADBEEFBF'], 0x104) is None
        True
    """

    if address < 0:
        return None

    for index, line in enumerate(lines):
        record = SrecLine.parse(line)
        if record is not None and record.contains(address):
            return index

    return None


class SrecDocument:
    r"""S-record document.

    It wraps a mutable buffer of lines owned by the caller, such as an open
    editor document. The buffer is read at each call, and modified only by
    :meth:`repair`.

    Args:
        lines (str list):
            Mutable sequence of lines.
    """

    def __init__(self, lines: MutableSequence[str]):

        self.lines: MutableSequence[str] = lines

    @property
    def line_count(self) -> int:

        return len(self.lines)

    def find_address(self, address: int) -> Optional[int]:

        return find_address(self.lines, address)

    def repair(self) -> int:
        r"""Repairs checksum mismatches in place.

        Returns:
            int: Number of modified lines.
        """

        lines = self.lines
        count = 0

        for index, line in enumerate(lines):
            fixed = repair_line(line)
            if fixed != line:
                lines[index] = fixed
                count += 1

        return count

    def scan(self) -> ScanResult:

        return scan(self.lines)
