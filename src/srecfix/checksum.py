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

r"""S-record checksum engine.

The *expected* checksum is the one's complement of the 8-bit sum of all the
payload bytes following the ``S<tag>`` marker, checksum byte excluded.
The *declared* checksum is the last byte written on the line.

Both functions return ``None`` for lines which are not records, or which do
not hold enough hexadecimal digits.
"""

from typing import Optional
from typing import Tuple

from deprecated import deprecated

from .records import RECORD_REGEX
from .utils import hex_digits
from .utils import hex_positions


def is_record(line: str) -> bool:
    r"""Tells whether a line is an S-record.

    Args:
        line (str):
            Line of text.

    Returns:
        bool: `line` starts with ``S`` followed by a decimal digit.

    Examples:
        >>> is_record('S1130100')
        True
        >>> is_record('s1130100')
        False
        >>> is_record('SX')
        False
    """

    return RECORD_REGEX.match(line) is not None


def compute_expected_checksum(line: str) -> Optional[int]:
    r"""Computes the expected checksum of a line.

    The first two characters (``S<tag>``) are skipped, then any
    non-hexadecimal characters are removed.
    At least four hexadecimal digits are required.

    Args:
        line (str):
            Line of text.

    Returns:
        int: Expected checksum byte, or ``None``.

    Examples:
        >>> compute_expected_checksum('S1137AF00A0A0D0000000000000000000061')
        97
        >>> compute_expected_checksum('S9') is None
        True
        >>> compute_expected_checksum('S1123') is None
        True
    """

    if not is_record(line):
        return None

    hexstr = hex_digits(line[2:])
    if len(hexstr) < 4:
        return None

    checksum = 0
    for i in range(0, len(hexstr) - 2, 2):
        checksum += int(hexstr[i:(i + 2)], 16)
    checksum = ~checksum & 0xFF
    return checksum


def extract_declared_checksum(line: str) -> Optional[int]:
    r"""Extracts the declared checksum of a line.

    Any non-hexadecimal characters are removed from the whole line, record
    tag digit included, and the last two digits are taken.

    Args:
        line (str):
            Line of text.

    Returns:
        int: Declared checksum byte, or ``None``.

    Examples:
        >>> extract_declared_checksum('S1137AF00A0A0D0000000000000000000061')
        97
        >>> extract_declared_checksum('S12')
        18
        >>> extract_declared_checksum('S9') is None
        True
    """

    if not is_record(line):
        return None

    hexstr = hex_digits(line)
    if len(hexstr) < 2:
        return None

    return int(hexstr[-2:], 16)


def checksum_span(line: str) -> Optional[Tuple[int, int]]:
    r"""Locates the declared checksum digits.

    Args:
        line (str):
            Line of text.

    Returns:
        (int, int): Start and exclusive end character offsets of the last two
        hexadecimal digits of a record line, or ``None``.

    Examples:
        >>> checksum_span('S9030000FC\r\n')
        (8, 10)
        >>> checksum_span('S1 04 0000 01 F A')
        (14, 17)
    """

    if not is_record(line):
        return None

    positions = hex_positions(line)
    if len(positions) < 2:
        return None

    return positions[-2], positions[-1] + 1


def format_checksum(checksum: int) -> str:
    r"""Formats a checksum byte.

    Args:
        checksum (int):
            Checksum byte.

    Returns:
        str: Two uppercase hexadecimal digits.

    Examples:
        >>> format_checksum(10)
        '0A'
    """

    return f'{checksum & 0xFF:02X}'


@deprecated(reason='Use compute_expected_checksum() instead')
def calc_srec_checksum(line: str) -> Optional[int]:

    return compute_expected_checksum(line)


@deprecated(reason='Use extract_declared_checksum() instead')
def get_line_checksum(line: str) -> Optional[int]:

    return extract_declared_checksum(line)
