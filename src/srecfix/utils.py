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

r"""Generic utility functions."""

import re
from typing import Sequence

NON_HEX_REGEX = re.compile(r'[^0-9A-Fa-f]')
r"""Matches any character which is not a hexadecimal digit."""

HEX_DIGITS = frozenset('0123456789ABCDEFabcdef')
r"""Hexadecimal digit characters."""


def hex_digits(text: str) -> str:
    r"""Keeps only hexadecimal digits.

    Args:
        text (str):
            Source text.

    Returns:
        str: `text` without any non-hexadecimal characters.

    Examples:
        >>> hex_digits('S1 13 7A-F0\r\n')
        '1137AF0'
    """

    return NON_HEX_REGEX.sub('', text)


def hex_positions(text: str) -> Sequence[int]:
    r"""Locates hexadecimal digits.

    Args:
        text (str):
            Source text.

    Returns:
        list of int: Character offsets of the hexadecimal digits within `text`.

    Examples:
        >>> hex_positions('S9 03\r\n')
        [1, 3, 4]
    """

    return [i for i, c in enumerate(text) if c in HEX_DIGITS]
