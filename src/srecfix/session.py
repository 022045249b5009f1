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

r"""Presentation session.

A :class:`Session` turns core results into what the user sees: diagnostics,
highlight colors, status texts and messages.
It also validates address input, and applies the *repair on save* policy.
"""

import re
from typing import List
from typing import NamedTuple
from typing import Optional
from typing import Sequence
from typing import Tuple

from .checksum import checksum_span
from .checksum import format_checksum
from .config import Settings
from .document import RepairResult
from .document import repair
from .document import scan
from .records import SrecLine

THEME_ERROR_COLOR: str = 'editorError.foreground'
r"""Theme color key used when no fallback color is configured."""

ADDRESS_REGEX = re.compile(r'^\s*(?:0[xX](?P<hex>[0-9A-Fa-f]+)|(?P<dec>[0-9]+))\s*$')
r"""Address input regex: decimal, or hexadecimal prefixed by ``0x``."""


class AddressError(ValueError):
    r"""Invalid address input."""


class Diagnostic(NamedTuple):
    r"""User-visible checksum error marker."""

    index: int
    r"""Zero-based line index."""

    span: Tuple[int, int]
    r"""Character range of the whole line."""

    highlight: Tuple[int, int]
    r"""Character range of the declared checksum digits."""

    message: str
    r"""Error message."""

    severity: str = 'error'
    r"""Severity level."""


class Session:
    r"""Presentation session.

    It is built for a given configuration; build a new one whenever the
    configuration changes, and :meth:`dispose` the old one.

    Args:
        settings (:class:`Settings`):
            Configuration; default settings if ``None``.
    """

    def __init__(self, settings: Optional[Settings] = None):

        if settings is None:
            settings = Settings()

        self._settings: Optional[Settings] = settings

    def __enter__(self) -> 'Session':

        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:

        self.dispose()

    @property
    def disposed(self) -> bool:

        return self._settings is None

    @property
    def settings(self) -> Settings:

        settings = self._settings
        if settings is None:
            raise RuntimeError('session disposed')
        return settings

    def dispose(self) -> None:

        self._settings = None

    def decoration_color(self) -> str:
        r"""Checksum highlight color.

        Returns:
            str: The custom color if the fallback is enabled, else the theme
            error color key.
        """

        settings = self.settings
        if settings.crc_color_fallback:
            return settings.crc_custom_color
        else:
            return THEME_ERROR_COLOR

    def diagnostics(self, lines: Sequence[str]) -> List[Diagnostic]:
        r"""Builds diagnostics for checksum mismatches.

        Args:
            lines (str list):
                Lines of text.

        Returns:
            list of :class:`Diagnostic`: One per mismatching line.
        """

        if self.disposed:
            raise RuntimeError('session disposed')
        diagnostics = []

        for mismatch in scan(lines):
            line = lines[mismatch.index]
            diagnostic = Diagnostic(
                index=mismatch.index,
                span=(0, len(line)),
                highlight=checksum_span(line),
                message=f'CRC error, expected {format_checksum(mismatch.expected)}',
            )
            diagnostics.append(diagnostic)

        return diagnostics

    def on_save(self, lines: Sequence[str]) -> Optional[RepairResult]:
        r"""Applies the *repair on save* policy.

        Args:
            lines (str list):
                Lines about to be saved.

        Returns:
            :class:`RepairResult`: Repair outcome, or ``None`` if the policy
            is disabled.
        """

        if self.settings.repair_on_save:
            return repair(lines)
        else:
            return None

    def parse_address(self, text: str) -> int:
        r"""Parses an address typed by the user.

        Args:
            text (str):
                Address text, like ``0x1234`` or ``4660``.
                Leading zeros do not select octal.

        Returns:
            int: Address.

        Raises:
            :class:`AddressError`: malformed or negative address.
        """

        match = ADDRESS_REGEX.match(text) if isinstance(text, str) else None
        if not match:
            raise AddressError('Wrong address format.')

        groups = match.groupdict()
        if groups['hex'] is not None:
            return int(groups['hex'], 16)
        else:
            return int(groups['dec'], 10)

    @staticmethod
    def not_found_message(address: int) -> str:

        return f'The address 0x{address:x} was not found.'

    @staticmethod
    def repair_message(count: int) -> str:
        r"""Describes a repair outcome.

        Examples:
            >>> Session.repair_message(1)
            '1 record has been repaired.'
            >>> Session.repair_message(3)
            '3 records have been repaired.'
            >>> Session.repair_message(0)
            'Nothing has been done.'
        """

        if count == 1:
            return '1 record has been repaired.'
        elif count > 1:
            return f'{count} records have been repaired.'
        else:
            return 'Nothing has been done.'

    @staticmethod
    def status_text(line: str) -> str:
        r"""Status bar text for the line under the cursor.

        Args:
            line (str):
                Line of text.

        Returns:
            str: Record tag, address and data size; empty if `line` cannot be
            decoded as a record.

        Examples:
            >>> Session.status_text('S1070100DEADBEEFBF')
            'S1 @ 0x0100 (4 bytes)'
            >>> Session.status_text('S9030000FC')
            'S9 @ 0x0000'
            >>> Session.status_text('hello')
            ''
        """

        record = SrecLine.parse(line)
        if record is None:
            return ''

        tag = record.tag
        size = tag.get_address_size()
        text = f'S{tag:d}'
        if size:
            text += f' @ 0x{record.address:0{size * 2}X}'
        if tag.is_data():
            text += f' ({len(record.data)} bytes)'
        return text
