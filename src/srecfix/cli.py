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

"""
Module that contains the command line app.

Why does this file exist, and why not put this in __main__?

  You might be tempted to import things from __main__ later, but that will cause
  problems: the code will get executed twice:

  - When you run `python -m srecfix` python will execute
    ``__main__.py`` as a script. That means there won't be any
    ``srecfix.__main__`` in ``sys.modules``.
  - When you import __main__ it will get executed again (as a module) because
    there's no ``srecfix.__main__`` in ``sys.modules``.

  Also see (1) from https://click.palletsprojects.com/en/stable/setuptools/#setuptools-integration
"""

import sys
from typing import List
from typing import Optional
from typing import Sequence

import click

from . import __version__
from .checksum import format_checksum
from .config import Settings
from .document import SrecDocument
from .session import AddressError
from .session import Session


class AddressParamType(click.ParamType):
    name = 'address'

    def convert(self, value, param, ctx):
        if isinstance(value, int):
            return value
        try:
            return Session().parse_address(value)
        except AddressError as exc:
            self.fail(str(exc), param, ctx)


ADDRESS = AddressParamType()

FILE_PATH_IN = click.Path(dir_okay=False, allow_dash=True, readable=True, exists=True)
FILE_PATH_OUT = click.Path(dir_okay=False, allow_dash=True, writable=True)


# ----------------------------------------------------------------------------

def read_lines(path: Optional[str]) -> List[str]:
    r"""Reads text lines, keeping their terminators.

    Args:
        path (str):
            Input file path; ``None`` or ``-`` for standard input.

    Returns:
        list of str: Lines of text.
    """

    if path is None or path == '-':
        text = sys.stdin.read()
    else:
        with open(path, 'rt', newline='') as file:
            text = file.read()
    return text.splitlines(keepends=True)


def write_lines(path: Optional[str], lines: Sequence[str]) -> None:
    r"""Writes text lines as they are.

    Args:
        path (str):
            Output file path; ``None`` or ``-`` for standard output.

        lines (str list):
            Lines of text, with their terminators.
    """

    text = ''.join(lines)
    if path is None or path == '-':
        click.echo(text, nl=False)
    else:
        with open(path, 'wt', newline='') as file:
            file.write(text)


def highlight_line(session: Session, line: str, span) -> str:

    line = line.rstrip('\r\n')
    start, endex = span
    settings = session.settings
    if settings.crc_color_fallback:
        color = settings.color_rgb
    else:
        color = 'red'
    digits = click.style(line[start:endex], fg=color, bold=True)
    return line[:start] + digits + line[endex:]


def print_version(ctx, _, value):

    if not value or ctx.resilient_parsing:
        return

    click.echo(str(__version__))
    ctx.exit()


# ============================================================================

@click.group(context_settings=dict(auto_envvar_prefix='SRECFIX'))
@click.option('--color-fallback/--no-color-fallback', 'crc_color_fallback',
              default=False, show_default=True, help="""
    Highlights bad checksums with the custom color.
""")
@click.option('--custom-color', 'crc_custom_color', default='#ff1744',
              show_default=True, help="""
    Custom highlight color, as #RRGGBB.
""")
@click.option('--repair-on-save/--no-repair-on-save', 'repair_on_save',
              default=False, show_default=True, help="""
    Repairs bad checksums while checking, saving the input file.
    Not applied to the standard input.
""")
@click.option('-v', '--version', is_flag=True, is_eager=True,
              expose_value=False, callback=print_version, help="""
    Prints the package version number.
""")
@click.pass_context
def main(
    ctx: click.Context,
    crc_color_fallback: bool,
    crc_custom_color: str,
    repair_on_save: bool,
) -> None:
    """
    Command line utilities to check and repair Motorola S-record checksums.

    Options can also be set via environment variables prefixed with
    ``SRECFIX_``, like ``SRECFIX_REPAIR_ON_SAVE=1``.
    """

    try:
        settings = Settings(
            crc_color_fallback=crc_color_fallback,
            crc_custom_color=crc_custom_color,
            repair_on_save=repair_on_save,
        )
    except ValueError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param_hint="'--custom-color'")

    ctx.obj = Session(settings)
    ctx.call_on_close(ctx.obj.dispose)


# ----------------------------------------------------------------------------

@main.command()
@click.argument('infile', type=FILE_PATH_IN)
@click.pass_obj
def check(
    session: Session,
    infile: str,
) -> None:
    r"""Checks record checksums.

    ``INFILE`` is the path of the input file.
    Set to ``-`` to read from standard input.

    Each bad record is reported with its line number and expected checksum.
    Exits with status 1 if any bad records are left.
    """

    lines = read_lines(infile)

    result = None if infile == '-' else session.on_save(lines)
    if result is not None and result.count:
        write_lines(infile, result.lines)
        click.echo(session.repair_message(result.count), err=True)
        lines = result.lines

    diagnostics = session.diagnostics(lines)
    for diagnostic in diagnostics:
        text = highlight_line(session, lines[diagnostic.index], diagnostic.highlight)
        click.echo(f'{infile}:{diagnostic.index + 1}: {diagnostic.message}: {text}')

    if diagnostics:
        click.get_current_context().exit(1)


# ----------------------------------------------------------------------------

@main.command()
@click.argument('infile', type=FILE_PATH_IN)
@click.argument('outfile', type=FILE_PATH_OUT, required=False)
@click.pass_obj
def repair(
    session: Session,
    infile: str,
    outfile: Optional[str],
) -> None:
    r"""Repairs record checksums.

    ``INFILE`` is the path of the input file.
    Set to ``-`` to read from standard input.

    ``OUTFILE`` is the path of the output file.
    Set to ``-`` to write to standard output.
    Leave empty to overwrite ``INFILE``.

    Only the checksum digits of bad records are rewritten; any other lines
    are kept as they are.
    """

    if not outfile:
        outfile = infile

    document = SrecDocument(read_lines(infile))
    count = document.repair()
    write_lines(outfile, document.lines)
    click.echo(session.repair_message(count), err=True)


# ----------------------------------------------------------------------------

@main.command()
@click.argument('address', type=ADDRESS)
@click.argument('infile', type=FILE_PATH_IN)
@click.pass_obj
def find(
    session: Session,
    address: int,
    infile: str,
) -> None:
    r"""Finds the data record holding an address.

    ``ADDRESS`` is the target address, like ``0x1234`` or ``4660``.

    ``INFILE`` is the path of the input file.
    Set to ``-`` to read from standard input.

    Prints the line number and text of the matching record.
    Exits with status 1 if not found.
    """

    document = SrecDocument(read_lines(infile))
    index = document.find_address(address)

    if index is None:
        click.echo(session.not_found_message(address), err=True)
        click.get_current_context().exit(1)
    else:
        line = document.lines[index].rstrip('\r\n')
        click.echo(f'{index + 1}: {line}')


# ----------------------------------------------------------------------------

@main.command()
@click.argument('infile', type=FILE_PATH_IN)
@click.pass_obj
def info(
    session: Session,
    infile: str,
) -> None:
    r"""Describes each record.

    ``INFILE`` is the path of the input file.
    Set to ``-`` to read from standard input.

    Prints the line number, tag, address and data size of each record,
    marking bad checksums.
    """

    lines = read_lines(infile)
    bad = {mismatch.index: mismatch for mismatch in SrecDocument(lines).scan()}

    for index, line in enumerate(lines):
        text = session.status_text(line)
        if text:
            mismatch = bad.get(index)
            if mismatch is not None:
                text += f' [CRC {format_checksum(mismatch.actual)} != {format_checksum(mismatch.expected)}]'
            click.echo(f'{index + 1}: {text}')
