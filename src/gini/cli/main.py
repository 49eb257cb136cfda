import logging
import pathlib
from typing import Annotated, Optional

import typer
from rich.table import Table
from rich.text import Text

from .._conv import converter
from ..errors import GiniError
from ..grouping import SectionGroup, same_section, same_section_exact
from ..ini import join_keys, parse, parse_flat_hash, parse_hash, read_text
from ..loose import tokenize as loose_tokenize
from ..tokenizer import tokenize as fsm_tokenize

from .console import console, err_console

LOG_LEVELS = [
    logging.CRITICAL,
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
]

_log = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True)

File = Annotated[
    pathlib.Path, typer.Argument(exists=True, dir_okay=False, resolve_path=True)
]
Encoding = Annotated[
    Optional[str],
    typer.Option(help="file encoding (detected if not given)"),
]
Loose = Annotated[
    bool, typer.Option(help="use the regex parser, which accepts a looser grammar")
]
CaseSensitive = Annotated[
    bool, typer.Option(help="treat section names and keys as case sensitive")
]


@app.callback()
def common(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, min=0, max=5, help="set logging level"
        ),
    ] = 0
):
    """Parse and inspect INI files."""

    if verbose == 0:
        logging.disable()
    else:
        logging.basicConfig(level=LOG_LEVELS[verbose - 1])


def _fail(e: Exception):
    err_console.print(str(e), style="red", markup=False)
    raise typer.Exit(1)


def _read(file: pathlib.Path, encoding: str | None) -> str:
    try:
        return read_text(file, encoding)
    except (GiniError, UnicodeDecodeError, LookupError) as e:
        _fail(e)


def _groups(
    file: pathlib.Path, encoding: str | None, use_loose: bool, case_sensitive: bool
) -> list[SectionGroup]:
    text = _read(file, encoding)

    _log.info("parsing %s", file)

    try:
        return list(
            parse(
                text,
                case_sensitive=case_sensitive,
                tokenizer=loose_tokenize if use_loose else fsm_tokenize,
            )
        )
    except GiniError as e:
        _fail(e)


@app.command()
def show(
    file: File,
    section: Annotated[
        Optional[str], typer.Option(help="only show groups of this section")
    ] = None,
    encoding: Encoding = None,
    loose: Loose = False,
    case_sensitive: CaseSensitive = False,
):
    """Show the section groups of an INI file."""

    eq = same_section_exact if case_sensitive else same_section

    for group in _groups(file, encoding, loose, case_sensitive):
        if section is not None and not eq(section or None, group.name):
            continue

        title = "(default)" if group.name is None else f"[{group.name}]"
        table = Table(title=Text(title))
        table.add_column("Key")
        table.add_column("Value")

        for entry in group:
            table.add_row(
                Text("-" if entry.key is None else entry.key),
                Text("-" if entry.value is None else entry.value),
            )

        console.print(table)


@app.command()
def get(
    file: File,
    section: Annotated[str, typer.Argument(help='section name ("" for the default section)')],
    key: Annotated[str, typer.Argument(help='key name ("" for key-less entries)')],
    encoding: Encoding = None,
    case_sensitive: CaseSensitive = False,
):
    """Print the value of a key. Exits with status 1 if the key does not exist."""

    text = _read(file, encoding)

    try:
        config = parse_hash(text, case_sensitive=case_sensitive)
    except GiniError as e:
        _fail(e)

    name = key or None

    entries = config.get(section)
    if entries is None or name not in entries:
        _log.warning("key not found: [%s] %s", section, key)
        raise typer.Exit(1)

    value = entries[name]
    console.print("" if value is None else value, markup=False, emoji=False)


@app.command()
def json(
    file: File,
    flat: Annotated[bool, typer.Option(help="merge all sections into one object")] = False,
    separator: Annotated[
        str, typer.Option(help="what to join section names and keys with if flat")
    ] = ".",
    encoding: Encoding = None,
    loose: Loose = False,
    case_sensitive: CaseSensitive = False,
):
    """Print an INI file as JSON."""

    if flat:
        text = _read(file, encoding)

        try:
            data = dict(
                parse_flat_hash(
                    text,
                    join_keys(separator),
                    case_sensitive=case_sensitive,
                    tokenizer=loose_tokenize if loose else fsm_tokenize,
                )
            )
        except GiniError as e:
            _fail(e)
    else:
        groups = _groups(file, encoding, loose, case_sensitive)
        data = converter.unstructure(groups, list[SectionGroup])

    console.print_json(data=data)


@app.command()
def check(
    file: File,
    encoding: Encoding = None,
    loose: Loose = False,
):
    """Check that an INI file parses."""

    groups = _groups(file, encoding, loose, False)

    _log.info(
        "%d group(s), %d entries", len(groups), sum(len(g) for g in groups)
    )
    console.print("OK", style="green")
