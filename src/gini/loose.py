"""A line-based INI tokenizer built on a regular expression.

It accepts a looser grammar than gini.tokenizer:
names may contain any characters except the delimiters around them,
and there are no rules on punctuation in names.
"""

import re
from collections.abc import Callable, Iterator
from typing import TypeVar

from ._chars import Expectation
from .errors import IniSyntaxError
from .tokenizer import Triple

T = TypeVar("T")

RE_NEWLINE = re.compile(r"\r\n|\r|\n")

REGEX = re.compile(
    r"""
    # Anchor to the start of the line.
    ^ [ \t]*

    (?:
        # Match a section (a comment may follow it)...
        (?:\[ [ \t]* (?P<section>[^\]]*?) [ \t]* \] [ \t]* (?:[#;].*)?)
        # or a property (whitespace around the equals sign is ignored)...
        | (?:(?P<key>[^=\[#;]*?) [ \t]* = [ \t]* (?P<value>.*?))
        # or a comment.
        | (?:[#;].*)
    )?

    # Anchor to the end of the line.
    [ \t]* $
    """,
    flags=re.VERBOSE,
)


def _lines(text: str) -> Iterator[str]:
    start = 0

    for m in RE_NEWLINE.finditer(text):
        yield text[start : m.start()]
        start = m.end()

    yield text[start:]


def tokenize(
    text: str | None,
    selector: Callable[[str | None, str | None, str | None], T] = Triple,
) -> Iterator[T]:
    """Tokenize INI text into entries, one line at a time.

    Args:
        text: The INI text. None is treated as empty text.
        selector: Called with the section, key and value of each entry to build the item to yield.
            Defaults to Triple.

    Yields:
        One item per entry, in document order.

    Raises:
        IniSyntaxError: A line is neither a section, property, comment nor blank.
    """

    if not text:
        return

    section = None

    for n, line in enumerate(_lines(text), start=1):
        m = REGEX.match(line)
        if m is None:
            raise IniSyntaxError(n, 1, Expectation.SECTION_KEY_OR_COMMENT)

        if m["section"] is not None:
            section = m["section"] or None
        elif m["value"] is not None:
            key = m["key"] or None
            value = m["value"] or None

            if key is not None or value is not None:
                yield selector(section, key, value)
