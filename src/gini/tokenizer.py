"""A single-pass INI tokenizer.

The tokenizer is a finite-state machine driven one character at a time.
It never backtracks, so INI text is consumed lazily as the caller iterates:
syntax errors are raised only once iteration reaches the offending character.
"""

import dataclasses
import enum
from collections.abc import Callable, Iterator
from typing import TypeVar

from ._chars import (
    COMMENT,
    NEWLINE,
    WHITESPACE,
    Expectation,
    is_name_end,
    is_name_mid,
    is_name_punctuation,
    is_name_start,
)
from .errors import IniSyntaxError

T = TypeVar("T")


@dataclasses.dataclass(frozen=True, slots=True)
class Triple:
    """A single INI entry and the section it appears in.

    Attributes:
        section: The section name, or None for entries before any section header.
        key: The entry's key, or None for key-less entries (i.e. `=value`).
        value: The entry's value, or None if there is nothing after the equals sign.
            Values never have leading or trailing whitespace and are never empty.
    """

    section: str | None
    key: str | None
    value: str | None


class State(enum.Enum):
    NEW_LINE = enum.auto()
    CR = enum.auto()
    COMMENT = enum.auto()
    SCAN_SECTION_NAME = enum.auto()
    SECTION_NAME = enum.auto()
    SCAN_SECTION_CLOSE = enum.auto()
    SECTION_CLOSURE = enum.auto()
    KEY = enum.auto()
    SCAN_EQUAL = enum.auto()
    SCAN_VALUE = enum.auto()
    VALUE = enum.auto()
    VALUE_WHITE_SPACE = enum.auto()


def tokenize(
    text: str | None,
    selector: Callable[[str | None, str | None, str | None], T] = Triple,
) -> Iterator[T]:
    """Tokenize INI text into entries.

    Args:
        text: The INI text. None is treated as empty text.
        selector: Called with the section, key and value of each entry to build the item to yield.
            Defaults to Triple.

    Yields:
        One item per entry, in document order.
        Sections without any entries yield nothing.

    Raises:
        IniSyntaxError: The text is malformed.
            Entries before the malformed construct are still yielded.
    """

    if not text:
        return

    state = State.NEW_LINE
    line = 1
    col = 1
    # Start of the name or value being read.
    si = 0
    # Start of whitespace that may be trailing a value.
    vtsi = -1
    section: str | None = None
    key: str | None = None

    def error(expectation: str, offset: int = 0) -> IniSyntaxError:
        return IniSyntaxError(line, col + offset, expectation)

    for i, ch in enumerate(text):
        redispatch = True

        while redispatch:
            redispatch = False

            if state is State.NEW_LINE:
                if ch in WHITESPACE:
                    pass
                elif ch == "[":
                    state = State.SCAN_SECTION_NAME
                elif ch in COMMENT:
                    state = State.COMMENT
                elif ch == "\n":
                    line += 1
                    col = 0
                elif ch == "\r":
                    state = State.CR
                elif is_name_start(ch):
                    si = i
                    state = State.KEY
                elif ch == "=":
                    key = None
                    state = State.SCAN_VALUE
                else:
                    raise error(Expectation.SECTION_KEY_OR_COMMENT)

            elif state is State.CR:
                if ch == "\r":
                    line += 1
                    col = 0
                elif ch == "\n":
                    # The second half of a CRLF pair: the new line handles the break.
                    state = State.NEW_LINE
                    redispatch = True
                else:
                    line += 1
                    col = 1
                    state = State.NEW_LINE
                    redispatch = True

            elif state is State.COMMENT:
                if ch == "\r":
                    state = State.CR
                elif ch == "\n":
                    state = State.NEW_LINE
                    redispatch = True

            elif state is State.SCAN_SECTION_NAME:
                if ch in WHITESPACE:
                    pass
                elif ch == "]":
                    section = None
                    state = State.SECTION_CLOSURE
                elif is_name_start(ch):
                    si = i
                    state = State.SECTION_NAME
                else:
                    raise error(Expectation.SECTION_NAME)

            elif state is State.SECTION_NAME:
                if ch in WHITESPACE or ch == "]":
                    if not is_name_end(text[i - 1]):
                        raise error(Expectation.RIGHT_BRACKET, offset=-1)

                    section = text[si:i]
                    state = State.SCAN_SECTION_CLOSE
                    redispatch = True
                elif is_name_mid(ch):
                    if ch == text[i - 1] and is_name_punctuation(ch):
                        raise error(Expectation.NON_PUNCTUATION)
                else:
                    raise error(Expectation.RIGHT_BRACKET)

            elif state is State.SCAN_SECTION_CLOSE:
                if ch in WHITESPACE:
                    pass
                elif ch == "]":
                    state = State.SECTION_CLOSURE
                else:
                    raise error(Expectation.RIGHT_BRACKET)

            elif state is State.SECTION_CLOSURE:
                if ch in WHITESPACE:
                    pass
                elif ch == "\r":
                    state = State.CR
                elif ch == "\n":
                    state = State.NEW_LINE
                    redispatch = True
                elif ch in COMMENT:
                    state = State.COMMENT
                else:
                    raise error(Expectation.COMMENT_OR_WHITE_SPACE)

            elif state is State.KEY:
                if ch in WHITESPACE or ch == "=":
                    if not is_name_end(text[i - 1]):
                        raise error(Expectation.EQUAL, offset=-1)

                    key = text[si:i]
                    state = State.SCAN_EQUAL
                    redispatch = True
                elif is_name_mid(ch):
                    if ch == text[i - 1] and is_name_punctuation(ch):
                        raise error(Expectation.NON_PUNCTUATION)
                else:
                    raise error(Expectation.EQUAL)

            elif state is State.SCAN_EQUAL:
                if ch in WHITESPACE:
                    pass
                elif ch == "=":
                    state = State.SCAN_VALUE
                else:
                    raise error(Expectation.EQUAL)

            elif state is State.SCAN_VALUE:
                if ch not in WHITESPACE:
                    si = i
                    state = State.VALUE
                    # An empty value: let the value state end the line.
                    redispatch = ch in NEWLINE

            elif state is State.VALUE:
                if ch in WHITESPACE:
                    vtsi = i
                    state = State.VALUE_WHITE_SPACE
                elif ch in NEWLINE:
                    if key is not None or si < i:
                        yield selector(section, key, text[si:i] or None)

                    if ch == "\r":
                        state = State.CR
                    else:
                        state = State.NEW_LINE
                        redispatch = True

            elif state is State.VALUE_WHITE_SPACE:
                if ch in WHITESPACE:
                    pass
                elif ch in NEWLINE:
                    # The whitespace was trailing after all.
                    if key is not None or si < vtsi:
                        yield selector(section, key, text[si:vtsi] or None)

                    state = State.NEW_LINE
                    redispatch = True
                else:
                    vtsi = -1
                    state = State.VALUE

        col += 1

    # Handle whatever the end of the text interrupted.
    if state is State.SCAN_SECTION_NAME:
        raise error(Expectation.SECTION_NAME)
    elif state is State.SECTION_NAME:
        raise error(Expectation.RIGHT_BRACKET, 0 if is_name_end(text[-1]) else -1)
    elif state is State.SCAN_SECTION_CLOSE:
        raise error(Expectation.RIGHT_BRACKET)
    elif state is State.KEY:
        raise error(Expectation.EQUAL, 0 if is_name_end(text[-1]) else -1)
    elif state is State.SCAN_EQUAL:
        raise error(Expectation.EQUAL)
    elif state is State.SCAN_VALUE:
        if key is not None:
            yield selector(section, key, None)
    elif state is State.VALUE:
        yield selector(section, key, text[si:] or None)
    elif state is State.VALUE_WHITE_SPACE:
        yield selector(section, key, text[si:vtsi] or None)
