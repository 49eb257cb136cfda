import collections
import logging
import pathlib
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import IO, Any, Generic, TypeVar

import chardet

from .errors import GiniError
from .grouping import SectionGroup, group_adjacent, same_section, same_section_exact
from .tokenizer import Triple
from .tokenizer import tokenize as fsm_tokenize

V = TypeVar("V")

Tokenizer = Callable[[str | None], Iterator[Triple]]
KeyMerger = Callable[[str | None, str | None], str]

_log = logging.getLogger(__name__)


class NameDict(collections.UserDict[str | None, V], Generic[V]):
    """A dict of section or key names.

    Unless case sensitive, names that differ only in case are the same name,
    and the spelling that was set first is kept.

    Attributes:
        case_sensitive: Whether or not names are compared case-sensitively.
    """

    case_sensitive: bool

    def __init__(
        self,
        data: Mapping[str | None, V] | None = None,
        *,
        case_sensitive: bool = False,
    ):
        self.case_sensitive = case_sensitive
        # Folded names mapped to their first spelling.
        self._names: dict[str | None, str | None] = {}

        super().__init__(data)

    def _fold(self, name: str | None) -> str | None:
        if name is None or self.case_sensitive:
            return name

        return name.casefold()

    def __getitem__(self, name: str | None) -> V:
        return self.data[self._names[self._fold(name)]]

    def __setitem__(self, name: str | None, value: V):
        name = self._names.setdefault(self._fold(name), name)
        self.data[name] = value

    def __delitem__(self, name: str | None):
        del self.data[self._names.pop(self._fold(name))]

    def __contains__(self, name: Any) -> bool:
        if name is not None and not isinstance(name, str):
            return False

        return self._fold(name) in self._names

    # The name index must not be shared, so copies are rebuilt from scratch.
    def copy(self) -> "NameDict[V]":
        return type(self)(self, case_sensitive=self.case_sensitive)

    __copy__ = copy

    def __or__(self, other: Any) -> "NameDict[V]":
        if not isinstance(other, Mapping):
            return NotImplemented

        names = self.copy()
        names.update(other)
        return names

    def __ror__(self, other: Any) -> "NameDict[V]":
        if not isinstance(other, Mapping):
            return NotImplemented

        names = type(self)(other, case_sensitive=self.case_sensitive)
        names.update(self)
        return names

    def __ior__(self, other: Any) -> "NameDict[V]":
        self.update(other)
        return self


def parse(
    text: str | None,
    *,
    case_sensitive: bool = False,
    tokenizer: Tokenizer = fsm_tokenize,
) -> Iterator[SectionGroup]:
    """Parse an INI text into section groups.

    Parsing is lazy: the text is only read as far as needed to produce the next group.

    Args:
        text: The INI text. None, empty or whitespace-only text has no groups.
        case_sensitive: Whether or not section names are compared case-sensitively
            when grouping adjacent entries. Defaults to False.
        tokenizer: The tokenizer backend to parse with.
            Defaults to gini.tokenizer.tokenize.

    Returns:
        An iterator over the groups.

    Raises:
        IniSyntaxError: The text is malformed (raised during iteration).
    """

    if not text or text.isspace():
        return iter(())

    eq = same_section_exact if case_sensitive else same_section

    return group_adjacent(tokenizer(text), eq=eq)


def parse_hash(
    text: str | None,
    *,
    case_sensitive: bool = False,
    tokenizer: Tokenizer = fsm_tokenize,
) -> NameDict[NameDict[str | None]]:
    """Parse an INI text into a dict of sections mapped to their entries.

    Sections with the same name are merged wherever they appear,
    and if a key is repeated within a section, the last value wins.

    Args:
        text: The INI text.
        case_sensitive: Whether or not section names and keys are case sensitive.
            Defaults to False.
        tokenizer: The tokenizer backend to parse with.

    Returns:
        The sections, with the default section named "".
        Key-less entries are keyed by None.

    Raises:
        IniSyntaxError: The text is malformed.
    """

    config: NameDict[NameDict[str | None]] = NameDict(case_sensitive=case_sensitive)

    for group in parse(text, case_sensitive=case_sensitive, tokenizer=tokenizer):
        name = "" if group.name is None else group.name

        if name not in config:
            config[name] = NameDict(case_sensitive=case_sensitive)

        section = config[name]
        for entry in group:
            section[entry.key] = entry.value

    return config


def parse_flat_hash(
    text: str | None,
    merge_keys: KeyMerger,
    *,
    case_sensitive: bool = False,
    tokenizer: Tokenizer = fsm_tokenize,
) -> NameDict[str | None]:
    """Parse an INI text into a single dict of entries.

    Args:
        text: The INI text.
        merge_keys: Called with the section name and key of each entry
            to build the key in the flat dict.
        case_sensitive: Whether or not the merged keys are case sensitive.
            Defaults to False.
        tokenizer: The tokenizer backend to parse with.

    Returns:
        The merged keys mapped to values. If a merged key is repeated, the last value wins.

    Raises:
        IniSyntaxError: The text is malformed.
    """

    config: NameDict[str | None] = NameDict(case_sensitive=case_sensitive)

    for group in parse(text, case_sensitive=case_sensitive, tokenizer=tokenizer):
        for entry in group:
            config[merge_keys(group.name, entry.key)] = entry.value

    return config


def join_keys(separator: str = ".") -> KeyMerger:
    """Create a key merger that joins section names and keys with a separator.

    Entries in the default section keep their key as is, and key-less entries are keyed by their section.

    Args:
        separator: What to join with. Defaults to ".".

    Returns:
        The key merger.
    """

    def merge_keys(section: str | None, key: str | None) -> str:
        return separator.join(n for n in (section, key) if n is not None)

    return merge_keys


def read_text(
    file: str | pathlib.Path | IO[bytes], encoding: str | None = None
) -> str:
    """Read an INI file as text.

    Args:
        file: The path to the file, or the file itself opened in binary mode.
        encoding: The file encoding. If None, encoding detection is attempted.

    Returns:
        The text.

    Raises:
        GiniError: The encoding could not be detected.
    """

    if isinstance(file, (str, pathlib.Path)):
        data = pathlib.Path(file).read_bytes()
    else:
        data = file.read()

    if not data:
        return ""

    if encoding is None:
        encoding = detect_encoding(data.splitlines(keepends=True))

        if encoding is None:
            raise GiniError(f"failed to detect encoding for {file}")

        _log.debug("detected encoding %s for %s", encoding, file)

    return data.decode(encoding)


def load(
    file: str | pathlib.Path | IO[bytes], *, encoding: str | None = None, **kwargs
) -> Iterator[SectionGroup]:
    """Parse an INI file into section groups.

    Args:
        file: The file to parse. See read_text().
        encoding: The file encoding. See read_text().
        **kwargs: Passed to parse().

    Returns:
        See parse().

    Raises:
        See read_text() and parse().
    """

    return parse(read_text(file, encoding), **kwargs)


def detect_encoding(file: Iterable[bytes]) -> str | None:
    """Determine the encoding of a binary file.

    Args:
        file: The lines of the file to detect the encoding of.

    Returns:
        The encoding if detected successfully, otherwise None.
    """

    detector = chardet.UniversalDetector()

    for line in file:
        if not detector.done:
            detector.feed(line)
        else:
            break

    result = detector.close()

    if encoding := result["encoding"]:
        return encoding.lower()

    return None
