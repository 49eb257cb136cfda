from collections.abc import Callable, Iterable, Iterator

import attrs

from .tokenizer import Triple

SectionEq = Callable[[str | None, str | None], bool]


def same_section(a: str | None, b: str | None) -> bool:
    """Compare two section names case-insensitively.
    The default section (None) is only equal to itself.
    """

    if a is None or b is None:
        return a is b

    return a.casefold() == b.casefold()


def same_section_exact(a: str | None, b: str | None) -> bool:
    """Compare two section names case-sensitively."""

    return a == b


@attrs.frozen
class Entry:
    """A key/value pair in a section. Either may be None."""

    key: str | None
    value: str | None


@attrs.frozen
class SectionGroup:
    """A contiguous run of entries under the same section header.

    Attributes:
        name: The section name as first spelled in the run, or None for the default section.
        entries: The entries in document order.
    """

    name: str | None
    entries: tuple[Entry, ...]

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def to_dict(self) -> dict[str | None, str | None]:
        """Map keys to values. If a key is repeated, the last value wins.

        Returns:
            The dict.
        """

        return {e.key: e.value for e in self.entries}


def group_adjacent(
    triples: Iterable[Triple], *, eq: SectionEq = same_section
) -> Iterator[SectionGroup]:
    """Fold consecutive triples of the same section into groups.

    Only adjacent triples are grouped: a section that reappears later in the document
    starts a new group.

    Args:
        triples: The triples to group.
        eq: Decides whether two section names are the same section.
            Defaults to a case-insensitive comparison.

    Yields:
        The groups, in document order.
    """

    name: str | None = None
    entries: list[Entry] | None = None

    for triple in triples:
        entry = Entry(triple.key, triple.value)

        if entries is not None and eq(name, triple.section):
            entries.append(entry)
        else:
            if entries is not None:
                yield SectionGroup(name, tuple(entries))

            name = triple.section
            entries = [entry]

    if entries is not None:
        yield SectionGroup(name, tuple(entries))
