from collections.abc import Iterator, Mapping
from typing import Any, Generic, TypeVar

from .ini import KeyMerger, NameDict, parse_flat_hash, parse_hash

T = TypeVar("T")


class Config(Generic[T]):
    """A read-only view of parsed INI.

    Names can be looked up either as attributes (`config.name`) or indexes (`config["name"]`).
    Unknown names are None instead of an error.

    Args:
        data: The names mapped to values.
    """

    __slots__ = ("_data",)

    _data: Mapping[str | None, T]

    def __init__(self, data: Mapping[str | None, T]):
        object.__setattr__(self, "_data", data)

    def find(self, name: str | None) -> T | None:
        """Look up a name.

        Args:
            name: The name to look up.

        Returns:
            The value, or None if the name does not exist.
        """

        return self._data.get(name)

    def __getattr__(self, name: str) -> T | None:
        # Only called when normal lookup fails, so don't hide missing special attributes.
        if name == "_data" or (name.startswith("__") and name.endswith("__")):
            raise AttributeError(name)

        return self.find(name)

    def __getitem__(self, index: Any) -> T | None:
        return self.find(None if index is None else str(index))

    def __setattr__(self, name: str, value: Any):
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __contains__(self, name: Any) -> bool:
        return name in self._data

    def __iter__(self) -> Iterator[str | None]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self._data)!r})"


def parse_object(text: str | None, *, case_sensitive: bool = False) -> Config[Config[str | None]]:
    """Parse an INI text into a view of its sections.

    Args:
        text: The INI text.
        case_sensitive: Whether or not names are case sensitive. Defaults to False.

    Returns:
        The view of sections, each a view of its entries.
        The default section is named "".

    Raises:
        IniSyntaxError: The text is malformed.
    """

    sections = parse_hash(text, case_sensitive=case_sensitive)

    return Config(
        NameDict(
            {name: Config(section) for name, section in sections.items()},
            case_sensitive=case_sensitive,
        )
    )


def parse_flat_object(
    text: str | None, merge_keys: KeyMerger, *, case_sensitive: bool = False
) -> Config[str | None]:
    """Parse an INI text into a flat view of its entries.

    Args:
        text: The INI text.
        merge_keys: See parse_flat_hash().
        case_sensitive: Whether or not names are case sensitive. Defaults to False.

    Returns:
        The view.

    Raises:
        IniSyntaxError: The text is malformed.
    """

    return Config(parse_flat_hash(text, merge_keys, case_sensitive=case_sensitive))
