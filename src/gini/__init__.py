"""gini: a strict, streaming parser for INI configuration text."""

from .errors import GiniError, IniSyntaxError
from .grouping import Entry, SectionGroup, group_adjacent
from .ini import (
    NameDict,
    join_keys,
    load,
    parse,
    parse_flat_hash,
    parse_hash,
    read_text,
)
from .tokenizer import Triple, tokenize
from .view import Config, parse_flat_object, parse_object

__version__ = "0.1.0"
