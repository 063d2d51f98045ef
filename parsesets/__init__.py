from importlib.resources import files

from .core import IntSet, ReadonlyError, intersection, union
from .interval import Interval
from .interval_set import COMPLETE_CHAR_SET, EMPTY_SET, IntervalSet, subtract
from .util import EOF, EPSILON, MAX_CHAR_VALUE, MIN_CHAR_VALUE
from .vocabulary import EMPTY_VOCABULARY, Vocabulary, VocabularyImpl

# Load documentation files for programmatic access by agents and code-aware tools
_docs_path = files(__package__) / "docs"
docs = {
    "readme": (_docs_path / "README.md").read_text(),
    "api": (_docs_path / "API.md").read_text(),
}

__all__ = [
    "Interval",
    "IntSet",
    "IntervalSet",
    "ReadonlyError",
    "Vocabulary",
    "VocabularyImpl",
    "EMPTY_VOCABULARY",
    "EMPTY_SET",
    "COMPLETE_CHAR_SET",
    "EOF",
    "EPSILON",
    "MIN_CHAR_VALUE",
    "MAX_CHAR_VALUE",
    "union",
    "intersection",
    "subtract",
    "docs",
]
