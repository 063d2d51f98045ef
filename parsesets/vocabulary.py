"""Token vocabularies: display names for token types.

A vocabulary maps a token type to the names a generated parser knows it by.
IntervalSet uses it to render token sets symbolically, e.g.
``{ID, '(', <EOF>}`` instead of ``{-1, 3, 7}``.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from typing_extensions import override

from parsesets.util import EOF


class Vocabulary(ABC):
    @property
    @abstractmethod
    def max_token_type(self) -> int:
        """Highest token type this vocabulary names."""
        pass

    @abstractmethod
    def get_literal_name(self, token_type: int) -> str | None:
        """Quoted literal for a fixed-text token, e.g. ``"'('"``."""
        pass

    @abstractmethod
    def get_symbolic_name(self, token_type: int) -> str | None:
        """Rule name for a token, e.g. ``"ID"``."""
        pass

    @abstractmethod
    def get_display_name(self, token_type: int) -> str:
        """Best name to show a person. Never None."""
        pass


class VocabularyImpl(Vocabulary):
    """Vocabulary backed by literal, symbolic and display name lists.

    Each list is indexed by token type; missing or None entries fall through
    to the next source. The display name is the first of: explicit display
    name, literal name, symbolic name, the token type as a decimal string.
    """

    def __init__(
        self,
        literal_names: Sequence[str | None] = (),
        symbolic_names: Sequence[str | None] = (),
        display_names: Sequence[str | None] = (),
    ) -> None:
        self.literal_names: tuple[str | None, ...] = tuple(literal_names)
        self.symbolic_names: tuple[str | None, ...] = tuple(symbolic_names)
        self.display_names: tuple[str | None, ...] = tuple(display_names)
        self._max_token_type: int = (
            max(
                len(self.display_names),
                len(self.literal_names),
                len(self.symbolic_names),
            )
            - 1
        )

    @classmethod
    def from_token_names(cls, token_names: Sequence[str | None]) -> "VocabularyImpl":
        """Build a vocabulary from a legacy token-name list.

        Quoted entries (``"'+'"``) become literal names; entries starting with
        an uppercase letter become symbolic names. Anything else is kept only
        as a display name.
        """
        if not token_names:
            return EMPTY_VOCABULARY

        literal_names: list[str | None] = list(token_names)
        symbolic_names: list[str | None] = list(token_names)
        for i, name in enumerate(token_names):
            if name is None:
                continue
            if name:
                first = name[0]
                if first == "'":
                    symbolic_names[i] = None
                    continue
                if first.isupper():
                    literal_names[i] = None
                    continue
            # wasn't a literal or symbolic name
            literal_names[i] = None
            symbolic_names[i] = None

        return cls(literal_names, symbolic_names, token_names)

    @property
    @override
    def max_token_type(self) -> int:
        return self._max_token_type

    @staticmethod
    def _lookup(names: tuple[str | None, ...], token_type: int) -> str | None:
        if 0 <= token_type < len(names):
            return names[token_type]
        return None

    @override
    def get_literal_name(self, token_type: int) -> str | None:
        return self._lookup(self.literal_names, token_type)

    @override
    def get_symbolic_name(self, token_type: int) -> str | None:
        if token_type == EOF:
            return "EOF"
        return self._lookup(self.symbolic_names, token_type)

    @override
    def get_display_name(self, token_type: int) -> str:
        for name in (
            self._lookup(self.display_names, token_type),
            self.get_literal_name(token_type),
            self.get_symbolic_name(token_type),
        ):
            if name:
                return name
        return str(token_type)


EMPTY_VOCABULARY = VocabularyImpl()
