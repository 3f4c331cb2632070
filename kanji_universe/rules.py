"""Parsed rule facts.

A rule is an immutable value produced by :mod:`kanji_universe.parser.parser`
each turn. Two variants exist:

* :class:`PropertyRule`: ``NOUN は PROPERTY`` (additive semantics).
* :class:`TransformRule`: ``NOUN は NOUN`` (the source noun becomes another).

``cells`` is the provenance of a rule: the noun cell, the connector cell and
the cell of the term that produced it. A term reached through ``と`` chaining
keeps the same noun/connector anchor, so every rule has exactly three cells.

The ``signature`` identifies *what* a rule says independent of where it is
spelled; the parser deduplicates on it and the reducer compares signature sets
across a turn to detect rule changes.
"""

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import ClassVar, Iterable, Tuple, Union

from kanji_universe.types import Axis, Cell, NounKey, PropertyKey


class RuleKind(StrEnum):
    PROPERTY = auto()
    TRANSFORM = auto()


@dataclass(frozen=True)
class PropertyRule:
    """``noun`` carries ``property`` for the rest of the turn.

    Attributes:
        noun: Subject noun.
        property: Granted property.
        axis: Reading direction the rule was spelled in.
        cells: Provenance cells ``(noun, connector, term)``.
    """

    kind: ClassVar[RuleKind] = RuleKind.PROPERTY

    noun: NounKey
    property: PropertyKey
    axis: Axis
    cells: Tuple[Cell, ...]

    @property
    def rhs(self) -> str:
        return self.property.value

    @property
    def signature(self) -> str:
        return f"p:{self.noun}:{self.rhs}"


@dataclass(frozen=True)
class TransformRule:
    """Every ``noun`` world object becomes a ``target_noun`` object.

    Attributes:
        noun: Source noun.
        target_noun: Noun the source turns into.
        axis: Reading direction the rule was spelled in.
        cells: Provenance cells ``(noun, connector, term)``.
    """

    kind: ClassVar[RuleKind] = RuleKind.TRANSFORM

    noun: NounKey
    target_noun: NounKey
    axis: Axis
    cells: Tuple[Cell, ...]

    @property
    def rhs(self) -> str:
        return self.target_noun

    @property
    def signature(self) -> str:
        return f"n:{self.noun}:{self.rhs}"


ParsedRule = Union[PropertyRule, TransformRule]


def rule_key(rule: ParsedRule) -> str:
    """Signature plus provenance; distinguishes two spellings of the same rule."""
    cells = ";".join(f"{x},{y}" for x, y in rule.cells)
    return f"{rule.signature}:{cells}"


def rules_signature(rules: Iterable[ParsedRule]) -> str:
    """Order-independent signature of a whole rule set."""
    return "|".join(sorted(rule.signature for rule in rules))
