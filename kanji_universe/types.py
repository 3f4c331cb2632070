"""Common type aliases and enumerations.

Property keys are engine semantics (the simulation branches on them), so they
form a closed ``StrEnum``. Noun keys are catalog data: any string a definition
table chooses to use is a valid noun.
"""

from enum import StrEnum, auto
from typing import Tuple

EntityID = int

NounKey = str

Cell = Tuple[int, int]


class PropertyKey(StrEnum):
    """Properties a ``NOUN は PROPERTY`` rule (or a definition default) can grant."""

    YOU = auto()
    PUSH = auto()
    PULL = auto()
    STOP = auto()
    WIN = auto()
    FLOAT = auto()
    SINK = auto()
    HOT = auto()
    MELT = auto()


class EntityKind(StrEnum):
    """World object or rule-text tile."""

    OBJECT = auto()
    TEXT = auto()


class TextRole(StrEnum):
    """Grammatical role of a text tile."""

    NOUN = auto()
    PROPERTY = auto()
    CONNECTOR = auto()
    OPERATOR = auto()


class ConnectorKey(StrEnum):
    TOPIC = auto()


class OperatorKey(StrEnum):
    AND = auto()


class Axis(StrEnum):
    """Reading direction of a spelled rule."""

    HORIZONTAL = auto()
    VERTICAL = auto()
