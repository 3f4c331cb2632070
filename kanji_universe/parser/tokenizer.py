"""Board tokenizer.

Scans every placed entity into per-cell token buckets that the rule parser
reads. Tokenizing is a pure function of positions and definitions and is
recomputed every time rules are rebuilt; rule rebuilding always follows a
position change, so there is nothing worth caching across turns.

Entities outside the board are ignored (editing can place them there
transiently).
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from kanji_universe.catalog import Catalog, EntityDef
from kanji_universe.components import Position
from kanji_universe.parser.grammar import (
    is_and_operator,
    is_noun_token,
    is_property_token,
    is_topic_connector,
)
from kanji_universe.state import State
from kanji_universe.types import Cell, EntityID

Token = Tuple[EntityID, EntityDef]


@dataclass
class CellTokens:
    """Tokens found in one cell.

    Attributes:
        nouns: Noun-bearing world objects and noun text, ascending id.
        properties: Property text, ascending id.
        has_topic: A ``は`` tile is present.
        has_and: A ``と`` tile is present.
    """

    nouns: List[Token] = field(default_factory=list)
    properties: List[Token] = field(default_factory=list)
    has_topic: bool = False
    has_and: bool = False


@dataclass(frozen=True)
class BoardTokens:
    width: int
    height: int
    cells: Dict[Cell, CellTokens]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def at(self, x: int, y: int) -> Optional[CellTokens]:
        """Tokens at ``(x, y)``; ``None`` for empty or out-of-board cells."""
        if not self.in_bounds(x, y):
            return None
        return self.cells.get((x, y))


def tokenize_board(
    width: int,
    height: int,
    entities: Iterable[Tuple[EntityID, str, Position]],
    catalog: Catalog,
) -> BoardTokens:
    """Bucket entities by cell.

    Args:
        width: Board width.
        height: Board height.
        entities: ``(entity id, definition id, position)`` triples. Tokens are
            recorded in the order given; pass them in ascending id order.
        catalog: Definition lookup.

    Returns:
        BoardTokens: Per-cell buckets for every non-empty in-board cell.

    Raises:
        UnknownDefinitionError: If an entity references an unknown definition.
    """
    cells: Dict[Cell, CellTokens] = {}
    for eid, def_id, pos in entities:
        if not (0 <= pos.x < width and 0 <= pos.y < height):
            continue
        definition = catalog.get(def_id)
        bucket = cells.setdefault(pos.cell, CellTokens())
        if is_noun_token(definition):
            bucket.nouns.append((eid, definition))
        if is_property_token(definition):
            bucket.properties.append((eid, definition))
        if is_topic_connector(definition):
            bucket.has_topic = True
        if is_and_operator(definition):
            bucket.has_and = True
    return BoardTokens(width=width, height=height, cells=cells)


def tokenize_state(state: State) -> BoardTokens:
    """Tokenize the live board of ``state``."""
    entities = (
        (eid, state.definition[eid], state.position[eid])
        for eid in sorted(state.definition.keys())
    )
    return tokenize_board(state.width, state.height, entities, state.catalog)
