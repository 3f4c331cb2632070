"""Rule parser (grammar scanner).

Recognizes spatial sentences on the tokenized board and emits
:class:`~kanji_universe.rules.PropertyRule` / :class:`~kanji_universe.rules.TransformRule`
facts. A sentence reads along +x (horizontal) or +y (vertical)::

    NOUN は TERM [と TERM ...]

where every TERM cell contributes all of its property text (property rules)
and all of its noun tokens (transform rules). World objects are noun tokens
too, so ``木`` the tree can anchor a sentence just like ``木`` the text.

Scan order is fully specified: origin cells row-major (y outer, x inner) and,
at each origin, horizontal before vertical. A rule signature is emitted at
most once per scan; the first spelling met keeps its provenance cells.
"""

from typing import List, Set, Tuple

from kanji_universe.parser.tokenizer import BoardTokens, tokenize_state
from kanji_universe.rules import ParsedRule, PropertyRule, TransformRule
from kanji_universe.state import State
from kanji_universe.types import Axis

AXIS_VECTORS: Tuple[Tuple[Axis, int, int], ...] = (
    (Axis.HORIZONTAL, 1, 0),
    (Axis.VERTICAL, 0, 1),
)


def _parse_from(
    board: BoardTokens,
    x: int,
    y: int,
    axis: Axis,
    dx: int,
    dy: int,
    seen: Set[str],
    out: List[ParsedRule],
) -> None:
    start = board.at(x, y)
    if start is None or not start.nouns:
        return
    topic = board.at(x + dx, y + dy)
    if topic is None or not topic.has_topic:
        return

    origin = (x, y)
    connector = (x + dx, y + dy)

    for _, noun_def in start.nouns:
        noun = noun_def.noun_key
        offset = 2
        while True:
            tx, ty = x + dx * offset, y + dy * offset
            term = board.at(tx, ty)
            if term is None:
                break

            cells = (origin, connector, (tx, ty))
            candidates: List[ParsedRule] = [
                PropertyRule(
                    noun=noun, property=prop_def.property_key, axis=axis, cells=cells
                )
                for _, prop_def in term.properties
            ]
            candidates.extend(
                TransformRule(
                    noun=noun, target_noun=target_def.noun_key, axis=axis, cells=cells
                )
                for _, target_def in term.nouns
            )
            if not candidates:
                break

            for rule in candidates:
                if rule.signature in seen:
                    continue
                seen.add(rule.signature)
                out.append(rule)

            and_cell = board.at(x + dx * (offset + 1), y + dy * (offset + 1))
            if and_cell is None or not and_cell.has_and:
                break
            offset += 2


def parse_rules(board: BoardTokens) -> List[ParsedRule]:
    """Scan a tokenized board for rules.

    Args:
        board (BoardTokens): Output of :func:`tokenize_board`.

    Returns:
        List[ParsedRule]: Deduplicated rules in scan order.
    """
    rules: List[ParsedRule] = []
    seen: Set[str] = set()
    for y in range(board.height):
        for x in range(board.width):
            for axis, dx, dy in AXIS_VECTORS:
                if not board.in_bounds(x + 2 * dx, y + 2 * dy):
                    continue
                _parse_from(board, x, y, axis, dx, dy, seen, rules)
    return rules


def parse_rules_from_state(state: State) -> List[ParsedRule]:
    return parse_rules(tokenize_state(state))
