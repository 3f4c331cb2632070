"""Built-in entity definitions.

World objects first, then noun text, grammar text (the ``は`` connector and
the ``と`` operator) and property text. Every text tile is intrinsically
pushable; so is the human, which keeps the player character movable by other
pushes even when no rule says so.
"""

from typing import List

from pyrsistent import pset
from pyrsistent.typing import PSet

from kanji_universe.catalog import EntityDef
from kanji_universe.types import (
    ConnectorKey,
    EntityKind,
    OperatorKey,
    PropertyKey,
    TextRole,
)


def _object(
    def_id: str,
    glyph: str,
    noun: str,
    label: str,
    default_properties: PSet[PropertyKey] = pset(),
    default_pushable: bool = False,
) -> EntityDef:
    return EntityDef(
        id=def_id,
        glyph=glyph,
        kind=EntityKind.OBJECT,
        noun_key=noun,
        default_properties=default_properties,
        default_pushable=default_pushable,
        label=label,
    )


def _noun_text(def_id: str, glyph: str, noun: str, label: str) -> EntityDef:
    return EntityDef(
        id=def_id,
        glyph=glyph,
        kind=EntityKind.TEXT,
        text_role=TextRole.NOUN,
        noun_key=noun,
        default_pushable=True,
        label=label,
    )


def _property_text(def_id: str, glyph: str, prop: PropertyKey, label: str) -> EntityDef:
    return EntityDef(
        id=def_id,
        glyph=glyph,
        kind=EntityKind.TEXT,
        text_role=TextRole.PROPERTY,
        property_key=prop,
        default_pushable=True,
        label=label,
    )


ENTITY_DEFS: List[EntityDef] = [
    # World objects
    _object("obj-human", "人", "human", "Human", default_pushable=True),
    _object("obj-tree", "木", "tree", "Tree"),
    _object("obj-rock", "石", "rock", "Rock"),
    _object("obj-mountain", "山", "mountain", "Mountain"),
    _object("obj-fire", "火", "fire", "Fire"),
    _object(
        "obj-water", "水", "water", "Water", default_properties=pset([PropertyKey.SINK])
    ),
    _object("obj-gate", "門", "gate", "Gate"),
    _object(
        "obj-volcano",
        "火山",
        "volcano",
        "Volcano",
        default_properties=pset([PropertyKey.HOT]),
    ),
    _object("obj-hotspring", "湯", "hotspring", "Hot Spring"),
    _object("obj-charcoal", "炭", "charcoal", "Charcoal"),
    # Noun text
    _noun_text("txt-human", "人", "human", "Human text"),
    _noun_text("txt-tree", "木", "tree", "Tree text"),
    _noun_text("txt-rock", "石", "rock", "Rock text"),
    _noun_text("txt-mountain", "山", "mountain", "Mountain text"),
    _noun_text("txt-fire", "火", "fire", "Fire text"),
    _noun_text("txt-water", "水", "water", "Water text"),
    _noun_text("txt-gate", "門", "gate", "Gate text"),
    _noun_text("txt-volcano", "火山", "volcano", "Volcano text"),
    _noun_text("txt-hotspring", "湯", "hotspring", "Hot Spring text"),
    _noun_text("txt-charcoal", "炭", "charcoal", "Charcoal text"),
    # Grammar
    EntityDef(
        id="txt-topic",
        glyph="は",
        kind=EntityKind.TEXT,
        text_role=TextRole.CONNECTOR,
        connector_key=ConnectorKey.TOPIC,
        default_pushable=True,
        label="Topic",
    ),
    EntityDef(
        id="txt-and",
        glyph="と",
        kind=EntityKind.TEXT,
        text_role=TextRole.OPERATOR,
        operator_key=OperatorKey.AND,
        default_pushable=True,
        label="And",
    ),
    # Property text
    _property_text("txt-you", "遊", PropertyKey.YOU, "You"),
    _property_text("txt-push", "押", PropertyKey.PUSH, "Push"),
    _property_text("txt-pull", "引", PropertyKey.PULL, "Pull"),
    _property_text("txt-stop", "止", PropertyKey.STOP, "Stop"),
    _property_text("txt-win", "勝", PropertyKey.WIN, "Win"),
    _property_text("txt-float", "浮", PropertyKey.FLOAT, "Float"),
    _property_text("txt-sink", "沈", PropertyKey.SINK, "Sink"),
    _property_text("txt-hot", "熱", PropertyKey.HOT, "Hot"),
    _property_text("txt-melt", "溶", PropertyKey.MELT, "Melt"),
]
