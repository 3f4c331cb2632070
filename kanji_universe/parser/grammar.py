"""Grammar registry.

The sentence grammar has exactly one connector, the topic marker ``は``
("is"), and one operator, ``と`` ("and"). Recognition goes through the
predicates below so the tokenizer never inspects raw definition fields.
"""

from dataclasses import dataclass
from typing import Dict

from kanji_universe.catalog import EntityDef
from kanji_universe.types import ConnectorKey, OperatorKey, TextRole


@dataclass(frozen=True)
class GrammarToken:
    key: str
    glyph: str
    meaning: str


GRAMMAR_CONNECTORS: Dict[ConnectorKey, GrammarToken] = {
    ConnectorKey.TOPIC: GrammarToken(key=ConnectorKey.TOPIC, glyph="は", meaning="is"),
}

GRAMMAR_OPERATORS: Dict[OperatorKey, GrammarToken] = {
    OperatorKey.AND: GrammarToken(key=OperatorKey.AND, glyph="と", meaning="and"),
}


def is_topic_connector(definition: EntityDef) -> bool:
    return (
        definition.is_text
        and definition.text_role == TextRole.CONNECTOR
        and definition.connector_key == GRAMMAR_CONNECTORS[ConnectorKey.TOPIC].key
    )


def is_and_operator(definition: EntityDef) -> bool:
    return (
        definition.is_text
        and definition.text_role == TextRole.OPERATOR
        and definition.operator_key == GRAMMAR_OPERATORS[OperatorKey.AND].key
    )


def is_noun_token(definition: EntityDef) -> bool:
    """World objects with a noun and noun text both read as nouns."""
    return definition.is_role_carrier


def is_property_token(definition: EntityDef) -> bool:
    return (
        definition.is_text
        and definition.text_role == TextRole.PROPERTY
        and definition.property_key is not None
    )
