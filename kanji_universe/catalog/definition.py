"""Entity definition (catalog entry).

An :class:`EntityDef` is the immutable, shared description of *what* a placed
entity is. Placed instances only reference it by ``id``; transform rules
rewrite that reference, never the definition itself.
"""

from dataclasses import dataclass
from typing import Optional

from pyrsistent import pset
from pyrsistent.typing import PSet

from kanji_universe.types import (
    ConnectorKey,
    EntityKind,
    NounKey,
    OperatorKey,
    PropertyKey,
    TextRole,
)


@dataclass(frozen=True)
class EntityDef:
    """Catalog entry.

    Attributes:
        id: Stable definition id referenced by level placements (``"obj-human"``).
        glyph: Display glyph (``"人"``).
        kind: World object or rule text.
        text_role: Grammatical role; required for text, forbidden for objects.
        noun_key: Noun denoted by a world object or noun text.
        property_key: Property denoted by property text.
        connector_key: Connector denoted by connector text.
        operator_key: Operator denoted by operator text.
        default_properties: Intrinsic properties that hold regardless of rules.
        default_pushable: Intrinsically pushable (all text, the human).
        default_stop: Intrinsically blocking.
        label: Human readable name.
    """

    id: str
    glyph: str
    kind: EntityKind
    text_role: Optional[TextRole] = None
    noun_key: Optional[NounKey] = None
    property_key: Optional[PropertyKey] = None
    connector_key: Optional[ConnectorKey] = None
    operator_key: Optional[OperatorKey] = None
    default_properties: PSet[PropertyKey] = pset()
    default_pushable: bool = False
    default_stop: bool = False
    label: str = ""

    def __post_init__(self) -> None:
        if self.kind == EntityKind.OBJECT:
            if (
                self.text_role is not None
                or self.property_key is not None
                or self.connector_key is not None
                or self.operator_key is not None
            ):
                raise ValueError(f"Object definition {self.id} carries text keys")
            return

        role_keys = {
            TextRole.NOUN: self.noun_key,
            TextRole.PROPERTY: self.property_key,
            TextRole.CONNECTOR: self.connector_key,
            TextRole.OPERATOR: self.operator_key,
        }
        if self.text_role is None:
            raise ValueError(f"Text definition {self.id} has no text role")
        populated = [role for role, key in role_keys.items() if key is not None]
        if populated != [self.text_role]:
            raise ValueError(
                f"Text definition {self.id} with role {self.text_role} "
                f"must populate exactly its own key, got {populated}"
            )

    @property
    def is_object(self) -> bool:
        return self.kind == EntityKind.OBJECT

    @property
    def is_text(self) -> bool:
        return self.kind == EntityKind.TEXT

    @property
    def is_role_carrier(self) -> bool:
        """True for definitions that can hold the YOU/WIN focus role.

        World objects with a noun and noun text tiles qualify; property,
        connector and operator text never do.
        """
        if self.noun_key is None:
            return False
        return self.is_object or self.text_role == TextRole.NOUN
