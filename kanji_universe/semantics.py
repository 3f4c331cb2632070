"""Per-entity semantics queries.

These predicates answer "what does this entity do right now?" by combining
its catalog definition with the rule-derived maps on the state. They are the
only place where the precedence between intrinsic defaults and rules lives.

Two flavors of property lookup exist:

* :func:`has_property`: what the entity *behaves* as. Rules apply to world
  objects only, so ``人 は 遊`` never makes the ``人`` text tile controllable;
  intrinsic defaults apply to everything.
* :func:`has_rule_property`: whether a rule names the entity's noun at all,
  regardless of kind. Used for role-carrier selection and goal contact, where
  a noun text tile can stand in for its object.
"""

from kanji_universe.catalog import EntityDef
from kanji_universe.state import State
from kanji_universe.types import EntityID, PropertyKey


def definition_of(state: State, eid: EntityID) -> EntityDef:
    """Catalog definition of a live entity (raises for unknown definitions)."""
    return state.catalog.get(state.definition[eid])


def has_property(state: State, eid: EntityID, prop: PropertyKey) -> bool:
    definition = definition_of(state, eid)
    if prop in definition.default_properties:
        return True
    if definition.is_text or definition.noun_key is None:
        return False
    return prop in state.active_properties.get(definition.noun_key, ())


def has_rule_property(state: State, eid: EntityID, prop: PropertyKey) -> bool:
    definition = definition_of(state, eid)
    if definition.noun_key is None:
        return False
    return prop in state.active_properties.get(definition.noun_key, ())


def is_role_carrier(state: State, eid: EntityID) -> bool:
    """Entity may hold the YOU/WIN focus (noun-bearing object or noun text)."""
    return definition_of(state, eid).is_role_carrier


def is_pushable(state: State, eid: EntityID) -> bool:
    """Intrinsically pushable, a YOU carrier, or granted PUSH."""
    if definition_of(state, eid).default_pushable:
        return True
    if eid == state.focus_you or has_property(state, eid, PropertyKey.YOU):
        return True
    return has_property(state, eid, PropertyKey.PUSH)


def is_blocking(state: State, eid: EntityID) -> bool:
    """Pushables always block when they cannot be pushed; so do STOP entities."""
    if is_pushable(state, eid):
        return True
    if definition_of(state, eid).default_stop:
        return True
    return has_property(state, eid, PropertyKey.STOP)


def is_win_contact(state: State, eid: EntityID) -> bool:
    """Entity the YOU carrier may overlap to clear the level.

    True for WIN entities, for the designated WIN carrier and for any entity
    whose noun a WIN rule names, including a noun text tile.
    """
    if has_property(state, eid, PropertyKey.WIN):
        return True
    if eid == state.focus_win:
        return True
    return has_rule_property(state, eid, PropertyKey.WIN)
