from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Placement:
    """One placed entity in authoring data: a definition id at ``(x, y)``."""

    def_id: str
    x: int
    y: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Placement":
        return cls(def_id=str(data["defId"]), x=int(data["x"]), y=int(data["y"]))

    def to_dict(self) -> Dict[str, Any]:
        return {"defId": self.def_id, "x": self.x, "y": self.y}


@dataclass(frozen=True)
class Level:
    """
    Authoring-time level representation.
    - `entities` is the ordered placement list; entity ids are allocated in this order.
    - Placements may reference unknown definitions or sit off the board; the
      converter (levels.convert.to_state) is where definitions are validated.
    - Editing returns a new Level; the value itself never changes.
    """

    id: str
    name: str
    width: int
    height: int
    entities: Tuple[Placement, ...] = field(default_factory=tuple)
    hint: Optional[str] = None

    # -------- Editing API (purely authoring-time) --------

    def place(self, def_id: str, x: int, y: int) -> "Level":
        """
        Append a placement of `def_id` at (x, y).
        """
        self._check_bounds(x, y)
        return replace(self, entities=self.entities + (Placement(def_id, x, y),))

    def erase(self, x: int, y: int) -> "Level":
        """
        Remove the most recently added placement at (x, y).
        Returns the level unchanged if the cell is empty.
        """
        self._check_bounds(x, y)
        for i in range(len(self.entities) - 1, -1, -1):
            placement = self.entities[i]
            if placement.x == x and placement.y == y:
                return replace(
                    self, entities=self.entities[:i] + self.entities[i + 1 :]
                )
        return self

    def placements_at(self, x: int, y: int) -> List[Placement]:
        """
        Return the placements in cell (x, y), oldest first.
        """
        self._check_bounds(x, y)
        return [p for p in self.entities if p.x == x and p.y == y]

    # -------- Wire format --------

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Level":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            width=int(data["width"]),
            height=int(data["height"]),
            entities=tuple(Placement.from_dict(p) for p in data.get("entities", ())),
            hint=data.get("hint"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "width": self.width,
            "height": self.height,
        }
        if self.hint is not None:
            data["hint"] = self.hint
        data["entities"] = [p.to_dict() for p in self.entities]
        return data

    @classmethod
    def from_json(cls, text: str) -> "Level":
        return cls.from_dict(json.loads(text))

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    # -------- Internal helpers --------

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Out of bounds: {(x, y)} for grid {self.width}x{self.height}"
            )
