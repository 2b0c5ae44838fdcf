"""AI strategy contract and the read-only view it decides from."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from salvo.core.board import Board
from salvo.core.fleet import Fleet
from salvo.core.models import Coord


@dataclass(frozen=True, slots=True)
class ShotKnowledge:
    """What the shooter has observed of the opponent board.

    Only resolved cells are exposed: hits carry their revealed ship id, and
    sunk ship ids are known. Intact ship cells stay hidden.
    """

    size: int
    hits: tuple[tuple[Coord, int], ...]
    unresolved: tuple[Coord, ...]
    sunk_ship_ids: frozenset[int]

    @classmethod
    def observe(cls, board: Board, fleet: Fleet) -> ShotKnowledge:
        """Build the shooter's view of `board` and its `fleet`."""
        return cls(
            size=board.size,
            hits=tuple(board.hit_cells()),
            unresolved=tuple(board.unresolved_cells()),
            sunk_ship_ids=frozenset(ship.id for ship in fleet if ship.sunk),
        )

    def in_bounds(self, coord: Coord) -> bool:
        return 0 <= coord.row < self.size and 0 <= coord.col < self.size

    def is_open(self, coord: Coord) -> bool:
        """Return whether `coord` is on the board and not yet fired upon."""
        return self.in_bounds(coord) and coord in self.unresolved


class AIStrategy(ABC):
    """Targeting strategy contract: pick the next coordinate to fire at."""

    @abstractmethod
    def choose_shot(self, knowledge: ShotKnowledge) -> Coord | None:
        """Return next coordinate to fire, or None when nothing is left."""
