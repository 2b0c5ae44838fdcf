"""Fleet registry: ship identities, lengths, and cumulative damage."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, replace

from salvo.core.models import DEFAULT_FLEET, ShipType


@dataclass(frozen=True, slots=True)
class Ship:
    """One ship of a fleet."""

    id: int
    ship_type: ShipType
    length: int
    damage: int = 0
    placed: bool = False

    @property
    def sunk(self) -> bool:
        return self.damage == self.length


@dataclass(frozen=True, slots=True)
class ShipSummary:
    """Read-only per-ship summary for presentation."""

    ship_id: int
    ship_type: ShipType
    length: int
    damage: int
    sunk: bool
    placed: bool


@dataclass(frozen=True, slots=True)
class Fleet:
    """Ordered, immutable collection of ships for one side."""

    ships: tuple[Ship, ...]

    @classmethod
    def from_config(cls, config: Sequence[ShipType] = DEFAULT_FLEET, *, placed: bool = False) -> Fleet:
        """Build a zero-damage fleet with ids 1..n in configuration order."""
        return cls(
            ships=tuple(
                Ship(id=index, ship_type=ship_type, length=ship_type.size, placed=placed)
                for index, ship_type in enumerate(config, start=1)
            )
        )

    def __iter__(self) -> Iterator[Ship]:
        return iter(self.ships)

    def __len__(self) -> int:
        return len(self.ships)

    @property
    def total_length(self) -> int:
        return sum(ship.length for ship in self.ships)

    def ship(self, ship_id: int) -> Ship:
        """Find ship by id."""
        for ship in self.ships:
            if ship.id == ship_id:
                return ship
        raise ValueError(f"Unknown ship id: {ship_id}.")

    def is_sunk(self, ship_id: int) -> bool:
        return self.ship(ship_id).sunk

    def record_hit(self, ship_id: int) -> Fleet:
        """Return a fleet with one more point of damage on `ship_id`."""
        target = self.ship(ship_id)
        if target.sunk:
            raise ValueError(f"Ship {ship_id} is already sunk.")
        return self._replace_ship(replace(target, damage=target.damage + 1))

    def mark_placed(self, ship_id: int) -> Fleet:
        return self._replace_ship(replace(self.ship(ship_id), placed=True))

    def is_destroyed(self) -> bool:
        """Return whether no ship is left afloat.

        Once any ship is on the board, ships the random generator left off it
        cannot be hit and are skipped. A fleet with nothing placed counts every
        ship.
        """
        counted = [ship for ship in self.ships if ship.placed] or list(self.ships)
        return bool(counted) and all(ship.sunk for ship in counted)

    def summaries(self) -> tuple[ShipSummary, ...]:
        return tuple(
            ShipSummary(
                ship_id=ship.id,
                ship_type=ship.ship_type,
                length=ship.length,
                damage=ship.damage,
                sunk=ship.sunk,
                placed=ship.placed,
            )
            for ship in self.ships
        )

    def _replace_ship(self, updated: Ship) -> Fleet:
        return Fleet(ships=tuple(updated if ship.id == updated.id else ship for ship in self.ships))


def record_hit(fleet: Fleet, ship_id: int) -> Fleet:
    """Increment damage of `ship_id`; the ship must exist and be afloat."""
    return fleet.record_hit(ship_id)


def is_fleet_destroyed(fleet: Fleet) -> bool:
    """Return whether the fleet has no ship left afloat."""
    return fleet.is_destroyed()
