"""Hunt/Target AI strategy implementation."""

from __future__ import annotations

import logging
import random

from salvo.ai.strategy import AIStrategy, ShotKnowledge
from salvo.core.models import Coord

logger = logging.getLogger(__name__)


class HuntTargetAI(AIStrategy):
    """Stateless hunt/target AI recomputing its stance from the board each turn.

    Target mode follows the first damaged, unsunk ship found in a row-major
    scan; hunt mode fires at any unresolved cell without parity filtering.
    """

    def __init__(self, rng: random.Random) -> None:
        self._rng = rng

    def choose_shot(self, knowledge: ShotKnowledge) -> Coord | None:
        hits = _first_unsunk_group(knowledge)
        if hits:
            target = self._target_shot(knowledge, hits)
            if target is not None:
                logger.debug("ai_target_mode hits=%d shot=%s", len(hits), target)
                return target

        if not knowledge.unresolved:
            return None
        return self._rng.choice(knowledge.unresolved)

    def _target_shot(self, knowledge: ShotKnowledge, hits: list[Coord]) -> Coord | None:
        if len(hits) == 1:
            origin = hits[0]
            candidates = [
                cell
                for cell in (
                    Coord(origin.row - 1, origin.col),
                    Coord(origin.row + 1, origin.col),
                    Coord(origin.row, origin.col - 1),
                    Coord(origin.row, origin.col + 1),
                )
                if knowledge.is_open(cell)
            ]
            if not candidates:
                return None
            return self._rng.choice(candidates)

        candidates = _line_extensions(knowledge, sorted(hits, key=lambda c: (c.row, c.col)))
        return candidates[0] if candidates else None


def _first_unsunk_group(knowledge: ShotKnowledge) -> list[Coord]:
    """Hits of the first unsunk ship met in a row-major scan."""
    groups: dict[int, list[Coord]] = {}
    for coord, ship_id in knowledge.hits:
        if ship_id in knowledge.sunk_ship_ids:
            continue
        groups.setdefault(ship_id, []).append(coord)
    return next(iter(groups.values()), [])


def _line_extensions(knowledge: ShotKnowledge, hits: list[Coord]) -> list[Coord]:
    """Cells extending the hit line, increasing direction first."""
    first, second = hits[0], hits[1]
    candidates: list[Coord] = []
    if first.row == second.row:
        cols = [coord.col for coord in hits]
        forward = Coord(first.row, max(cols) + 1)
        backward = Coord(first.row, min(cols) - 1)
    elif first.col == second.col:
        rows = [coord.row for coord in hits]
        forward = Coord(max(rows) + 1, first.col)
        backward = Coord(min(rows) - 1, first.col)
    else:
        return candidates
    for cell in (forward, backward):
        if knowledge.is_open(cell):
            candidates.append(cell)
    return candidates


def choose_target(knowledge: ShotKnowledge, rng: random.Random) -> Coord | None:
    """Pick the next AI shot for `knowledge` using the hunt/target heuristic."""
    return HuntTargetAI(rng).choose_shot(knowledge)
