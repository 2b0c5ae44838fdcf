"""Read-only match snapshots for the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass

from salvo.core.board import Board
from salvo.core.fleet import ShipSummary
from salvo.core.models import CellState, GamePhase, Orientation, ShipType, Side, Status
from salvo.core.rules import MatchState

BoardRows = tuple[tuple[CellState, ...], ...]


@dataclass(frozen=True, slots=True)
class MatchSnapshot:
    """Everything a renderer needs, without ship identities."""

    phase: GamePhase
    turn: Side
    winner: Side | None
    status: Status
    orientation: Orientation
    next_ship_type: ShipType | None
    player_board: BoardRows
    ai_board: BoardRows
    player_fleet: tuple[ShipSummary, ...]
    ai_fleet: tuple[ShipSummary, ...]

    @property
    def player_can_fire(self) -> bool:
        return self.phase is GamePhase.PLAYING and self.turn is Side.PLAYER


def masked_rows(board: Board) -> BoardRows:
    """Board rows with intact ship cells shown as empty."""
    return tuple(
        tuple(CellState.EMPTY if state is CellState.OCCUPIED else state for state in row)
        for row in board.rows()
    )


def build_snapshot(state: MatchState, *, reveal_ai_fleet: bool = False) -> MatchSnapshot:
    """Project match state; the AI board is masked unless revealed."""
    ai_rows = state.ai_board.rows() if reveal_ai_fleet else masked_rows(state.ai_board)
    return MatchSnapshot(
        phase=state.phase,
        turn=state.turn,
        winner=state.winner,
        status=state.status,
        orientation=state.orientation,
        next_ship_type=state.next_ship_type,
        player_board=state.player_board.rows(),
        ai_board=ai_rows,
        player_fleet=state.player_fleet.summaries(),
        ai_fleet=state.ai_fleet.summaries(),
    )
