"""Salvo: rules engine for a human vs. computer naval combat game."""

from salvo.app.bootstrap import bootstrap, create_match_controller
from salvo.app.match import MatchController

__all__ = ["MatchController", "bootstrap", "create_match_controller"]
