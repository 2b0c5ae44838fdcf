"""Computer opponent targeting."""

from salvo.ai.hunt_target import HuntTargetAI, choose_target
from salvo.ai.strategy import AIStrategy, ShotKnowledge

__all__ = ["AIStrategy", "HuntTargetAI", "ShotKnowledge", "choose_target"]
