"""Composition root wiring settings, logging, and the match controller."""

from __future__ import annotations

import logging
import random

from salvo.app.events import EventBus
from salvo.app.match import MatchController
from salvo.app.scheduler import Scheduler
from salvo.infra.config import GameSettings, load_default_env_files, load_settings
from salvo.infra.logging import setup_logging

logger = logging.getLogger(__name__)


def create_match_controller(
    settings: GameSettings | None = None,
    *,
    scheduler: Scheduler | None = None,
    event_bus: EventBus | None = None,
) -> MatchController:
    """Build a controller from settings; a fixed seed makes the match replayable."""
    resolved = settings if settings is not None else load_settings()
    rng = random.Random(resolved.seed)
    logger.info(
        "match_controller_created seed=%s ai_delay=%.2f placement_attempts=%d",
        resolved.seed,
        resolved.ai_delay_seconds,
        resolved.placement_attempts,
    )
    return MatchController(
        rng,
        scheduler if scheduler is not None else Scheduler(),
        event_bus=event_bus,
        ai_delay_seconds=resolved.ai_delay_seconds,
        placement_attempts=resolved.placement_attempts,
    )


def bootstrap(*, log_to_file: bool = True) -> MatchController:
    """Load env files, configure logging, and return a ready controller."""
    load_default_env_files(override_existing=False)
    settings = load_settings()
    setup_logging(settings, to_file=log_to_file)
    return create_match_controller(settings)
