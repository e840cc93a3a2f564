from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from .common.clock import Clock
from .config import get_settings_module
from .container import Container, build_container
from .core.settings import EngineSettings
from .entries.repository import StatisticsRepository, TimeEntryRepository

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def load_settings() -> EngineSettings:
    load_dotenv(override=False)
    settings_module = get_settings_module()
    settings = EngineSettings.from_module(importlib.import_module(settings_module))
    logger.debug("Loaded settings from %s", settings_module)
    return settings


def create_engine(
    repository: TimeEntryRepository,
    *,
    statistics: StatisticsRepository | None = None,
    clock: Clock | None = None,
) -> Container:
    settings = load_settings()
    configure_logging("DEBUG" if settings.debug else settings.log_level)

    logger.info(
        "[timesheet-tracker] timezone=%s grace=%sm approval=%sm poll=%ss tick=%ss",
        settings.org_timezone,
        settings.late_grace_minutes,
        settings.late_approval_minutes,
        settings.poll_interval_seconds,
        settings.progressive_tick_seconds,
    )

    return build_container(repository=repository, settings=settings, statistics=statistics, clock=clock)
