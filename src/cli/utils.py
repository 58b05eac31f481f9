"""Shared CLI utilities."""

from typing import Optional

import structlog
from rich.console import Console

from cli.config import load_config_model
from cli.config_models import DeclutterConfig

console = Console()
logger = structlog.get_logger()


def get_components(config_model: Optional[DeclutterConfig] = None) -> dict:
    """Initialize stores and services for the configured user."""
    from apscheduler.schedulers.background import BackgroundScheduler

    from entities import EntityStore
    from preferences import PreferenceRecorder
    from progress import ChallengeBoard, ProgressService, ProgressStore
    from scan import MockCatalog, RuleStore, scheduler_timer_factory

    config_model = config_model or load_config_model()
    user_id = config_model.user.id

    store = EntityStore(config_model.paths.db)
    progress_store = ProgressStore(store)
    # One scheduler for every timer this command creates; started lazily
    scheduler = BackgroundScheduler(daemon=True)
    logger.debug("components_ready", user_id=user_id, db=str(config_model.paths.db))

    return {
        "config_model": config_model,
        "user_id": user_id,
        "store": store,
        "progress_store": progress_store,
        "service": ProgressService(progress_store, user_id),
        "rules": RuleStore(store, user_id),
        "recorder": PreferenceRecorder(store, user_id, limit=config_model.preferences.max_entries),
        "challenges": ChallengeBoard(store, user_id),
        "catalog": MockCatalog(),
        "scheduler": scheduler,
        "timer_factory": scheduler_timer_factory(scheduler),
    }


def get_llm(config_model: DeclutterConfig):
    """Build the configured LLM provider. Raises LLMError when no key is set."""
    from llm import create_llm_provider

    llm_cfg = config_model.llm
    return create_llm_provider(provider=llm_cfg.provider, api_key=llm_cfg.api_key, model=llm_cfg.model)
