"""Retry policy for LLM calls, driven by the ``retry`` config section."""

import logging
from typing import Callable, Optional

import structlog
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .config_models import RetryConfig

logger = structlog.stdlib.get_logger(__name__)


def llm_retry(
    max_attempts: int = 3,
    min_wait: float = 2.0,
    max_wait: float = 30.0,
    exceptions: tuple = (Exception,),
) -> Callable:
    """Retry decorator for LLM API calls.

    Only ``exceptions`` are retried; anything else propagates on the first
    failure. The last error is re-raised once attempts run out.
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(exceptions),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


def llm_retry_from_config(
    config: Optional[RetryConfig] = None, exceptions: tuple = (Exception,)
) -> Callable:
    config = config or RetryConfig()
    return llm_retry(
        max_attempts=config.max_attempts,
        min_wait=config.min_wait,
        max_wait=config.llm_max_wait,
        exceptions=exceptions,
    )
