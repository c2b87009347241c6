"""
Global Langfuse configuration.

config/settings.py loads .env into os.environ, so the Langfuse SDK discovers
its credentials without arguments. When tracing is enabled every LLM call
made through LLMService carries a LangChain CallbackHandler.
"""

import logging
from functools import lru_cache
from typing import Any, List

from config.settings import settings

logger = logging.getLogger(__name__)


def is_langfuse_enabled() -> bool:
    """
    Check if Langfuse observability is enabled.

    Returns:
        bool: True if enabled and configured, False otherwise
    """
    if not settings.LANGFUSE_ENABLED:
        return False

    if not settings.LANGFUSE_PUBLIC_KEY or not settings.LANGFUSE_SECRET_KEY:
        logger.warning("LANGFUSE_ENABLED=true but credentials missing in .env")
        return False

    return True


@lru_cache()
def _init_langfuse() -> bool:
    from langfuse import Langfuse

    try:
        # Initialize singleton (credentials auto-discovered from os.environ)
        Langfuse()
    except Exception as e:
        logger.error(f"Failed to initialize Langfuse: {e}")
        return False

    logger.info(f"Langfuse initialized (host: {settings.LANGFUSE_HOST})")
    return True


def get_langfuse_callbacks() -> List[Any]:
    """LangChain callbacks for the current call; empty when tracing is off."""
    if not is_langfuse_enabled() or not _init_langfuse():
        return []

    from langfuse.langchain import CallbackHandler

    return [CallbackHandler()]
