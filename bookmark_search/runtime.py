"""
Composition root for applications embedding the search engine.

Loads environment files, configures logging and hands back an EngineProvider
that the application owns and passes to its callers.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

from .config import Settings, load_environment
from .engine import EngineProvider
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


def bootstrap(
    base_dir: Optional[Union[str, Path]] = None,
    configure_logging: bool = True,
    **engine_options: Any,
) -> EngineProvider:
    """
    Prepare the search runtime.

    Args:
        base_dir: Directory holding .env.local / .env (default: current directory)
        configure_logging: Set up console + file logging from settings
        **engine_options: Forwarded to SemanticSearchEngine (synonyms, category_keywords)

    Returns:
        EngineProvider bound to the loaded settings
    """
    load_environment(base_dir)
    settings = Settings.from_env()

    if configure_logging:
        setup_logging(
            log_file=settings.log_file,
            console_level=settings.console_level,
            file_level=logging.DEBUG,  # Always DEBUG in file for troubleshooting
        )

    logger.info(
        f"Bookmark search ready (suggestions={settings.suggestion_limit}, "
        f"similar={settings.similar_limit})"
    )
    return EngineProvider(settings=settings, **engine_options)
