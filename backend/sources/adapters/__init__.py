"""
Candidate source registry.

This module maintains a registry of all available sources.
Use get_source() to retrieve a source instance by adapter name.
"""

from typing import Dict, Type
from sources.base import BaseSource
from sources.adapters.mock import MockSource
from sources.adapters.api import ApiSource


# Registry of available sources
# Maps adapter name (from config) to source class
ADAPTERS: Dict[str, Type[BaseSource]] = {
    "mock": MockSource,
    "api": ApiSource,
}


def get_source(source_config) -> BaseSource:
    """
    Get source instance for the configured adapter.

    Args:
        source_config: SourceConfig object with adapter name

    Returns:
        Instantiated source

    Raises:
        ValueError: If adapter name is not registered
    """
    source_class = ADAPTERS.get(source_config.adapter)
    if not source_class:
        raise ValueError(
            f"Unknown adapter: {source_config.adapter}. "
            f"Available adapters: {', '.join(ADAPTERS.keys())}"
        )
    return source_class(source_config)
