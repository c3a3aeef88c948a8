"""Lazy-loading encoder registry.

Maps encoder names to factories; instances are created and loaded on first
use. The registry is a lookup for wiring only: services receive the encoder
instance through their constructor.
"""

import logging
from typing import Callable

from services.pipeline.base import BaseEncoder

logger = logging.getLogger(__name__)

_registry: dict[str, BaseEncoder] = {}
_factories: dict[str, Callable[[], BaseEncoder]] = {}


def _hashing_two_tower() -> BaseEncoder:
    from config import settings
    from services.pipeline.two_tower_encoder import HashingTwoTowerEncoder
    return HashingTwoTowerEncoder(dimension=settings.embedding_dim)


_factories["two_tower_hashing"] = _hashing_two_tower


def register_encoder(name: str, factory: Callable[[], BaseEncoder]) -> None:
    """Make another encoder implementation available under name."""
    _factories[name] = factory
    _registry.pop(name, None)


def _create_encoder(name: str) -> BaseEncoder:
    factory = _factories.get(name)
    if factory is None:
        raise ValueError(f"Unknown encoder: {name}")
    return factory()


def get_encoder(name: str) -> BaseEncoder:
    """Get an encoder by name, creating and loading it on first access."""
    if name not in _registry:
        _registry[name] = _create_encoder(name)
    encoder = _registry[name]
    encoder.ensure_loaded()
    return encoder


def preload(*names: str) -> None:
    """Pre-load multiple encoders (e.g. at startup)."""
    for name in names:
        get_encoder(name)


def clear() -> None:
    """Drop all loaded encoder instances. Useful for testing."""
    _registry.clear()
