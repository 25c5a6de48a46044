"""Lazy-import registry behind the provider and store factories.

Each factory declares ``(key, module_path, class_name)`` entries. The module
is only imported when its key is first requested, so optional extras
(openai, qdrant-client, sentence-transformers) are never needed up front.
Instances built without kwargs are cached and shared.
"""

from __future__ import annotations

import importlib
import logging
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProviderRegistry(Generic[T]):
    """Name → lazily imported class, with a singleton cache for default instances."""

    def __init__(self, kind: str, entries: list[tuple[str, str, str]]):
        self.kind = kind
        self._entries = {key: (module_path, cls_name) for key, module_path, cls_name in entries}
        self._cache: dict[str, T] = {}

    def names(self) -> list[str]:
        return list(self._entries)

    def create(self, name: str, **kwargs) -> T:
        """Instantiate the class registered under ``name`` (case-insensitive).

        Raises:
            ValueError: If nothing is registered under ``name``.
        """
        key = name.lower()
        if not kwargs and key in self._cache:
            return self._cache[key]

        if key not in self._entries:
            raise ValueError(f"Unknown {self.kind} '{name}'. Available: {self.names()}")

        module_path, cls_name = self._entries[key]
        cls = getattr(importlib.import_module(module_path), cls_name)
        instance = cls(**kwargs)
        if not kwargs:
            self._cache[key] = instance
        logger.debug("Created %s %s", self.kind, cls_name)
        return instance

    def clear(self) -> None:
        self._cache.clear()
