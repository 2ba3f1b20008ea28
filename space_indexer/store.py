"""
=============================================================================
Execution Strategy Lookup (store.py)
=============================================================================

Read access to execution strategies indexed by earlier events.

The host pipeline guarantees write-before-read ordering: a strategy only
becomes visible here once the event that created it has been processed.
Until then ``load()`` returns ``None`` and callers fall back to the
"unknown" classification.
"""

from __future__ import annotations

import abc
import logging
from typing import Dict, Iterable, Optional

from .models import ExecutionStrategy

logger = logging.getLogger("space-indexer.store")


def normalize_key(key: str) -> str:
    """Return the canonical (lowercase, 0x-prefixed) form of an address key."""
    key = key.lower()
    if not key.startswith("0x"):
        key = f"0x{key}"
    return key


class ExecutionStrategyStore(abc.ABC):
    """Key-value view over previously indexed execution strategies."""

    @abc.abstractmethod
    def load(self, key: str) -> Optional[ExecutionStrategy]:
        """Return the strategy stored under *key*, or ``None`` on a miss."""


class InMemoryExecutionStrategyStore(ExecutionStrategyStore):
    """Dict-backed store, used by tests and single-process hosts."""

    def __init__(self, strategies: Optional[Iterable[ExecutionStrategy]] = None):
        self._strategies: Dict[str, ExecutionStrategy] = {}
        for strategy in strategies or []:
            self.save(strategy)

    def save(self, strategy: ExecutionStrategy) -> None:
        key = normalize_key(strategy.id)
        self._strategies[key] = strategy
        logger.debug(f"Stored execution strategy {key} ({strategy.type})")

    def load(self, key: str) -> Optional[ExecutionStrategy]:
        return self._strategies.get(normalize_key(key))

    def __len__(self) -> int:
        return len(self._strategies)


# =============================================================================
# Module-level singleton
# =============================================================================

_strategies = InMemoryExecutionStrategyStore()


def get_execution_strategies() -> InMemoryExecutionStrategyStore:
    return _strategies
