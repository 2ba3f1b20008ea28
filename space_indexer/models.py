"""
=============================================================================
Indexer Entities (models.py)
=============================================================================

Records shared with the host indexing pipeline.  The host owns their
lifecycle; helpers in this package only read or mutate them in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Space:
    id: str = ""
    name: str = ""
    about: str = ""
    external_url: str = ""
    github: str = ""
    twitter: str = ""
    discord: str = ""
    wallet: str = ""
    # 20-byte addresses; executors_types[i] classifies executors[i]
    executors: List[bytes] = field(default_factory=list)
    executors_types: List[str] = field(default_factory=list)
    quorum: Optional[int] = None


@dataclass
class ExecutionStrategy:
    id: str  # lowercase 0x-hex address
    type: str
