"""
=============================================================================
Space Metadata (metadata.py)
=============================================================================

Populates a Space record from its IPFS metadata document.

Document shape (every field optional):

    {
        "name": "...",
        "description": "...",
        "external_url": "...",
        "properties": {
            "github": "...", "twitter": "...", "discord": "...",
            "wallets": ["0x..."],
            "executionStrategies": ["0x..."]
        }
    }

The whole update is computed before the record is touched, so a fetch or
parse failure leaves the Space exactly as it was.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from eth_utils import decode_hex, encode_hex, is_hex_address

from .config import IPFS_PREFIX, UNKNOWN_EXECUTION_STRATEGY_TYPE
from .errors import MetadataParseError
from .ipfs import IpfsClient, get_ipfs
from .models import Space
from .store import ExecutionStrategyStore, get_execution_strategies

logger = logging.getLogger("space-indexer.metadata")

_MISSING = object()


class FieldRule(NamedTuple):
    path: Tuple[str, ...]
    attr: str
    clear: bool  # reset to "" when the document lacks the field


# Plain string fields. A missing "properties" object clears every
# properties.* field.
METADATA_FIELDS = (
    FieldRule(("name",), "name", False),
    FieldRule(("description",), "about", True),
    FieldRule(("external_url",), "external_url", True),
    FieldRule(("properties", "github"), "github", True),
    FieldRule(("properties", "twitter"), "twitter", True),
    FieldRule(("properties", "discord"), "discord", True),
)


def _lookup(document: Dict[str, Any], path: Tuple[str, ...]) -> Any:
    node: Any = document
    for key in path:
        if not isinstance(node, dict) or node.get(key) is None:
            return _MISSING
        node = node[key]
    return node


def _first_wallet(document: Dict[str, Any]) -> str:
    wallets = _lookup(document, ("properties", "wallets"))
    if not isinstance(wallets, list) or not wallets:
        return ""
    return wallets[0] if isinstance(wallets[0], str) else ""


def _executors(document: Dict[str, Any]) -> List[bytes]:
    strategies = _lookup(document, ("properties", "executionStrategies"))
    if not isinstance(strategies, list):
        return []

    executors = []
    for strategy in strategies:
        if not isinstance(strategy, str) or not is_hex_address(strategy):
            raise MetadataParseError(f"Invalid execution strategy address: {strategy!r}")
        executors.append(decode_hex(strategy))
    return executors


def parse_metadata(data: bytes) -> Dict[str, Any]:
    """Parse a metadata document, which must be a JSON object."""
    try:
        document = json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MetadataParseError(f"Metadata is not valid JSON: {e}") from e
    if not isinstance(document, dict):
        raise MetadataParseError(f"Metadata must be a JSON object, got {type(document).__name__}")
    return document


def resolve_executor_types(executors: List[bytes], strategies: ExecutionStrategyStore) -> List[str]:
    """Classify each executor, index for index, falling back to "unknown"."""
    types = []
    for executor in executors:
        strategy = strategies.load(encode_hex(executor))
        types.append(strategy.type if strategy is not None else UNKNOWN_EXECUTION_STRATEGY_TYPE)
    return types


def build_space_update(document: Dict[str, Any], strategies: ExecutionStrategyStore) -> Dict[str, Any]:
    """Return the Space attribute values described by *document*."""
    update: Dict[str, Any] = {}
    for rule in METADATA_FIELDS:
        value = _lookup(document, rule.path)
        if isinstance(value, str):
            update[rule.attr] = value
        elif rule.clear:
            update[rule.attr] = ""

    update["wallet"] = _first_wallet(document)
    executors = _executors(document)
    update["executors"] = executors
    update["executors_types"] = resolve_executor_types(executors, strategies)
    return update


def update_space_metadata(
    space: Space,
    metadata_uri: str,
    *,
    ipfs: Optional[IpfsClient] = None,
    strategies: Optional[ExecutionStrategyStore] = None,
) -> None:
    """Fetch *metadata_uri* and copy its fields onto *space* in place.

    URIs without the ``ipfs://`` scheme are ignored.

    Raises:
        MetadataFetchError: If the document cannot be fetched
        MetadataParseError: If the document is not a usable JSON object
    """
    if not metadata_uri.startswith(IPFS_PREFIX):
        logger.debug(f"Skipping non-IPFS metadata URI for space {space.id!r}: {metadata_uri}")
        return

    if ipfs is None:
        ipfs = get_ipfs()
    if strategies is None:
        strategies = get_execution_strategies()

    cid = metadata_uri[len(IPFS_PREFIX):]
    document = parse_metadata(ipfs.cat(cid))
    update = build_space_update(document, strategies)

    for attr, value in update.items():
        setattr(space, attr, value)
    logger.info(f"Updated metadata for space {space.id!r} from {cid} ({len(update['executors'])} executors)")
