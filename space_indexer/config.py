"""
Configuration for the space indexer helpers.
"""
import os
import logging
from typing import List

logger = logging.getLogger("space-indexer.config")

# Metadata URIs
IPFS_PREFIX = "ipfs://"

# IPFS gateways - multiple URLs for failover.
# Override with SPACE_INDEXER_IPFS_GATEWAYS (comma-separated).
DEFAULT_IPFS_GATEWAYS = "https://ipfs.io,https://cloudflare-ipfs.com,https://dweb.link"

_gateways_env = os.getenv("SPACE_INDEXER_IPFS_GATEWAYS", DEFAULT_IPFS_GATEWAYS)
IPFS_GATEWAY_URLS: List[str] = [g.strip().rstrip("/") for g in _gateways_env.split(",") if g.strip()]

if not IPFS_GATEWAY_URLS:
    logger.warning("No IPFS gateways configured (SPACE_INDEXER_IPFS_GATEWAYS is empty). Metadata fetches will fail.")

IPFS_TIMEOUT_SECONDS = float(os.getenv("SPACE_INDEXER_IPFS_TIMEOUT", "10"))

# Execution strategies
UNKNOWN_EXECUTION_STRATEGY_TYPE = "unknown"
