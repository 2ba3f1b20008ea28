"""
=============================================================================
IPFS Fetcher (ipfs.py)
=============================================================================

Fetches content-addressed documents through public IPFS HTTP gateways.

Supports multiple gateways with automatic failover: the gateway that last
answered is tried first, the others in configured order after it.  A
failed gateway is not retried within the same ``cat()`` call.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import requests

from .config import IPFS_GATEWAY_URLS, IPFS_TIMEOUT_SECONDS
from .errors import MetadataFetchError

logger = logging.getLogger("space-indexer.ipfs")


class IpfsClient:
    """Read-only IPFS gateway client."""

    def __init__(self, gateways: Optional[List[str]] = None, timeout: Optional[float] = None):
        self.gateways = [g.rstrip("/") for g in (gateways if gateways is not None else IPFS_GATEWAY_URLS)]
        self.timeout = timeout if timeout is not None else IPFS_TIMEOUT_SECONDS
        # Track which gateway is currently preferred (rotates on failure)
        self._current_index = 0

    def _get_single(self, gateway: str, cid: str) -> bytes:
        res = requests.get(f"{gateway}/ipfs/{cid}", timeout=self.timeout)
        res.raise_for_status()
        return res.content

    def cat(self, cid: str) -> bytes:
        """Return the raw bytes stored under *cid*.

        Raises:
            MetadataFetchError: If every gateway fails
        """
        if not self.gateways:
            raise MetadataFetchError("No IPFS gateways configured")

        errors = []
        for i in range(len(self.gateways)):
            idx = (self._current_index + i) % len(self.gateways)
            gateway = self.gateways[idx]
            try:
                data = self._get_single(gateway, cid)
            except requests.RequestException as e:
                errors.append(f"{gateway}: {e}")
                logger.warning(f"IPFS fetch of {cid} from {gateway} failed: {e}")
                continue
            if idx != self._current_index:
                logger.info(f"IPFS failover: switched to {gateway}")
                self._current_index = idx
            return data

        raise MetadataFetchError(f"All IPFS gateways failed for {cid}: {'; '.join(errors)}")


# =============================================================================
# Module-level singleton
# =============================================================================

_ipfs = IpfsClient()


def get_ipfs() -> IpfsClient:
    return _ipfs


if __name__ == "__main__":
    import sys

    if len(sys.argv) < 2:
        print("usage: python -m space_indexer.ipfs <cid>")
        sys.exit(1)

    logging.basicConfig(level=logging.INFO)
    client = IpfsClient()
    cid = sys.argv[1]
    try:
        print(f"Fetching {cid} via {client.gateways}")
        print(client.cat(cid)[:200])
    except MetadataFetchError as e:
        print(f"Could not fetch from IPFS: {e}")
