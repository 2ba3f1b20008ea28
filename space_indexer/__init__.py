"""Space indexer helpers: avatar quorum decoding and IPFS metadata enrichment."""

from .abi_helpers import encode_avatar_deployment, get_avatar_quorum
from .errors import MetadataFetchError, MetadataParseError, SpaceIndexerError
from .ipfs import IpfsClient
from .metadata import update_space_metadata
from .models import ExecutionStrategy, Space
from .store import ExecutionStrategyStore, InMemoryExecutionStrategyStore

__all__ = [
    'get_avatar_quorum', 'encode_avatar_deployment', 'update_space_metadata',
    'IpfsClient', 'ExecutionStrategyStore', 'InMemoryExecutionStrategyStore',
    'Space', 'ExecutionStrategy',
    'SpaceIndexerError', 'MetadataFetchError', 'MetadataParseError',
]
