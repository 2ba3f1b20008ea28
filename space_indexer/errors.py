"""
Exceptions raised while enriching space records.
"""


class SpaceIndexerError(Exception):
    """Base class for all space indexer errors."""


class MetadataFetchError(SpaceIndexerError, RuntimeError):
    """Every IPFS gateway failed to return the metadata document."""


class MetadataParseError(SpaceIndexerError, ValueError):
    """The metadata document is not a JSON object or holds a malformed address."""
