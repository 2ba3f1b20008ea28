"""
=============================================================================
ABI Helpers (abi_helpers.py)
=============================================================================

Nested ABI decoding of avatar module deployments.

A space's avatar module is deployed through a proxy factory call:

    deployProxy(address masterCopy, bytes initializer, bytes32 salt)
        initializer = setUp(bytes initParams)
            initParams = abi.encode(address, address, address[], uint256 quorum)

``get_avatar_quorum()`` peels the three layers with a fixed stage table.
The offsets in the table only hold for these exact signatures; if the
factory or module interface changes, add a new table instead of patching
this one.
"""

from __future__ import annotations

import logging
from typing import Any, List, NamedTuple, Optional, Sequence, Union

from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from eth_abi.exceptions import DecodingError
from eth_hash.auto import keccak
from hexbytes import HexBytes

logger = logging.getLogger("space-indexer.abi")

# A standalone dynamic tuple starts with a head word pointing at offset 32.
TUPLE_PREFIX = bytes.fromhex("00" * 31 + "20")
SELECTOR_LENGTH = 4

DEPLOY_PROXY_SIGNATURE = "(address,bytes,bytes32)"
SET_UP_AVATAR_SIGNATURE = "bytes"
SET_UP_AVATAR_INIT_PARAMS_SIGNATURE = "(address,address,address[],uint256)"


class DecodeStage(NamedTuple):
    signature: str
    strip: int  # leading bytes dropped before decoding
    tuple_head: bool  # prepend TUPLE_PREFIX
    pick: Optional[int]  # tuple index handed to the next stage, None for the whole value


AVATAR_QUORUM_STAGES = (
    DecodeStage(DEPLOY_PROXY_SIGNATURE, SELECTOR_LENGTH, True, 1),
    DecodeStage(SET_UP_AVATAR_SIGNATURE, SELECTOR_LENGTH, False, None),
    DecodeStage(SET_UP_AVATAR_INIT_PARAMS_SIGNATURE, 0, True, 3),
)


def function_selector(signature: str) -> bytes:
    """Return the 4-byte function selector for *signature*."""
    return keccak(signature.encode("utf-8"))[:SELECTOR_LENGTH]


def decode_stage(stage: DecodeStage, data: bytes) -> Any:
    """Decode one layer and return the picked value.

    Raises eth_abi's ``DecodingError`` on malformed or undersized data.
    """
    payload = data[stage.strip:]
    if stage.tuple_head:
        payload = TUPLE_PREFIX + payload
    (value,) = abi_decode([stage.signature], payload)
    if stage.pick is None:
        return value
    return value[stage.pick]


def decode_nested(stages: Sequence[DecodeStage], data: Union[bytes, str]) -> Optional[Any]:
    """Run *data* through every stage, returning ``None`` if any stage fails."""
    try:
        value: Any = bytes(HexBytes(data))
    except (TypeError, ValueError) as exc:
        logger.debug(f"Input is not valid call data: {exc}")
        return None

    for depth, stage in enumerate(stages, start=1):
        try:
            value = decode_stage(stage, value)
        except (DecodingError, OverflowError) as exc:
            logger.debug(f"Stage {depth} ({stage.signature}) failed to decode: {exc}")
            return None
    return value


def get_avatar_quorum(calldata: Union[bytes, str]) -> Optional[int]:
    """Return the quorum encoded in a ``deployProxy`` call, or ``None``.

    Never raises on malformed input.
    """
    quorum = decode_nested(AVATAR_QUORUM_STAGES, calldata)
    if not isinstance(quorum, int):
        return None
    return quorum


# =============================================================================
# Encoding (inverse of get_avatar_quorum)
# =============================================================================

DEPLOY_PROXY_SELECTOR = function_selector("deployProxy(address,bytes,bytes32)")
SET_UP_SELECTOR = function_selector("setUp(bytes)")


def encode_avatar_deployment(
    *,
    master_copy: str,
    owner: str,
    target: str,
    members: List[str],
    quorum: int,
    salt: bytes = b"\x00" * 32,
) -> bytes:
    """Build ``deployProxy`` call data that initialises an avatar with *quorum*."""
    init_params = abi_encode(
        ["address", "address", "address[]", "uint256"], [owner, target, members, quorum]
    )
    initializer = SET_UP_SELECTOR + abi_encode(["bytes"], [init_params])
    return DEPLOY_PROXY_SELECTOR + abi_encode(
        ["address", "bytes", "bytes32"], [master_copy, initializer, salt]
    )
