"""
ABI Loader and codec.

Contract ABIs ship as JSON artifacts under ``abacus/catalog/data``.  Calldata
is encoded with eth-abi and a Keccak-256 selector; return data is decoded
back into Python values.
"""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Any

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_hash.auto import keccak

from ..catalog.schemas import DATA_ROOT


class AbiDecodeError(ValueError):
    """Return data could not be decoded against the function's outputs.

    The message follows the ``code=BAD_DATA`` convention wallets and
    client libraries use for this condition, typically an ``eth_call``
    answered with ``0x`` because nothing is deployed at the target.
    """

    def __init__(self, function_name: str, data: str) -> None:
        super().__init__(
            f'could not decode result data (code=BAD_DATA, value="{data}", '
            f'function="{function_name}")'
        )
        self.function_name = function_name
        self.data = data


def keccak256(data: bytes) -> bytes:
    # NOTE: Keccak-256 != SHA3-256 (NIST). Never use hashlib.sha3_256 here.
    return keccak(data)


@lru_cache(maxsize=16)
def load_abi(contract_name: str) -> tuple[dict[str, Any], ...]:
    """
    Load the ABI for a packaged contract artifact.

    Args:
        contract_name: Artifact name (e.g., "Counter")

    Returns:
        ABI entries as a tuple of dicts

    Raises:
        FileNotFoundError: If the artifact is missing
    """
    path = DATA_ROOT / f"{contract_name}.json"
    if not path.exists():
        raise FileNotFoundError(f"ABI not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        artifact = json.load(f)

    return tuple(artifact["abi"])


def counter_abi() -> tuple[dict[str, Any], ...]:
    """Load Counter ABI."""
    return load_abi("Counter")


def find_function(abi: tuple[dict[str, Any], ...], function_name: str) -> dict[str, Any]:
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == function_name:
            return entry
    raise ValueError(f"Function {function_name} not found in ABI")


def function_selector(function_name: str, input_types: list[str]) -> bytes:
    sig = f"{function_name}({','.join(input_types)})"
    return keccak256(sig.encode("utf-8"))[:4]


def encode_function_call(
    abi: tuple[dict[str, Any], ...], function_name: str, args: list
) -> str:
    """
    ABI-encode a function call.

    Args:
        abi: Contract ABI
        function_name: Function name to call
        args: Function arguments

    Returns:
        0x-prefixed hex encoded calldata
    """
    func = find_function(abi, function_name)
    input_types = [inp["type"] for inp in func.get("inputs", [])]
    selector = function_selector(function_name, input_types)
    encoded_args = encode(input_types, args) if args else b""
    return "0x" + selector.hex() + encoded_args.hex()


def decode_function_result(
    abi: tuple[dict[str, Any], ...], function_name: str, data: str
) -> Any:
    """
    ABI-decode a function call result.

    Args:
        abi: Contract ABI
        function_name: Function name
        data: 0x-prefixed hex encoded return data

    Returns:
        Decoded result (single value or tuple), None for functions
        without outputs

    Raises:
        AbiDecodeError: If the data is empty or does not match the outputs
    """
    func = find_function(abi, function_name)
    output_types = [out["type"] for out in func.get("outputs", [])]
    if not output_types:
        return None

    try:
        raw = bytes.fromhex(data[2:] if data.startswith("0x") else data)
        decoded = decode(output_types, raw)
    except (DecodingError, ValueError) as exc:
        raise AbiDecodeError(function_name, data) from exc

    if len(decoded) == 1:
        return decoded[0]
    return decoded
