"""Function-call encoding over JSON ABI descriptors.

Function lookup, canonical signatures and selectors come from ``eth_utils``;
arguments and results use the head/tail layout provided by ``eth_abi``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, EncodingError as AbiEncodingError
from eth_utils import (
    abi_to_signature,
    filter_abi_by_name,
    function_abi_to_4byte_selector,
    get_abi_input_types,
    get_abi_output_types,
    get_all_function_abis,
    is_hex,
    is_hex_address,
    to_bytes,
    to_checksum_address,
)

from diamond_gateway.errors import EncodingError

AbiEntry = Mapping[str, Any]


def find_function(abi: Sequence[AbiEntry], name: str, arg_count: int | None = None) -> AbiEntry:
    candidates = [entry for entry in filter_abi_by_name(name, abi) if entry["type"] == "function"]
    if arg_count is not None:
        candidates = [entry for entry in candidates if len(entry.get("inputs", ())) == arg_count]
    if not candidates:
        raise EncodingError(f"function {name!r} with {arg_count} argument(s) not found in ABI")
    return candidates[0]


def _element_type(param_type: str) -> str | None:
    if not param_type.endswith("]"):
        return None
    return param_type[: param_type.rfind("[")]


def _normalize(param_type: str, value: Any, components: Sequence[AbiEntry] = ()) -> Any:
    inner = _element_type(param_type)
    if inner is not None:
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
            raise EncodingError(f"expected a sequence for {param_type}, got {type(value).__name__}")
        return [_normalize(inner, item, components) for item in value]

    if param_type == "tuple":
        if isinstance(value, Mapping):
            value = [value[component["name"]] for component in components]
        if len(value) != len(components):
            raise EncodingError(f"expected {len(components)} tuple fields, got {len(value)}")
        return tuple(
            _normalize(str(component["type"]), item, component.get("components", ()))
            for component, item in zip(components, value)
        )

    if param_type == "address" and isinstance(value, str):
        if not is_hex_address(value):
            raise EncodingError(f"invalid address: {value!r}")
        return to_checksum_address(value)

    if param_type.startswith("bytes") and isinstance(value, str):
        if not is_hex(value):
            raise EncodingError(f"invalid hex bytes: {value!r}")
        return to_bytes(hexstr=value)

    return value


def _normalize_values(params: Sequence[AbiEntry], values: Sequence[Any]) -> list[Any]:
    return [
        _normalize(str(param["type"]), value, param.get("components", ()))
        for param, value in zip(params, values)
    ]


def encode_function_call(abi: Sequence[AbiEntry], name: str, args: Sequence[Any]) -> bytes:
    entry = find_function(abi, name, len(args))
    params = entry.get("inputs", ())
    try:
        encoded_args = encode(get_abi_input_types(entry), _normalize_values(params, args))
    except (AbiEncodingError, TypeError, ValueError, OverflowError) as exc:
        raise EncodingError(f"cannot encode arguments for {abi_to_signature(entry)}: {exc}") from exc
    return function_abi_to_4byte_selector(entry) + encoded_args


def _checksum_decoded(param_type: str, value: Any, components: Sequence[AbiEntry] = ()) -> Any:
    inner = _element_type(param_type)
    if inner is not None:
        return tuple(_checksum_decoded(inner, item, components) for item in value)
    if param_type == "tuple":
        return tuple(
            _checksum_decoded(str(component["type"]), item, component.get("components", ()))
            for component, item in zip(components, value)
        )
    if param_type == "address":
        return to_checksum_address(value)
    return value


def _decode_params(params: Sequence[AbiEntry], types: list[str], data: bytes) -> tuple[Any, ...]:
    try:
        raw = decode(types, data)
    except (DecodingError, ValueError) as exc:
        raise EncodingError(f"cannot decode {types}: {exc}") from exc
    return tuple(
        _checksum_decoded(str(param["type"]), value, param.get("components", ()))
        for param, value in zip(params, raw)
    )


def decode_function_result(abi: Sequence[AbiEntry], name: str, data: bytes) -> Any:
    entry = find_function(abi, name)
    outputs = entry.get("outputs", ())
    if not outputs:
        return None
    values = _decode_params(outputs, get_abi_output_types(entry), bytes(data))
    return values[0] if len(values) == 1 else values


def encode_function_result(abi: Sequence[AbiEntry], name: str, values: Sequence[Any]) -> bytes:
    entry = find_function(abi, name)
    outputs = entry.get("outputs", ())
    try:
        return encode(get_abi_output_types(entry), _normalize_values(outputs, values))
    except (AbiEncodingError, TypeError, ValueError, OverflowError) as exc:
        raise EncodingError(f"cannot encode result of {abi_to_signature(entry)}: {exc}") from exc


def decode_function_call(abi: Sequence[AbiEntry], calldata: bytes) -> tuple[str, tuple[Any, ...]]:
    """Split ``calldata`` into the matching function name and decoded arguments."""
    data = bytes(calldata)
    selector, payload = data[:4], data[4:]
    matches = [
        entry for entry in get_all_function_abis(abi) if function_abi_to_4byte_selector(entry) == selector
    ]
    if not matches:
        raise EncodingError(f"no function with selector 0x{selector.hex()} in ABI")
    entry = matches[0]
    return str(entry["name"]), _decode_params(entry.get("inputs", ()), get_abi_input_types(entry), payload)
