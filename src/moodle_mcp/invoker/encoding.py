"""Form encoding for web-service parameters.

Nested values are flattened with the bracket convention the REST server
expects::

    {"ids": [1, 2]}                        -> ids[0]=1, ids[1]=2
    {"criteria": [{"key": "email"}]}       -> criteria[0][key]=email
    {"options": {"ids": 1}}                -> options[ids]=1

``None`` means "absent" and is never sent.
"""

from collections.abc import Iterator, Mapping
from enum import Enum
from typing import Any

WireField = tuple[str, str]


def to_wire_string(value: Any) -> str:
    """Stringify a scalar the way the remote API expects.

    Args:
        value: Scalar parameter value

    Returns:
        ``"true"``/``"false"`` for booleans, plain decimal for numbers
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, Enum):
        return to_wire_string(value.value)
    return str(value)


def encode_params(params: Mapping[str, Any]) -> list[WireField]:
    """Flatten a parameter mapping into ordered form fields.

    Key order follows the mapping's insertion order; sequence elements keep
    their given order and their original index.

    Args:
        params: Parameter mapping (scalars, sequences, mappings)

    Returns:
        List of (key, value) string pairs
    """
    fields: list[WireField] = []
    for key, value in params.items():
        fields.extend(_encode_value(str(key), value))
    return fields


def _encode_value(key: str, value: Any) -> Iterator[WireField]:
    if value is None:
        return
    if isinstance(value, Mapping):
        for sub_key, sub_value in value.items():
            yield from _encode_value(f"{key}[{sub_key}]", sub_value)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            yield from _encode_value(f"{key}[{index}]", item)
    else:
        yield key, to_wire_string(value)
