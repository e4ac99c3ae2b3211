"""Remote function invocation: parameter encoding and response normalization."""

from .encoding import WireField, encode_params, to_wire_string
from .invoker import RESERVED_FIELDS, FunctionInvoker
from .types import CallResult, RemoteFunctionCall

__all__ = [
    "FunctionInvoker",
    "CallResult",
    "RemoteFunctionCall",
    "WireField",
    "RESERVED_FIELDS",
    "encode_params",
    "to_wire_string",
]
