"""Libra JSON-RPC wire types and result decoding."""

from .types import (
    Method,
    JsonRpcRequest,
    JsonRpcErrorObject,
    JsonRpcResponse,
    Amount,
    Account,
    VMStatus,
    Event,
    Transaction,
    Metadata,
    CurrencyInfo,
)
from .decode import decode_object, decode_list, object_of, list_of

__all__ = [
    "Method",
    "JsonRpcRequest",
    "JsonRpcErrorObject",
    "JsonRpcResponse",
    "Amount",
    "Account",
    "VMStatus",
    "Event",
    "Transaction",
    "Metadata",
    "CurrencyInfo",
    "decode_object",
    "decode_list",
    "object_of",
    "list_of",
]
