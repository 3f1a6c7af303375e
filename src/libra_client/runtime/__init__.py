"""Runtime helpers for the Libra Python client"""

from .errors import (
    ErrorCode,
    LibraError,
    NetworkMismatchError,
    StaleResponseError,
    RemoteCallError,
    InvalidResponseError,
    JsonRpcError,
    TransactionHashMismatchError,
    TransactionExecutionFailedError,
    TransactionExpiredError,
    TransactionWaitTimeoutError,
    error_code,
)

__all__ = [
    "ErrorCode",
    "LibraError",
    "NetworkMismatchError",
    "StaleResponseError",
    "RemoteCallError",
    "InvalidResponseError",
    "JsonRpcError",
    "TransactionHashMismatchError",
    "TransactionExecutionFailedError",
    "TransactionExpiredError",
    "TransactionWaitTimeoutError",
    "error_code",
]
