"""
Libra Client Error Model

This module provides the error handling framework for the Libra JSON-RPC client.
Every error carries an ErrorCode; retry and polling decisions are made on the
code, not on the exception class.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Libra client error codes."""

    # General errors (1-99)
    UNKNOWN = 1

    # Consistency errors (100-199)
    NETWORK_MISMATCH = 100
    STALE_RESPONSE = 101

    # Remote call errors (200-299)
    REMOTE_CALL_FAILED = 200
    INVALID_RESPONSE = 201
    JSON_RPC_ERROR = 202

    # Transaction wait outcomes (400-499)
    TRANSACTION_HASH_MISMATCH = 400
    TRANSACTION_EXECUTION_FAILED = 401
    TRANSACTION_EXPIRED = 402
    TRANSACTION_WAIT_TIMEOUT = 403


class LibraError(Exception):
    """
    Base class for all Libra client errors.

    Provides structured error information: a code, a message, optional
    details and the underlying cause.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a Libra error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result: Dict[str, Any] = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class NetworkMismatchError(LibraError):
    """Server reported a chain id other than the one the client expects."""

    def __init__(self, expected: Any, actual: Any):
        super().__init__(
            f"chain id mismatch: expected {expected}, server returned {actual}",
            ErrorCode.NETWORK_MISMATCH,
            {"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual


class StaleResponseError(LibraError):
    """Response came from a replica behind a ledger version already observed."""

    def __init__(self, version: int, timestamp_usecs: int,
                 known_version: int, known_timestamp_usecs: int):
        super().__init__(
            f"stale response: ledger version {version} is older than known version {known_version}",
            ErrorCode.STALE_RESPONSE,
            {
                "version": version,
                "timestamp_usecs": timestamp_usecs,
                "known_version": known_version,
                "known_timestamp_usecs": known_timestamp_usecs,
            },
        )
        self.version = version
        self.known_version = known_version


class RemoteCallError(LibraError):
    """Transport level failure: the request never got a response."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.REMOTE_CALL_FAILED, cause=cause)


class InvalidResponseError(LibraError):
    """Unexpected HTTP status, malformed body or unexpected result shape."""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 body: Optional[str] = None, cause: Optional[Exception] = None):
        details: Dict[str, Any] = {}
        if status_code is not None:
            details["status_code"] = status_code
        if body is not None:
            details["body"] = body
        super().__init__(message, ErrorCode.INVALID_RESPONSE, details, cause)
        self.status_code = status_code
        self.body = body


class JsonRpcError(LibraError):
    """Server answered with a JSON-RPC error object."""

    def __init__(self, message: str, rpc_code: Optional[int] = None, data: Any = None):
        details: Dict[str, Any] = {}
        if rpc_code is not None:
            details["rpc_code"] = rpc_code
        if data is not None:
            details["data"] = data
        super().__init__(message, ErrorCode.JSON_RPC_ERROR, details)
        self.rpc_code = rpc_code
        self.data = data


class TransactionHashMismatchError(LibraError):
    """A different transaction occupies the awaited sequence number."""

    def __init__(self, transaction: Any, expected_hash: str):
        super().__init__(
            f"transaction hash mismatch: expected {expected_hash}, found {transaction.hash}",
            ErrorCode.TRANSACTION_HASH_MISMATCH,
            {"expected_hash": expected_hash, "actual_hash": transaction.hash},
        )
        self.transaction = transaction
        self.expected_hash = expected_hash


class TransactionExecutionFailedError(LibraError):
    """Transaction was committed but did not execute successfully."""

    def __init__(self, transaction: Any):
        vm_status = getattr(transaction, "vm_status", None)
        status_type = getattr(vm_status, "type", None)
        super().__init__(
            f"transaction {transaction.hash} execution failed: {status_type}",
            ErrorCode.TRANSACTION_EXECUTION_FAILED,
            {"hash": transaction.hash, "vm_status": status_type},
        )
        self.transaction = transaction


class TransactionExpiredError(LibraError):
    """Ledger time passed the transaction expiration before it showed up."""

    def __init__(self, expiration_time_secs: int, ledger_timestamp_usecs: int):
        super().__init__(
            f"transaction expired: expiration {expiration_time_secs}s, "
            f"ledger time {ledger_timestamp_usecs}us",
            ErrorCode.TRANSACTION_EXPIRED,
            {
                "expiration_time_secs": expiration_time_secs,
                "ledger_timestamp_usecs": ledger_timestamp_usecs,
            },
        )
        self.expiration_time_secs = expiration_time_secs
        self.ledger_timestamp_usecs = ledger_timestamp_usecs


class TransactionWaitTimeoutError(LibraError):
    """Wall-clock wait budget ran out before a terminal outcome."""

    def __init__(self, timeout: float):
        super().__init__(
            f"transaction not found within {timeout}s",
            ErrorCode.TRANSACTION_WAIT_TIMEOUT,
            {"timeout": timeout},
        )
        self.timeout = timeout


def error_code(exc: BaseException) -> ErrorCode:
    """Classify an exception; anything outside the hierarchy is UNKNOWN."""
    code = getattr(exc, "code", None)
    if isinstance(code, ErrorCode):
        return code
    return ErrorCode.UNKNOWN


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
