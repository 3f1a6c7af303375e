"""
Libra Python Client

JSON-RPC client for Libra full nodes: ledger reads guarded against stale
replicas, transaction submission, and transaction confirmation polling.
"""

from .config import ClientConfig, ChainId
from .ledger_state import LedgerState, LedgerInfo
from .recovery import RetryPolicy, AttemptStatus, AttemptResult, retry_on_code, create_stale_response_retry_policy
from .runtime.errors import *
from .transport import Transport, RequestsTransport, HttpResult
from .waiter import TransactionWaiter, TransactionWaitRequest, WaitState
from .jsonrpc import *
from .jsonrpc.client import LibraJsonRpcClient
from .utils import VM_STATUS_EXECUTED, is_executed

__version__ = "1.0.0"
__all__ = [
    # Client
    "LibraJsonRpcClient",
    "ClientConfig",
    "ChainId",

    # Consistency and retry
    "LedgerState",
    "LedgerInfo",
    "RetryPolicy",
    "AttemptStatus",
    "AttemptResult",
    "retry_on_code",
    "create_stale_response_retry_policy",

    # Transport
    "Transport",
    "RequestsTransport",
    "HttpResult",

    # Transaction wait
    "TransactionWaiter",
    "TransactionWaitRequest",
    "WaitState",
    "VM_STATUS_EXECUTED",
    "is_executed",

    # Errors
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

    # Wire types
    "Method",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "Account",
    "Transaction",
    "Event",
    "Metadata",
    "CurrencyInfo",
    "VMStatus",
    "Amount",
]
