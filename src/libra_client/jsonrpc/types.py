"""
Libra JSON-RPC wire types.

Request/response envelopes plus the domain views decoded from results.
Domain views keep unknown fields so newer server versions still decode.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class Method(str, Enum):
    """JSON-RPC methods served by a Libra full node."""
    GET_TRANSACTIONS = "get_transactions"
    GET_ACCOUNT = "get_account"
    GET_ACCOUNT_TRANSACTION = "get_account_transaction"
    GET_ACCOUNT_TRANSACTIONS = "get_account_transactions"
    GET_METADATA = "get_metadata"
    GET_CURRENCIES = "get_currencies"
    GET_EVENTS = "get_events"
    SUBMIT = "submit"


# =============================================================================
# Envelopes
# =============================================================================

class JsonRpcRequest(BaseModel):
    """Request envelope; id is always 0 and params are positional."""
    jsonrpc: str = "2.0"
    id: int = 0
    method: str
    params: List[Any] = Field(default_factory=list)

    model_config = {"frozen": True}


class JsonRpcErrorObject(BaseModel):
    """Error object returned in place of a result."""
    code: Optional[int] = None
    message: Optional[str] = None
    data: Any = None


class JsonRpcResponse(BaseModel):
    """
    Response envelope.

    A successful response carries the chain id, ledger version and ledger
    timestamp of the node that served it. Error responses may omit them.
    """
    jsonrpc: Optional[str] = None
    id: Any = None
    result: Any = None
    error: Optional[JsonRpcErrorObject] = None
    libra_chain_id: Optional[int] = None
    libra_ledger_version: Optional[int] = Field(default=None, ge=0)
    libra_ledger_timestampusec: Optional[int] = Field(default=None, ge=0)


# =============================================================================
# Domain views
# =============================================================================

class _View(BaseModel):
    model_config = {"extra": "allow", "populate_by_name": True}


class Amount(_View):
    amount: int
    currency: str


class Account(_View):
    address: str
    balances: List[Amount] = Field(default_factory=list)
    sequence_number: int
    authentication_key: Optional[str] = None
    sent_events_key: Optional[str] = None
    received_events_key: Optional[str] = None
    delegated_key_rotation_capability: bool = False
    delegated_withdrawal_capability: bool = False
    is_frozen: bool = False
    role: Optional[Dict[str, Any]] = None


class VMStatus(_View):
    type: str
    location: Optional[str] = None
    abort_code: Optional[int] = None
    explanation: Optional[Dict[str, Any]] = None


class Event(_View):
    key: str
    sequence_number: int
    transaction_version: int
    data: Dict[str, Any] = Field(default_factory=dict)


class Transaction(_View):
    version: int
    hash: str
    transaction: Dict[str, Any] = Field(default_factory=dict)
    bytes: Optional[str] = None
    events: List[Event] = Field(default_factory=list)
    vm_status: Optional[VMStatus] = None
    gas_used: Optional[int] = None


class Metadata(_View):
    version: int
    timestamp: int
    chain_id: int
    script_hash_allow_list: Optional[List[str]] = None
    module_publishing_allowed: Optional[bool] = None
    libra_version: Optional[int] = None


class CurrencyInfo(_View):
    code: str
    scaling_factor: int
    fractional_part: int
    to_lbr_exchange_rate: Optional[float] = None
    mint_events_key: Optional[str] = None
    burn_events_key: Optional[str] = None
    preburn_events_key: Optional[str] = None
    cancel_burn_events_key: Optional[str] = None
    exchange_rate_update_events_key: Optional[str] = None
