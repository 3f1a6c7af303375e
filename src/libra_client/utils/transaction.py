"""Transaction helpers."""

from __future__ import annotations
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from ..jsonrpc.types import Transaction


VM_STATUS_EXECUTED = "executed"


def is_executed(txn: Transaction) -> bool:
    """True when the transaction's VM status is "executed" (any case)."""
    return txn.vm_status is not None and txn.vm_status.type.lower() == VM_STATUS_EXECUTED


def address_hex(address: Union[str, bytes]) -> str:
    """Account address as a lowercase hex string."""
    if isinstance(address, (bytes, bytearray)):
        return bytes(address).hex()
    return address.lower()
