from .transaction import VM_STATUS_EXECUTED, is_executed, address_hex

__all__ = ["VM_STATUS_EXECUTED", "is_executed", "address_hex"]
