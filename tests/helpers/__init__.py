from .mocks import (
    FakeTransport,
    FakeClock,
    rpc_body,
    txn_json,
    account_json,
    TEST_CHAIN_ID,
    SENDER,
    TXN_HASH,
)

__all__ = [
    "FakeTransport",
    "FakeClock",
    "rpc_body",
    "txn_json",
    "account_json",
    "TEST_CHAIN_ID",
    "SENDER",
    "TXN_HASH",
]
