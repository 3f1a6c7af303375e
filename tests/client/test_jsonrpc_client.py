"""
Tests for the JSON-RPC call path.

Request envelopes, response classification, ledger state updates and the
read/write retry split, all against a scripted transport.
"""

import pytest

from helpers import FakeTransport, SENDER, TEST_CHAIN_ID, account_json, rpc_body, txn_json

from libra_client.config import ClientConfig
from libra_client.jsonrpc.client import LibraJsonRpcClient
from libra_client.jsonrpc.types import Account, Metadata, Transaction
from libra_client.runtime.errors import (
    ErrorCode,
    InvalidResponseError,
    JsonRpcError,
    NetworkMismatchError,
    RemoteCallError,
    StaleResponseError,
)
from libra_client.transport import HttpResult, RequestsTransport


class TestClientInitialization:

    def test_rejects_malformed_url(self):
        with pytest.raises(ValueError):
            LibraJsonRpcClient("not a url", TEST_CHAIN_ID, FakeTransport())

    def test_default_transport(self):
        client = LibraJsonRpcClient("https://testnet.libra.org/v1", TEST_CHAIN_ID)
        assert isinstance(client._transport, RequestsTransport)
        client.close()

    def test_ledger_state_starts_with_expected_chain(self, make_client):
        client, _ = make_client(rpc_body())
        assert client.ledger_state.chain_id == TEST_CHAIN_ID
        assert client.ledger_state.version == 0

    def test_from_config(self):
        transport = FakeTransport(rpc_body())
        config = ClientConfig(server_url="http://node:8080", chain_id=4,
                              retry_max_attempts=3, retry_delay=0.5, wait_poll_interval=1.0)
        client = LibraJsonRpcClient.from_config(config, transport=transport)

        assert client.server_url == "http://node:8080"
        assert client.ledger_state.chain_id == 4
        assert client.retry.max_attempts == 3
        assert client.retry.delay == 0.5
        assert client.wait_poll_interval == 1.0

    def test_context_manager_closes_transport(self):
        transport = FakeTransport(rpc_body())
        with LibraJsonRpcClient("http://localhost:8080", TEST_CHAIN_ID, transport):
            pass
        assert transport.closed


class TestCallPath:

    def test_request_envelope(self, make_client):
        client, transport = make_client(rpc_body(result=None))
        client.call("get_account_transaction", [SENDER, 3, True])

        assert transport.urls == ["http://localhost:8080"]
        assert transport.requests[0] == {
            "jsonrpc": "2.0",
            "id": 0,
            "method": "get_account_transaction",
            "params": [SENDER, 3, True],
        }

    def test_success_updates_ledger_state(self, make_client):
        client, _ = make_client(rpc_body(result={"x": 1}, version=42, timestamp_usecs=4200))
        assert client.call("get_metadata") == {"x": 1}
        assert client.ledger_state.version == 42
        assert client.ledger_state.timestamp_usecs == 4200

    def test_decoder_applied(self, make_client):
        client, _ = make_client(rpc_body(result=account_json()))
        account = client.call("get_account", [SENDER], lambda r: Account.model_validate(r))
        assert isinstance(account, Account)

    def test_non_200_is_invalid_response(self, make_client):
        client, transport = make_client(HttpResult(502, "bad gateway"))

        with pytest.raises(InvalidResponseError) as exc_info:
            client.call("get_metadata")

        assert exc_info.value.status_code == 502
        assert exc_info.value.body == "bad gateway"
        assert transport.call_count == 1

    def test_malformed_body_is_invalid_response(self, make_client):
        client, _ = make_client("<html>oops</html>")
        with pytest.raises(InvalidResponseError) as exc_info:
            client.call("get_metadata")
        assert exc_info.value.code == ErrorCode.INVALID_RESPONSE

    def test_missing_ledger_fields_is_invalid_response(self, make_client):
        client, _ = make_client('{"id": 0, "result": null}')
        with pytest.raises(InvalidResponseError):
            client.call("get_metadata")

    def test_error_object_raises_without_state_update(self, make_client):
        client, transport = make_client(
            rpc_body(error={"code": -32602, "message": "Invalid params", "data": None}, version=99),
        )

        with pytest.raises(JsonRpcError) as exc_info:
            client.call("get_account", ["zz"])

        assert exc_info.value.message == "Invalid params"
        assert exc_info.value.rpc_code == -32602
        assert client.ledger_state.version == 0
        assert transport.call_count == 1

    def test_error_object_without_ledger_fields(self, make_client):
        client, transport = make_client(
            '{"id": 0, "jsonrpc": "2.0", "error": {"code": -32600, "message": "Invalid Request", "data": null}}'
        )

        with pytest.raises(JsonRpcError) as exc_info:
            client.call("get_metadata")

        assert exc_info.value.message == "Invalid Request"
        assert exc_info.value.rpc_code == -32600
        assert client.ledger_state.version == 0
        assert transport.call_count == 1

    def test_error_object_with_null_message(self, make_client):
        client, _ = make_client(rpc_body(error={"code": -32000, "message": None, "data": None}))

        with pytest.raises(JsonRpcError) as exc_info:
            client.call("get_metadata")

        assert exc_info.value.message == "unknown error"
        assert exc_info.value.rpc_code == -32000

    def test_partial_ledger_fields_is_invalid_response(self, make_client):
        client, _ = make_client(
            '{"id": 0, "result": null, "libra_chain_id": 2, "libra_ledger_version": 5}'
        )
        with pytest.raises(InvalidResponseError):
            client.call("get_metadata")
        assert client.ledger_state.version == 0

    def test_transport_failure_is_fatal(self, make_client):
        client, transport = make_client(RemoteCallError("connection refused"))
        with pytest.raises(RemoteCallError):
            client.call("get_metadata")
        assert transport.call_count == 1

    def test_network_mismatch_is_fatal(self, make_client):
        client, transport = make_client(rpc_body(chain_id=1))
        with pytest.raises(NetworkMismatchError):
            client.call("get_metadata")
        assert transport.call_count == 1
        assert client.ledger_state.version == 0


class TestStaleReads:

    def test_stale_read_retried_until_fresh(self, make_client, fake_clock):
        client, transport = make_client(
            rpc_body(version=10),
            rpc_body(version=8),
            rpc_body(version=9),
            rpc_body(result={"ok": True}, version=11),
        )
        client.call("get_metadata")

        assert client.call("get_metadata") == {"ok": True}
        assert transport.call_count == 4
        assert fake_clock.sleeps == [0.2, 0.2]
        assert client.ledger_state.version == 11

    def test_stale_read_surfaces_after_attempts(self, make_client):
        client, transport = make_client(rpc_body(version=10), rpc_body(version=3), max_attempts=5)
        client.call("get_metadata")

        with pytest.raises(StaleResponseError):
            client.call("get_metadata")

        assert transport.call_count == 1 + 5
        assert client.ledger_state.version == 10

    def test_submit_never_retried(self, make_client, fake_clock):
        client, transport = make_client(rpc_body(version=10), rpc_body(version=3))
        client.call("get_metadata")

        with pytest.raises(StaleResponseError):
            client.submit("deadbeef")

        assert transport.call_count == 2
        assert fake_clock.sleeps == []


class TestMethodCatalog:

    def test_get_account(self, make_client):
        client, transport = make_client(rpc_body(result=account_json()))
        account = client.get_account(bytes.fromhex(SENDER))

        assert account.address == SENDER
        assert transport.requests[0]["method"] == "get_account"
        assert transport.requests[0]["params"] == [SENDER]

    def test_get_account_missing(self, make_client):
        client, _ = make_client(rpc_body(result=None))
        assert client.get_account(SENDER) is None

    def test_get_transactions(self, make_client):
        client, transport = make_client(rpc_body(result=[txn_json(version=5), txn_json(version=6)]))
        txns = client.get_transactions(5, 2, False)

        assert [t.version for t in txns] == [5, 6]
        assert transport.requests[0]["params"] == [5, 2, False]

    def test_get_transactions_rejects_object(self, make_client):
        client, _ = make_client(rpc_body(result=txn_json()))
        with pytest.raises(InvalidResponseError):
            client.get_transactions(0, 1, False)

    def test_get_account_transaction(self, make_client):
        client, transport = make_client(rpc_body(result=txn_json()))
        txn = client.get_account_transaction(SENDER, 0, True)

        assert isinstance(txn, Transaction)
        assert transport.requests[0]["params"] == [SENDER, 0, True]

    def test_get_account_transactions(self, make_client):
        client, transport = make_client(rpc_body(result=[]))
        assert client.get_account_transactions(SENDER, 0, 10, True) == []
        assert transport.requests[0]["method"] == "get_account_transactions"
        assert transport.requests[0]["params"] == [SENDER, 0, 10, True]

    def test_get_metadata(self, make_client):
        client, transport = make_client(rpc_body(result={"version": 9, "timestamp": 90, "chain_id": 2}))
        metadata = client.get_metadata()
        assert isinstance(metadata, Metadata)
        assert transport.requests[0]["params"] == []

    def test_get_metadata_at_version(self, make_client):
        client, transport = make_client(rpc_body(result={"version": 3, "timestamp": 30, "chain_id": 2}))
        assert client.get_metadata(3).version == 3
        assert transport.requests[0]["params"] == [3]

    def test_get_currencies(self, make_client):
        client, transport = make_client(rpc_body(result=[
            {"code": "Coin1", "scaling_factor": 1000000, "fractional_part": 100},
        ]))
        assert client.get_currencies()[0].code == "Coin1"
        assert transport.requests[0]["method"] == "get_currencies"

    def test_get_events(self, make_client):
        key = "00" * 24
        client, transport = make_client(rpc_body(result=[
            {"key": key, "sequence_number": 0, "transaction_version": 7, "data": {"type": "mint"}},
        ]))
        events = client.get_events(key, 0, 10)
        assert events[0].transaction_version == 7
        assert transport.requests[0]["params"] == [key, 0, 10]

    def test_submit_hex(self, make_client):
        client, transport = make_client(rpc_body(result=None))
        assert client.submit("abcdef") is None
        assert transport.requests[0]["method"] == "submit"
        assert transport.requests[0]["params"] == ["abcdef"]

    def test_submit_bytes(self, make_client):
        client, transport = make_client(rpc_body(result=None))
        client.submit(b"\x01\x02\xff")
        assert transport.requests[0]["params"] == ["0102ff"]
