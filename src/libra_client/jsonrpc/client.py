"""
Libra JSON-RPC Client

Reads go through ``call`` and are retried on stale responses; writes go
through ``call_once`` and are never retried, so a submit whose first attempt
may already have been accepted is not sent twice.

Every successful response feeds its ledger metadata into the client's
LedgerState, which rejects responses from another chain and from replicas
lagging behind a version already observed.
"""

from __future__ import annotations
import json
import logging
import time
from typing import Any, Callable, List, Optional, Sequence, Union
from urllib.parse import urlparse

from pydantic import ValidationError

from ..config import ClientConfig
from ..ledger_state import LedgerState
from ..recovery.retry import RetryPolicy, create_stale_response_retry_policy
from ..runtime.errors import InvalidResponseError, JsonRpcError
from ..transport import RequestsTransport, Transport
from ..utils.transaction import address_hex
from ..waiter import DEFAULT_POLL_INTERVAL, TransactionWaiter, TransactionWaitRequest
from .decode import Decoder, list_of, object_of
from .types import (
    Account,
    CurrencyInfo,
    Event,
    JsonRpcRequest,
    JsonRpcResponse,
    Metadata,
    Method,
    Transaction,
)


logger = logging.getLogger(__name__)


class LibraJsonRpcClient:
    """
    Libra full node JSON-RPC client.

    Example:
        ```python
        client = LibraJsonRpcClient("https://testnet.libra.org/v1", ChainId.TESTNET)

        account = client.get_account("f72589b71ff4f8d139674a3f7369c69b")
        client.submit(signed_txn_hex)
        txn = client.wait_for_transaction(sender, sequence, txn_hash, expiration_secs, timeout=60)
        ```
    """

    def __init__(
        self,
        server_url: str,
        chain_id: Any,
        transport: Optional[Transport] = None,
        retry: Optional[RetryPolicy] = None,
        wait_poll_interval: float = DEFAULT_POLL_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Initialize the client.

        Args:
            server_url: JSON-RPC endpoint URL
            chain_id: Chain id every response must report
            transport: HTTP transport; defaults to RequestsTransport
            retry: Retry policy for read calls; defaults to retrying stale
                responses 5 times with a 0.2s delay
            wait_poll_interval: Seconds between polls in wait_for_transaction
            clock: Monotonic clock bounding wait_for_transaction
            sleep: Function used to wait between polls
        """
        parsed = urlparse(server_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"invalid server url: {server_url!r}")

        self._server_url = server_url
        self._transport = transport or RequestsTransport()
        self._state = LedgerState(chain_id)
        self.retry = retry or create_stale_response_retry_policy()
        self.wait_poll_interval = wait_poll_interval
        self._clock = clock
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: ClientConfig, transport: Optional[Transport] = None) -> LibraJsonRpcClient:
        """Build a client from a ClientConfig."""
        if config.debug:
            logger.setLevel(logging.DEBUG)
        if transport is None:
            transport = RequestsTransport(
                timeout=config.timeout,
                user_agent=config.user_agent,
                verify_ssl=config.verify_ssl,
            )
        retry = create_stale_response_retry_policy(config.retry_max_attempts, config.retry_delay)
        return cls(config.server_url, config.chain_id, transport, retry, config.wait_poll_interval)

    @property
    def server_url(self) -> str:
        return self._server_url

    @property
    def ledger_state(self) -> LedgerState:
        return self._state

    def close(self) -> None:
        """Close the transport if it supports closing."""
        close = getattr(self._transport, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> LibraJsonRpcClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # =========================================================================
    # Low-level RPC
    # =========================================================================

    def call(self, method: Union[Method, str], params: Sequence[Any] = (),
             decode: Optional[Decoder] = None) -> Any:
        """
        Make a read call, retried per the client's retry policy.

        Args:
            method: RPC method name
            params: Positional method parameters
            decode: Result decoder; the raw result is returned when omitted

        Returns:
            Decoded result
        """
        return self.retry.execute(self.call_once, method, params, decode)

    def call_once(self, method: Union[Method, str], params: Sequence[Any] = (),
                  decode: Optional[Decoder] = None) -> Any:
        """
        Make a single call attempt without retry.

        Raises:
            RemoteCallError: Transport failure
            InvalidResponseError: Non-200 status or malformed response
            JsonRpcError: Server returned an error object
            NetworkMismatchError: Response from another chain
            StaleResponseError: Response older than the known ledger version
        """
        method_name = method.value if isinstance(method, Method) else method
        request = JsonRpcRequest(method=method_name, params=list(params))
        payload = request.model_dump()
        logger.debug(f"Request: {method_name} -> {json.dumps(payload)}")

        http = self._transport.post(self._server_url, payload)
        if http.status_code != 200:
            raise InvalidResponseError(
                f"HTTP {http.status_code} from {method_name}",
                status_code=http.status_code,
                body=http.body,
            )

        response = self._parse_response(http.body, http.status_code)
        logger.debug(f"Response: {method_name} -> {http.body}")

        if response.error is not None:
            error = response.error
            raise JsonRpcError(error.message or "unknown error", error.code, error.data)

        if (response.libra_chain_id is None or response.libra_ledger_version is None
                or response.libra_ledger_timestampusec is None):
            raise InvalidResponseError(
                f"Response to {method_name} is missing ledger metadata",
                status_code=http.status_code,
                body=http.body,
            )

        self._state.update(
            response.libra_chain_id,
            response.libra_ledger_version,
            response.libra_ledger_timestampusec,
        )

        if decode is None:
            return response.result
        return decode(response.result)

    @staticmethod
    def _parse_response(body: str, status_code: int) -> JsonRpcResponse:
        try:
            return JsonRpcResponse.model_validate_json(body)
        except ValidationError as e:
            raise InvalidResponseError(
                f"Invalid JSON-RPC response: {e}",
                status_code=status_code,
                body=body,
                cause=e,
            )

    # =========================================================================
    # Queries
    # =========================================================================

    def get_transactions(self, from_version: int, limit: int, include_events: bool) -> List[Transaction]:
        """Transactions starting at ``from_version``, at most ``limit`` of them."""
        return self.call(Method.GET_TRANSACTIONS, [from_version, limit, include_events],
                         list_of(Transaction))

    def get_account(self, address: Union[str, bytes]) -> Optional[Account]:
        """Account state, or None if the account does not exist."""
        return self.call(Method.GET_ACCOUNT, [address_hex(address)], object_of(Account))

    def get_metadata(self, version: Optional[int] = None) -> Metadata:
        """Ledger metadata, latest or at a given version."""
        params = [] if version is None else [version]
        return self.call(Method.GET_METADATA, params, object_of(Metadata))

    def get_currencies(self) -> List[CurrencyInfo]:
        return self.call(Method.GET_CURRENCIES, [], list_of(CurrencyInfo))

    def get_account_transaction(self, address: Union[str, bytes], sequence: int,
                                include_events: bool) -> Optional[Transaction]:
        """The account's transaction at ``sequence``, or None if not on chain yet."""
        return self.call(Method.GET_ACCOUNT_TRANSACTION,
                         [address_hex(address), sequence, include_events],
                         object_of(Transaction))

    def get_account_transactions(self, address: Union[str, bytes], start: int, limit: int,
                                 include_events: bool) -> List[Transaction]:
        return self.call(Method.GET_ACCOUNT_TRANSACTIONS,
                         [address_hex(address), start, limit, include_events],
                         list_of(Transaction))

    def get_events(self, event_key: str, start: int, limit: int) -> List[Event]:
        return self.call(Method.GET_EVENTS, [event_key, start, limit], list_of(Event))

    # =========================================================================
    # Submission
    # =========================================================================

    def submit(self, data: Union[str, bytes]) -> None:
        """
        Submit a signed transaction.

        Never retried: a stale response to a submit is raised so the caller
        can decide whether re-sending is safe.

        Args:
            data: LCS serialized signed transaction, raw bytes or hex string
        """
        if isinstance(data, (bytes, bytearray)):
            data = bytes(data).hex()
        self.call_once(Method.SUBMIT, [data])

    def wait_for_transaction(self, address: Union[str, bytes], sequence: int, transaction_hash: str,
                             expiration_time_secs: int, timeout: float) -> Transaction:
        """
        Wait until the transaction at (address, sequence) is executed.

        Args:
            address: Sender account address
            sequence: Sender sequence number of the transaction
            transaction_hash: Expected transaction hash, compared ignoring case
            expiration_time_secs: Transaction expiration, ledger clock seconds
            timeout: Seconds to wait before giving up

        Returns:
            The executed transaction, with events
        """
        waiter = TransactionWaiter(
            lookup=lambda addr, seq: self.get_account_transaction(addr, seq, True),
            ledger_timestamp_usecs=lambda: self._state.timestamp_usecs,
            poll_interval=self.wait_poll_interval,
            clock=self._clock,
            sleep=self._sleep,
        )
        return waiter.wait(TransactionWaitRequest(
            address=address,
            sequence_number=sequence,
            expected_hash=transaction_hash,
            expiration_time_secs=expiration_time_secs,
            timeout=timeout,
        ))
