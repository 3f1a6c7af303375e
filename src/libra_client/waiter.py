"""
Transaction confirmation polling.

Polls an account's transaction slot (address, sequence number) until the
transaction shows up, or until the ledger clock passes its expiration, or
until the caller's wall-clock budget runs out.

Expiration is judged against the ledger time this client last observed, not
the local clock; the local clock only bounds how long the caller waits.
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple, Union

from .jsonrpc.types import Transaction
from .runtime.errors import (
    TransactionExecutionFailedError,
    TransactionExpiredError,
    TransactionHashMismatchError,
    TransactionWaitTimeoutError,
)
from .utils.transaction import is_executed


logger = logging.getLogger(__name__)


DEFAULT_POLL_INTERVAL = 0.2


class WaitState(Enum):
    """States of one wait; everything but POLLING is terminal."""
    POLLING = "polling"
    CONFIRMED = "confirmed"
    HASH_MISMATCH = "hash_mismatch"
    EXECUTION_FAILED = "execution_failed"
    EXPIRED = "expired"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class TransactionWaitRequest:
    """What to wait for, and for how long (seconds of wall-clock time)."""
    address: Union[str, bytes]
    sequence_number: int
    expected_hash: str
    expiration_time_secs: int
    timeout: float


class TransactionWaiter:
    """
    Polling state machine for transaction confirmation.

    Args:
        lookup: ``(address, sequence_number) -> Transaction | None``
        ledger_timestamp_usecs: Returns the last observed ledger time
        poll_interval: Seconds to sleep between polls
        clock: Monotonic wall clock in seconds
        sleep: Function used to wait between polls
    """

    def __init__(
        self,
        lookup: Callable[[Union[str, bytes], int], Optional[Transaction]],
        ledger_timestamp_usecs: Callable[[], int],
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep
    ):
        self._lookup = lookup
        self._ledger_timestamp_usecs = ledger_timestamp_usecs
        self.poll_interval = poll_interval
        self._clock = clock
        self._sleep = sleep
        self.last_state = WaitState.POLLING
        self.polls = 0

    def _classify(self, request: TransactionWaitRequest,
                  txn: Optional[Transaction]) -> Tuple[WaitState, Optional[int]]:
        """State for one poll, with the ledger time the expiry check read."""
        if txn is not None:
            if txn.hash.lower() != request.expected_hash.lower():
                return WaitState.HASH_MISMATCH, None
            if not is_executed(txn):
                return WaitState.EXECUTION_FAILED, None
            return WaitState.CONFIRMED, None

        ledger_usecs = self._ledger_timestamp_usecs()
        if request.expiration_time_secs * 1_000_000 <= ledger_usecs:
            return WaitState.EXPIRED, ledger_usecs
        return WaitState.POLLING, ledger_usecs

    def wait(self, request: TransactionWaitRequest) -> Transaction:
        """
        Block until the transaction is confirmed.

        Returns:
            The executed transaction

        Raises:
            TransactionHashMismatchError: Another transaction holds the slot
            TransactionExecutionFailedError: The transaction did not execute
            TransactionExpiredError: Ledger time passed the expiration
            TransactionWaitTimeoutError: The timeout elapsed first
        """
        self.last_state = WaitState.POLLING
        self.polls = 0
        deadline = self._clock() + request.timeout

        while self._clock() < deadline:
            txn = self._lookup(request.address, request.sequence_number)
            self.polls += 1
            state, ledger_usecs = self._classify(request, txn)
            self.last_state = state

            if state is WaitState.CONFIRMED:
                logger.info(f"Transaction {txn.hash} confirmed at version {txn.version} after {self.polls} polls")
                return txn
            if state is WaitState.HASH_MISMATCH:
                raise TransactionHashMismatchError(txn, request.expected_hash)
            if state is WaitState.EXECUTION_FAILED:
                raise TransactionExecutionFailedError(txn)
            if state is WaitState.EXPIRED:
                raise TransactionExpiredError(request.expiration_time_secs, ledger_usecs)

            logger.debug(
                f"Transaction {request.sequence_number} of {request.address!r} not found yet, "
                f"retrying in {self.poll_interval:.2f}s"
            )
            self._sleep(self.poll_interval)

        self.last_state = WaitState.TIMED_OUT
        raise TransactionWaitTimeoutError(request.timeout)
