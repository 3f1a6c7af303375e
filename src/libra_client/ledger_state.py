"""
Ledger state tracking for a client session.

Holds the last observed (chain id, ledger version, ledger timestamp) and
rejects responses from the wrong network or from a replica that lags behind
a version this session has already seen.
"""

from __future__ import annotations
import logging
import threading
from dataclasses import dataclass
from typing import Any

from .runtime.errors import NetworkMismatchError, StaleResponseError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerInfo:
    """Immutable view of the ledger metadata carried by a response."""
    chain_id: Any
    version: int
    timestamp_usecs: int


class LedgerState:
    """
    Most recently observed ledger metadata for one client.

    All reads and writes go through a lock so concurrent calls on the same
    client cannot interleave a check with an update.
    """

    def __init__(self, chain_id: Any):
        """
        Initialize ledger state.

        Args:
            chain_id: Chain id the client expects every response to carry
        """
        self._lock = threading.Lock()
        self._chain_id = chain_id
        self._version = 0
        self._timestamp_usecs = 0

    @property
    def chain_id(self) -> Any:
        with self._lock:
            return self._chain_id

    @property
    def version(self) -> int:
        with self._lock:
            return self._version

    @property
    def timestamp_usecs(self) -> int:
        with self._lock:
            return self._timestamp_usecs

    def snapshot(self) -> LedgerInfo:
        """Return the stored triple as one consistent value."""
        with self._lock:
            return LedgerInfo(self._chain_id, self._version, self._timestamp_usecs)

    def update(self, chain_id: Any, version: int, timestamp_usecs: int) -> LedgerInfo:
        """
        Validate and store metadata from a server response.

        Args:
            chain_id: Chain id reported by the server
            version: Ledger version reported by the server
            timestamp_usecs: Ledger timestamp in microseconds

        Returns:
            The newly stored ledger info

        Raises:
            NetworkMismatchError: If the chain id differs from the expected one
            StaleResponseError: If the version is older than the stored version
        """
        with self._lock:
            if self._chain_id is not None and chain_id != self._chain_id:
                raise NetworkMismatchError(self._chain_id, chain_id)

            if version < self._version:
                logger.warning(
                    f"Stale response: version {version} < known version {self._version}"
                )
                raise StaleResponseError(
                    version, timestamp_usecs, self._version, self._timestamp_usecs
                )

            self._chain_id = chain_id
            self._version = version
            self._timestamp_usecs = timestamp_usecs
            logger.debug(f"Ledger state updated: version={version} timestamp_usecs={timestamp_usecs}")
            return LedgerInfo(chain_id, version, timestamp_usecs)
