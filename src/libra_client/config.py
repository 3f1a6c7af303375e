"""
Client configuration.

A plain dataclass, optionally filled from the environment:

    LIBRA_SERVER_URL   endpoint URL or well-known name ("testnet")
    LIBRA_CHAIN_ID     expected chain id (number or ChainId name)
    LIBRA_TIMEOUT      HTTP timeout in seconds
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from enum import IntEnum
from typing import Mapping, Optional, Union


class ChainId(IntEnum):
    """Well-known Libra chain ids."""
    MAINNET = 1
    TESTNET = 2
    DEVNET = 3
    TESTING = 4


ENDPOINTS = {
    "testnet": "https://testnet.libra.org/v1",
    "local": "http://127.0.0.1:8080",
}


def resolve_endpoint(server_url: str) -> str:
    """Map a well-known endpoint name to its URL; URLs pass through."""
    return ENDPOINTS.get(server_url.lower(), server_url)


def parse_chain_id(value: Union[int, str]) -> int:
    if isinstance(value, int):
        return value
    value = value.strip()
    if value.isdigit():
        return int(value)
    try:
        return ChainId[value.upper()]
    except KeyError:
        raise ValueError(f"unknown chain id: {value!r}")


@dataclass
class ClientConfig:
    """Configuration for the Libra JSON-RPC client."""

    server_url: str
    chain_id: int = ChainId.TESTNET
    timeout: float = 30.0
    retry_max_attempts: int = 5
    retry_delay: float = 0.2
    wait_poll_interval: float = 0.2
    verify_ssl: bool = True
    debug: bool = False
    user_agent: str = "libra-client-python/1.0.0"

    def __post_init__(self):
        self.server_url = resolve_endpoint(self.server_url)
        self.chain_id = parse_chain_id(self.chain_id)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> ClientConfig:
        """Build a config from LIBRA_* environment variables."""
        env = os.environ if environ is None else environ
        kwargs = {"server_url": env.get("LIBRA_SERVER_URL", "testnet")}
        if "LIBRA_CHAIN_ID" in env:
            kwargs["chain_id"] = env["LIBRA_CHAIN_ID"]
        if "LIBRA_TIMEOUT" in env:
            kwargs["timeout"] = float(env["LIBRA_TIMEOUT"])
        kwargs.update(overrides)
        return cls(**kwargs)
