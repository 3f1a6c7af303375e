"""
Test bootstrap:
- Make tests/helpers importable
- Provide clients wired to fake transports and fake clocks
"""
import sys
import pathlib
import pytest

TESTS_DIR = pathlib.Path(__file__).parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

from helpers import FakeClock, FakeTransport, TEST_CHAIN_ID  # noqa: E402

from libra_client.jsonrpc.client import LibraJsonRpcClient  # noqa: E402
from libra_client.recovery.retry import create_stale_response_retry_policy  # noqa: E402


@pytest.fixture
def fake_clock():
    """Fake monotonic clock whose sleep advances time."""
    return FakeClock()


@pytest.fixture
def make_client(fake_clock):
    """Factory building a client over a scripted FakeTransport."""

    def _make(*responses, max_attempts=5, delay=0.2):
        transport = FakeTransport(*responses)
        retry = create_stale_response_retry_policy(max_attempts, delay, sleep=fake_clock.sleep)
        client = LibraJsonRpcClient(
            "http://localhost:8080", TEST_CHAIN_ID, transport, retry,
            clock=fake_clock, sleep=fake_clock.sleep,
        )
        return client, transport

    return _make
