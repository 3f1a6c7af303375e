"""
Error recovery components for the Libra client.

Provides the bounded retry policy applied to read calls.
"""

from .retry import (
    RetryPolicy,
    AttemptStatus,
    AttemptResult,
    retry_on_code,
    create_stale_response_retry_policy,
)

__all__ = [
    "RetryPolicy",
    "AttemptStatus",
    "AttemptResult",
    "retry_on_code",
    "create_stale_response_retry_policy",
]
