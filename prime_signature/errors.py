"""
Error types for signature extraction.

Lookup misses and duplicate stores are not errors; they come back as
None or a non-stored StoreResult.
"""

from typing import Any, Dict, Optional


class SignatureError(Exception):
    """
    Base exception for all prime-signature errors.

    Carries a structured ``details`` dict alongside the message.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize signature error.

        Args:
            message: Error message
            details: Optional detailed error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidInputError(SignatureError, ValueError):
    """
    Raised when a query or payload is malformed.

    Covers empty prime sets (after non-primes are dropped), an ``ell``
    below 2, invalid configuration values and serialized entries with no
    ``primes`` field.
    """


class FingerprintMismatchError(SignatureError, ValueError):
    """Raised when two fingerprints of different length are compared."""

    def __init__(self, left: int, right: int):
        super().__init__(
            f"Fingerprint length mismatch: {left} vs {right}",
            {'left_length': left, 'right_length': right}
        )
        self.left_length = left
        self.right_length = right


class ResourceLimitError(SignatureError):
    """
    Raised when a prime set is too large to process.

    The degree-0 Fitting ideal enumerates all 2^r subsets, so the number
    of distinct primes r is capped.
    """

    def __init__(self, count: int, limit: int):
        super().__init__(
            f"Prime set has {count} distinct primes, limit is {limit}",
            {'count': count, 'limit': limit}
        )
        self.count = count
        self.limit = limit
