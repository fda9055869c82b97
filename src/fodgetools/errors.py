"""
Exception types raised by fodgetools.

Malformed requests (bad leg counts, orders, split filters) raise
InvalidRequestError, which is also a ValueError. A broken internal invariant
raises InvariantError; it is never expected for valid input.
"""

from __future__ import annotations


class FodgeError(Exception):
    pass


class InvalidRequestError(FodgeError, ValueError):
    pass


class InvariantError(FodgeError, RuntimeError):
    pass


class ComputationLimitError(FodgeError, RuntimeError):
    pass
