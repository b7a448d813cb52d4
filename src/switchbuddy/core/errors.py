# src/switchbuddy/core/errors.py

"""
Error taxonomy shared by stores, flows and the console surface.

Permission-style errors also subclass PermissionError so callers that only
know the builtin hierarchy still catch them.
"""

from __future__ import annotations


class SwitchBuddyError(Exception):
    """Base class for all application errors."""


class AuthenticationRequiredError(SwitchBuddyError, PermissionError):
    """A write was attempted without an acting identity."""

    def __init__(self, message: str = "Authentication required.") -> None:
        super().__init__(message)


class OwnershipError(SwitchBuddyError, PermissionError):
    """The acting identity does not own the record it tried to mutate."""

    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(f"Permission denied: {kind} {record_id} belongs to another user.")
        self.kind = kind
        self.record_id = record_id


class RecordNotFoundError(SwitchBuddyError, LookupError):
    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(f"{kind} not found: {record_id}")
        self.kind = kind
        self.record_id = record_id


class OracleError(SwitchBuddyError, RuntimeError):
    """The AI oracle failed or could not produce a result."""


class InsufficientFundsError(SwitchBuddyError, ValueError):
    def __init__(self, balance: float, cost: float) -> None:
        super().__init__(f"Insufficient funds: balance {balance:g}, cost {cost:g}.")
        self.balance = balance
        self.cost = cost
