# app/domain/errors.py
"""
Error taxonomy for the billing core.

Both errors always stem from caller-supplied data, so the API surfaces
them as input-rejection messages rather than internal faults.
"""

from __future__ import annotations


class BillingError(Exception):
    """Base class for deterministic, input-caused billing failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(BillingError):
    """Malformed or out-of-range input (items, money, tax rate, amount)."""


class FormatError(BillingError):
    """Invoice number or period string does not match the expected shape."""
