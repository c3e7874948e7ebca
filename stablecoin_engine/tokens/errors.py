"""Errors raised by the token collaborators themselves."""
from __future__ import annotations


class TokenError(Exception):
    """Base exception for token-side rejections."""


class NotZeroAddress(TokenError):
    """Raised when minting to the zero address."""


class AmountMustBeMoreThanZero(TokenError):
    """Raised when minting or burning a non-positive amount."""


class BurnAmountExceedsBalance(TokenError):
    """Raised when burning more than the caller holds."""


class NotOwner(TokenError):
    """Raised when an owner-gated call comes from anyone else."""
