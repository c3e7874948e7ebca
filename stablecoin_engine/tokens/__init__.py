"""In-memory token collaborators and the engine's stable-token delegate."""
from .controller import StableTokenController
from .erc20 import ZERO_ADDRESS, ERC20Token
from .errors import (
    AmountMustBeMoreThanZero,
    BurnAmountExceedsBalance,
    NotOwner,
    NotZeroAddress,
    TokenError,
)
from .stable_token import StableToken

__all__ = [
    "ZERO_ADDRESS",
    "AmountMustBeMoreThanZero",
    "BurnAmountExceedsBalance",
    "ERC20Token",
    "NotOwner",
    "NotZeroAddress",
    "StableToken",
    "StableTokenController",
    "TokenError",
]
