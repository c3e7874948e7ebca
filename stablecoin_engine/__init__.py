"""Over-collateralized stable token engine."""
from .config import EngineParams, load_config
from .deploy import Deployment, deploy
from .engine import CollateralEngine
from .errors import (
    BurnFailed,
    EngineError,
    InsufficientBalance,
    InvalidHealthFactor,
    LengthMismatch,
    MintFailed,
    ReentrantCall,
    TokenNotAllowed,
    TransferFailed,
    ZeroAmount,
)

__all__ = [
    "BurnFailed",
    "CollateralEngine",
    "Deployment",
    "EngineError",
    "EngineParams",
    "InsufficientBalance",
    "InvalidHealthFactor",
    "LengthMismatch",
    "MintFailed",
    "ReentrantCall",
    "TokenNotAllowed",
    "TransferFailed",
    "ZeroAmount",
    "deploy",
    "load_config",
]
