"""SCFS: Solana cluster feature status."""

from .base.criteria import ScfsCriteria
from .base.matrix import ScfsMatrix, ScfsRow
from .base.status import ScfsStatus, StatusKind
from .config import SCFS_CLUSTER_LIST, SCFS_URL_LOOKUPS, ScfsSettings
from .errors import (
    NoCriteriaFeaturesError,
    ScfsError,
    TransportError,
    UnrecognizedCriteriaTypeError,
)
from .registry import FEATURE_REGISTRY, SCFS_FEATURE_PKS

__version__ = "0.1.0"
__all__ = [
    "ScfsCriteria",
    "ScfsMatrix",
    "ScfsRow",
    "ScfsStatus",
    "StatusKind",
    "SCFS_CLUSTER_LIST",
    "SCFS_URL_LOOKUPS",
    "ScfsSettings",
    "ScfsError",
    "NoCriteriaFeaturesError",
    "UnrecognizedCriteriaTypeError",
    "TransportError",
    "FEATURE_REGISTRY",
    "SCFS_FEATURE_PKS",
]
