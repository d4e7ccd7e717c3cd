"""Core matrix engine for SCFS."""

from .criteria import ScfsCriteria, validate_and_complete_criteria
from .status import AccountInfo, FeatureAccount, ScfsStatus, StatusKind, status_from_account
from .predicates import PREDICATES, all_active, all_inactive, all_rows, any_active, any_inactive
from .matrix import ScfsMatrix, ScfsRow

__all__ = [
    "ScfsCriteria",
    "validate_and_complete_criteria",
    "AccountInfo",
    "FeatureAccount",
    "ScfsStatus",
    "StatusKind",
    "status_from_account",
    "PREDICATES",
    "all_active",
    "all_inactive",
    "all_rows",
    "any_active",
    "any_inactive",
    "ScfsMatrix",
    "ScfsRow",
]
