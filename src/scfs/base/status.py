"""
Feature status values and their derivation from on-chain accounts.

A feature gate account is owned by the feature program and holds a bincode
encoded ``Option<u64>``: a one byte tag (0 = None, 1 = Some) followed by the
little-endian activation slot. An account that is missing, owned by another
program or not decodable means the feature is inactive on that cluster.
"""

import base64
import binascii
import struct
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..registry import FEATURE_PROGRAM_ID

U64_MAX = 2**64 - 1


class StatusKind(str, Enum):
    """Activation state of a feature on one cluster."""
    INACTIVE = "inactive"
    PENDING = "pending"
    ACTIVE = "active"


@dataclass(frozen=True)
class ScfsStatus:
    """
    Cluster feature status indicator.

    Equality is by kind and, for active features, by activation slot.
    """

    kind: StatusKind
    slot: Optional[int] = None

    def __post_init__(self):
        if self.kind == StatusKind.ACTIVE:
            if self.slot is None or not 0 <= self.slot <= U64_MAX:
                raise ValueError(f"Active status requires a u64 slot, got {self.slot!r}")
        elif self.slot is not None:
            raise ValueError(f"{self.kind.value} status cannot carry a slot")

    @classmethod
    def inactive(cls) -> "ScfsStatus":
        return cls(StatusKind.INACTIVE)

    @classmethod
    def pending(cls) -> "ScfsStatus":
        return cls(StatusKind.PENDING)

    @classmethod
    def active(cls, slot: int) -> "ScfsStatus":
        return cls(StatusKind.ACTIVE, slot)

    @property
    def is_inactive(self) -> bool:
        return self.kind == StatusKind.INACTIVE

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"state": self.kind.value, "slot": self.slot}

    def __str__(self) -> str:
        if self.kind == StatusKind.ACTIVE:
            return f"Active({self.slot})"
        return self.kind.value.capitalize()


INACTIVE = ScfsStatus.inactive()
PENDING = ScfsStatus.pending()


@dataclass(frozen=True)
class AccountInfo:
    """Account payload as returned by ``getMultipleAccounts``."""

    lamports: int
    owner: str
    data: bytes
    executable: bool = False
    rent_epoch: Optional[int] = None

    @classmethod
    def from_rpc(cls, value: Dict[str, Any]) -> "AccountInfo":
        """
        Build from a JSON-RPC account object fetched with base64 encoding.

        Raises:
            ValueError: If the object is missing fields or the data is not base64
        """
        try:
            payload, encoding = value["data"]
            if encoding != "base64":
                raise ValueError(f"Unsupported account data encoding: {encoding}")
            return cls(
                lamports=int(value["lamports"]),
                owner=value["owner"],
                data=base64.b64decode(payload, validate=True),
                executable=bool(value.get("executable", False)),
                rent_epoch=value.get("rentEpoch"),
            )
        except (KeyError, TypeError, binascii.Error) as e:
            raise ValueError(f"Malformed account object: {e}") from e


@dataclass(frozen=True)
class FeatureAccount:
    """Decoded feature gate account."""

    activated_at: Optional[int]

    @classmethod
    def from_account(cls, account: AccountInfo) -> Optional["FeatureAccount"]:
        """Decode a feature account, or None when the layout is not recognized."""
        if account.owner != FEATURE_PROGRAM_ID or not account.data:
            return None

        tag = account.data[0]
        if tag == 0:
            return cls(activated_at=None)
        if tag == 1 and len(account.data) >= 9:
            (slot,) = struct.unpack_from("<Q", account.data, 1)
            return cls(activated_at=slot)
        return None


def status_from_account(account: Optional[AccountInfo]) -> ScfsStatus:
    """
    Classify one fetched account.

    Args:
        account: The fetched account, None when it does not exist on chain

    Returns:
        Inactive, Pending or Active(slot)
    """
    if account is None:
        return INACTIVE

    feature = FeatureAccount.from_account(account)
    if feature is None:
        return INACTIVE
    if feature.activated_at is None:
        return PENDING
    return ScfsStatus.active(feature.activated_at)
