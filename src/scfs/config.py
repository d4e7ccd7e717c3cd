"""
Configuration for SCFS.

Two kinds of configuration live here:

- The canonical cluster table (name -> RPC URL). It is fixed at import time
  and is never overridden by user criteria.
- ``ScfsSettings``, the runtime knobs for RPC calls and logging, loaded from
  the environment (and an optional ``.env`` file).
"""

import os
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator


# Cluster aliases and misc string constants
SCFS_FEATURE_ID = "feature ID (pk)"
SCFS_LOCAL = "local"
SCFS_DEVNET = "devnet"
SCFS_TESTNET = "testnet"
SCFS_MAINNET = "mainnet"
SCFS_DESCRIPTION = "description"

# Name -> url lookup. Local is synthetic and never dialed.
SCFS_URL_LOOKUPS: Mapping[str, Optional[str]] = MappingProxyType({
    SCFS_LOCAL: None,
    SCFS_DEVNET: "https://api.devnet.solana.com",
    SCFS_TESTNET: "https://api.testnet.solana.com",
    SCFS_MAINNET: "https://api.mainnet-beta.solana.com",
})

SCFS_CLUSTER_LIST: Tuple[str, ...] = (SCFS_LOCAL, SCFS_DEVNET, SCFS_TESTNET, SCFS_MAINNET)

# Default output header: feature id, one column per cluster, description
SCFS_HEADER_LIST: Tuple[str, ...] = (SCFS_FEATURE_ID,) + SCFS_CLUSTER_LIST + (SCFS_DESCRIPTION,)

# getMultipleAccounts rejects more than 100 keys per request
MAX_MULTIPLE_ACCOUNTS = 100

COMMITMENT_LEVELS = ("processed", "confirmed", "finalized")


class ScfsSettings(BaseModel):
    """
    Runtime settings for cluster queries and logging.

    Built from ``SCFS_*`` environment variables by ``from_env``; every field
    has a default so an empty environment is valid.
    """

    commitment: str = Field(
        default="finalized",
        description="Commitment level used for getMultipleAccounts"
    )
    rpc_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Per-request timeout in seconds, None waits indefinitely"
    )
    log_level: str = Field(default="INFO", description="Loguru level for the stderr sink")
    log_file: Optional[str] = Field(default=None, description="Optional rotating log file path")

    model_config = ConfigDict(validate_assignment=True)

    @field_validator("commitment")
    @classmethod
    def validate_commitment(cls, v):
        """Commitment must be one the RPC understands."""
        if v not in COMMITMENT_LEVELS:
            raise ValueError(
                f"Invalid commitment '{v}', expected one of {', '.join(COMMITMENT_LEVELS)}"
            )
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper()

    @classmethod
    def from_env(cls) -> "ScfsSettings":
        """Load settings from the environment, reading ``.env`` first."""
        load_dotenv()

        timeout = os.getenv("SCFS_RPC_TIMEOUT")
        return cls(
            commitment=os.getenv("SCFS_COMMITMENT", "finalized"),
            rpc_timeout=float(timeout) if timeout else None,
            log_level=os.getenv("SCFS_LOG_LEVEL", "INFO"),
            log_file=os.getenv("SCFS_LOG_FILE") or None,
        )
