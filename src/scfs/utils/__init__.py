"""Utility modules for SCFS."""

from .rpc import ClusterRpcClient
from .output import ScfsConsoleOutput, ScfsJsonOutput
from .logs import setup_logging

__all__ = ["ClusterRpcClient", "ScfsConsoleOutput", "ScfsJsonOutput", "setup_logging"]
