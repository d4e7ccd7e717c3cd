"""
Shared fixtures for the SCFS test suite.

No test talks to a real cluster: the matrix gets a fake client factory and
the RPC client gets an httpx.MockTransport.
"""

import base64
import struct
from typing import Dict, List, Optional, Tuple

import pytest

from scfs.base import criteria as criteria_module
from scfs.base import matrix as matrix_module
from scfs.base.status import AccountInfo
from scfs.errors import TransportError
from scfs.registry import FEATURE_PROGRAM_ID, SCFS_FEATURE_PKS

OTHER_OWNER = "11111111111111111111111111111111"


def feature_account(slot: Optional[int] = None, owner: str = FEATURE_PROGRAM_ID) -> AccountInfo:
    """Feature gate account, pending when slot is None."""
    data = b"\x00" if slot is None else b"\x01" + struct.pack("<Q", slot)
    return AccountInfo(lamports=1_000_000, owner=owner, data=data)


def rpc_account(account: AccountInfo) -> Dict:
    """The JSON-RPC shape of an account fetched with base64 encoding."""
    return {
        "data": [base64.b64encode(account.data).decode(), "base64"],
        "executable": account.executable,
        "lamports": account.lamports,
        "owner": account.owner,
        "rentEpoch": 0,
        "space": len(account.data),
    }


class FakeClusterClient:
    """Stands in for ClusterRpcClient during matrix runs."""

    def __init__(self, network: "FakeNetwork", cluster: str, url: str):
        self.network = network
        self.cluster = cluster
        self.url = url
        self.closed = False

    async def __aenter__(self) -> "FakeClusterClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.closed = True

    async def get_multiple_accounts(self, pubkeys: List[str]) -> List[Optional[AccountInfo]]:
        self.network.calls.append((self.cluster, list(pubkeys)))
        if self.network.fail_on_call == len(self.network.calls):
            raise TransportError("connection reset", cluster=self.cluster, url=self.url)
        cluster_accounts = self.network.accounts.get(self.cluster, {})
        accounts = [cluster_accounts.get(pk) for pk in pubkeys]
        if self.network.short_response:
            accounts = accounts[:-1]
        return accounts


class FakeNetwork:
    """Records every batched call and serves accounts per cluster."""

    def __init__(self):
        self.accounts: Dict[str, Dict[str, AccountInfo]] = {}
        self.calls: List[Tuple[str, List[str]]] = []
        self.clients: List[FakeClusterClient] = []
        self.fail_on_call: Optional[int] = None
        self.short_response = False

    def factory(self, cluster: str, url: str) -> FakeClusterClient:
        client = FakeClusterClient(self, cluster, url)
        self.clients.append(client)
        return client

    def chunk_sizes(self, cluster: Optional[str] = None) -> List[int]:
        return [len(ids) for name, ids in self.calls if cluster is None or name == cluster]


@pytest.fixture
def network() -> FakeNetwork:
    return FakeNetwork()


@pytest.fixture
def features() -> List[str]:
    """First five registry features."""
    return list(SCFS_FEATURE_PKS[:5])


@pytest.fixture
def large_registry(monkeypatch) -> List[str]:
    """Swap in a synthetic 250-feature registry."""
    registry = {f"Feat{index:039d}": f"synthetic feature {index}" for index in range(250)}
    monkeypatch.setattr(criteria_module, "FEATURE_REGISTRY", registry)
    monkeypatch.setattr(matrix_module, "FEATURE_REGISTRY", registry)
    return list(registry)
