"""
Feature status matrix for Solana clusters.

An ``ScfsMatrix`` consists of rows, where each row has:

- the feature id (public key of the feature gate account), the same on every cluster
- one ``ScfsStatus`` per queried cluster, in criteria order
- the feature description from the registry

The matrix is built once from validated criteria with empty status lists and
populated by a single ``await matrix.run()``. Clusters are queried one after
the other; within a cluster the feature ids are fetched in chunks of at most
100 (the ``getMultipleAccounts`` limit).

A transport failure aborts ``run()``. Statuses from completed cluster passes
and from already processed chunks of the failing pass are kept, so rows end
up with unequal lengths or short of the requested clusters;
``is_consistent()`` reports either state.
"""

from typing import AsyncContextManager, Callable, List, Optional, Sequence, Tuple

from loguru import logger

from ..config import (
    MAX_MULTIPLE_ACCOUNTS,
    SCFS_DESCRIPTION,
    SCFS_FEATURE_ID,
    SCFS_LOCAL,
    SCFS_URL_LOOKUPS,
    ScfsSettings,
)
from ..errors import TransportError
from ..registry import FEATURE_REGISTRY
from ..utils.rpc import ClusterRpcClient
from .criteria import ScfsCriteria, validate_and_complete_criteria
from .predicates import (
    RowPredicate,
    all_active,
    all_inactive,
    all_rows,
    any_active,
    any_inactive,
)
from .status import AccountInfo, ScfsStatus, status_from_account

# (cluster name, url) -> client usable as ``async with``
ClientFactory = Callable[[str, str], AsyncContextManager[ClusterRpcClient]]


class ScfsRow:
    """One feature and its status on each processed cluster."""

    def __init__(self, feature_key: str, feature_description: str):
        self._feature_key = feature_key
        self._feature_description = feature_description
        self._feature_status: List[ScfsStatus] = []

    @property
    def key(self) -> str:
        return self._feature_key

    @property
    def status(self) -> Tuple[ScfsStatus, ...]:
        return tuple(self._feature_status)

    @property
    def desc(self) -> str:
        return self._feature_description

    def _push_feature_status(self, status: ScfsStatus) -> None:
        self._feature_status.append(status)

    def __repr__(self) -> str:
        statuses = ", ".join(str(s) for s in self._feature_status)
        return f"ScfsRow({self._feature_key}, [{statuses}], {self._feature_description!r})"


class ScfsMatrix:
    """
    Feature x cluster status grid.

    Not safe for concurrent ``run()`` calls; a matrix is meant to be run
    once by its owner and then read.
    """

    # Convenience aliases so callers can write ScfsMatrix.any_inactive
    all = staticmethod(all_rows)
    all_active = staticmethod(all_active)
    any_active = staticmethod(any_active)
    all_inactive = staticmethod(all_inactive)
    any_inactive = staticmethod(any_inactive)

    def __init__(
        self,
        criteria: Optional[ScfsCriteria] = None,
        settings: Optional[ScfsSettings] = None,
        client_factory: Optional[ClientFactory] = None
    ):
        """
        Create a matrix for the given criteria, or for everything if None.

        Args:
            criteria: Features and clusters to query
            settings: RPC settings used by the default client factory
            client_factory: Builds the per-cluster RPC client; defaults to
                ``ClusterRpcClient`` configured from ``settings``

        Raises:
            NoCriteriaFeaturesError: If criteria carry no feature list
            UnrecognizedCriteriaTypeError: If criteria name unknown features
                or clusters
        """
        self._criteria = validate_and_complete_criteria(criteria or ScfsCriteria.default())
        self._rows, self._query_set = self._build_rows(self._criteria)
        self.settings = settings or ScfsSettings()
        self._client_factory = client_factory or self._default_client_factory
        self._clusters_processed = 0
        self._clusters_requested = 0

        clusters = self._criteria.clusters or ()
        logger.info(
            f"Matrix created for {len(self._rows)} features across "
            f"{len(clusters)} clusters ({', '.join(clusters) or 'none'})"
        )

    @staticmethod
    def _build_rows(criteria: ScfsCriteria) -> Tuple[List[ScfsRow], Tuple[str, ...]]:
        """Prebuild empty rows and the ordered ids to query on each cluster."""
        query_set: List[str] = []
        rows: List[ScfsRow] = []
        for feature in criteria.features:
            query_set.append(feature)
            rows.append(ScfsRow(feature, FEATURE_REGISTRY[feature]))
        return rows, tuple(query_set)

    def _default_client_factory(self, cluster: str, url: str) -> ClusterRpcClient:
        return ClusterRpcClient(
            url,
            cluster=cluster,
            commitment=self.settings.commitment,
            timeout=self.settings.rpc_timeout,
        )

    # ---------- Population ----------

    def _push_to_row(self, row_index: int, status: ScfsStatus) -> None:
        self._rows[row_index]._push_feature_status(status)

    def _set_status_for_row(self, row_index: int, account: Optional[AccountInfo]) -> None:
        self._push_to_row(row_index, status_from_account(account))

    def _process_local(self, query_set: Sequence[str]) -> None:
        # Synthetic cluster: everything is active from genesis
        for index in range(len(query_set)):
            self._push_to_row(index, ScfsStatus.active(0))

    async def _process_remote(self, cluster: str, query_set: Sequence[str]) -> None:
        url = SCFS_URL_LOOKUPS[cluster]
        async with self._client_factory(cluster, url) as client:
            chunks_processed = 0
            for offset in range(0, len(query_set), MAX_MULTIPLE_ACCOUNTS):
                chunk = list(query_set[offset:offset + MAX_MULTIPLE_ACCOUNTS])
                logger.debug(
                    f"{cluster}: fetching chunk {chunks_processed + 1} ({len(chunk)} accounts)"
                )
                accounts = await client.get_multiple_accounts(chunk)
                if len(accounts) != len(chunk):
                    logger.error(
                        f"{cluster}: expected {len(chunk)} accounts, received {len(accounts)}"
                    )
                    raise TransportError(
                        f"Expected {len(chunk)} accounts, received {len(accounts)}",
                        cluster=cluster,
                        url=url,
                    )

                for position, account in enumerate(accounts):
                    row_index = chunks_processed * MAX_MULTIPLE_ACCOUNTS + position
                    self._set_status_for_row(row_index, account)
                chunks_processed += 1

    async def _process_clusters(
        self,
        query_set: Sequence[str],
        clusters: Optional[Sequence[str]]
    ) -> None:
        if not clusters:
            logger.info("No clusters in criteria, nothing to query")
            return

        for cluster in clusters:
            if cluster == SCFS_LOCAL:
                self._process_local(query_set)
            else:
                await self._process_remote(cluster, query_set)
            self._clusters_processed += 1
            logger.info(f"Cluster pass complete: {cluster}")

    async def run(self) -> None:
        """
        Query every cluster in criteria order and append one status per row.

        Raises:
            TransportError: If a batched lookup fails; the matrix is then
                left incomplete (see ``is_consistent``)
        """
        if self._clusters_processed:
            logger.warning(
                f"Matrix already holds {self._clusters_processed} cluster columns, "
                "running again appends more"
            )

        self._clusters_requested += len(self._criteria.clusters or ())
        await self._process_clusters(self._query_set, self._criteria.clusters)
        logger.success(
            f"Matrix run finished: {self._clusters_processed} cluster columns, "
            f"{len(self._rows)} features"
        )

    # ---------- Read access ----------

    def get_criteria(self) -> ScfsCriteria:
        """Retrieve criteria used in processing."""
        return self._criteria

    @property
    def criteria(self) -> ScfsCriteria:
        return self._criteria

    def get_query_set(self) -> Tuple[str, ...]:
        return self._query_set

    def get_result_rows(self) -> Tuple[ScfsRow, ...]:
        """Retrieve rows in criteria feature order."""
        return tuple(self._rows)

    @property
    def clusters_processed(self) -> int:
        """Number of cluster passes that completed."""
        return self._clusters_processed

    def is_consistent(self) -> bool:
        """
        True if every started run finished and every row holds exactly one
        status per completed pass.

        A run aborted on the first chunk of a pass leaves rows aligned but
        short of the requested clusters, which also counts as inconsistent.
        """
        if self._clusters_processed != self._clusters_requested:
            return False
        return all(len(row.status) == self._clusters_processed for row in self._rows)

    def get_headers(self) -> Tuple[str, ...]:
        """Output header: feature id, each queried cluster, description."""
        clusters = self._criteria.clusters or ()
        return (SCFS_FEATURE_ID,) + tuple(clusters) + (SCFS_DESCRIPTION,)

    def get_features(self, predicate: Optional[RowPredicate] = None) -> List[str]:
        """
        Retrieve feature ids whose rows satisfy a predicate.

        Args:
            predicate: Called with each row; defaults to accepting all rows

        Returns:
            Matching feature ids in row order
        """
        predicate = predicate or all_rows
        return [row.key for row in self._rows if predicate(row)]
