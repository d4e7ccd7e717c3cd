"""
Criteria for building a feature status matrix.

Criteria select which features to report on and which clusters to query.
Fields left out default to everything: the whole feature registry and all
four canonical clusters in their fixed order. A field explicitly set to
``None`` stays absent, which validation treats differently per field.
"""

from typing import Optional, Tuple

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from ..config import SCFS_CLUSTER_LIST, SCFS_URL_LOOKUPS
from ..errors import NoCriteriaFeaturesError, UnrecognizedCriteriaTypeError
from ..registry import FEATURE_REGISTRY, SCFS_FEATURE_PKS


class ScfsCriteria(BaseModel):
    """Criteria for processing feature set statusing."""

    features: Optional[Tuple[str, ...]] = Field(
        default_factory=lambda: SCFS_FEATURE_PKS,
        description="Feature ids to query status on, defaults to the full registry"
    )
    clusters: Optional[Tuple[str, ...]] = Field(
        default_factory=lambda: SCFS_CLUSTER_LIST,
        description="Clusters to query the features on, defaults to all"
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def default(cls) -> "ScfsCriteria":
        """All features across all clusters."""
        return cls()


def validate_and_complete_criteria(criteria: ScfsCriteria) -> ScfsCriteria:
    """
    Validate criteria against the canonical cluster table and feature registry.

    Clusters are checked first, then features. Within each category every
    unrecognized element is collected before raising.

    Args:
        criteria: Criteria as supplied by the caller

    Returns:
        A normalized copy, with repeated feature ids dropped

    Raises:
        NoCriteriaFeaturesError: If ``features`` is None
        UnrecognizedCriteriaTypeError: If any cluster or feature is unknown
    """
    if criteria.features is None:
        logger.error("Criteria rejected: no features given")
        raise NoCriteriaFeaturesError()

    # It's ok to not have clusters but they must be recognized names
    if criteria.clusters is not None:
        bad_clusters = [c for c in criteria.clusters if c not in SCFS_URL_LOOKUPS]
        if bad_clusters:
            logger.error(f"Criteria rejected: unrecognized clusters {bad_clusters}")
            raise UnrecognizedCriteriaTypeError(bad_clusters, "cluster")

    bad_features = [f for f in criteria.features if f not in FEATURE_REGISTRY]
    if bad_features:
        logger.error(f"Criteria rejected: {len(bad_features)} unrecognized features")
        raise UnrecognizedCriteriaTypeError(bad_features, "feature")

    features = tuple(dict.fromkeys(criteria.features))
    if len(features) != len(criteria.features):
        logger.debug(f"Dropped {len(criteria.features) - len(features)} repeated feature ids")

    return criteria.model_copy(update={"features": features})
