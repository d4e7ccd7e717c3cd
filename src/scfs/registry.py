"""
Canonical feature registry.

Maps every known feature gate id (base58 public key) to its human readable
description. The table ships as ``data/features.json`` and is loaded once at
import; it is the universe used when criteria do not name features.
"""

import json
from importlib import resources
from types import MappingProxyType
from typing import Mapping, Tuple

from loguru import logger

# Owner of every feature gate account
FEATURE_PROGRAM_ID = "Feature111111111111111111111111111111111111"


def load_feature_registry(resource: str = "features.json") -> Mapping[str, str]:
    """
    Load the packaged feature table.

    Args:
        resource: File name inside the ``scfs.data`` package

    Returns:
        Read-only mapping of feature id to description, in file order
    """
    source = resources.files("scfs.data").joinpath(resource)
    with source.open("r", encoding="utf-8") as handle:
        features = json.load(handle)

    logger.debug(f"Loaded {len(features)} features from {resource}")
    return MappingProxyType(dict(features))


FEATURE_REGISTRY: Mapping[str, str] = load_feature_registry()

# Feature public keys in registry order
SCFS_FEATURE_PKS: Tuple[str, ...] = tuple(FEATURE_REGISTRY)
