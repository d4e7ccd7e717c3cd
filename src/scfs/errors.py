"""Exception types raised by the SCFS matrix engine."""

from typing import List, Optional


class ScfsError(Exception):
    """Base class for all SCFS errors."""


class NoCriteriaFeaturesError(ScfsError):
    """Raised when criteria are given without any feature list."""

    def __init__(self):
        super().__init__("Criteria must include a feature list")


class UnrecognizedCriteriaTypeError(ScfsError):
    """
    Raised when criteria reference unknown features or clusters.

    Every offending element is collected before this is raised, so
    ``elements`` holds all of them rather than just the first.
    """

    def __init__(self, elements: List[str], ctype: str):
        self.elements = list(elements)
        self.ctype = ctype
        super().__init__(
            f"Unrecognized {ctype} criteria: {', '.join(self.elements)}"
        )


class TransportError(ScfsError):
    """Raised when a batched account lookup against a cluster fails."""

    def __init__(self, message: str, cluster: Optional[str] = None, url: Optional[str] = None):
        self.cluster = cluster
        self.url = url
        prefix = f"[{cluster}] " if cluster else ""
        super().__init__(f"{prefix}{message}")
