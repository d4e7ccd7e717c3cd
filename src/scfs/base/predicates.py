"""
Row predicates for ``ScfsMatrix.get_features``.

Each predicate looks at a row's whole status list. They are evaluated
literally, so with Pending in the mix they are not complements of each
other: Pending counts as "not inactive" for all_active and any_active.
"""

from typing import TYPE_CHECKING, Callable, Dict

from .status import INACTIVE

if TYPE_CHECKING:
    from .matrix import ScfsRow

RowPredicate = Callable[["ScfsRow"], bool]


def all_rows(row: "ScfsRow") -> bool:
    """Accept every row."""
    return True


def all_active(row: "ScfsRow") -> bool:
    """True if no cluster reported the feature inactive."""
    return all(status != INACTIVE for status in row.status)


def any_active(row: "ScfsRow") -> bool:
    """True if at least one cluster reported anything other than inactive."""
    return any(status != INACTIVE for status in row.status)


def all_inactive(row: "ScfsRow") -> bool:
    """True if every cluster reported the feature inactive."""
    return all(status == INACTIVE for status in row.status)


def any_inactive(row: "ScfsRow") -> bool:
    """True if at least one cluster reported the feature inactive."""
    return INACTIVE in row.status


PREDICATES: Dict[str, RowPredicate] = {
    "all": all_rows,
    "all_active": all_active,
    "any_active": any_active,
    "all_inactive": all_inactive,
    "any_inactive": any_inactive,
}
