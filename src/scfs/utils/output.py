"""Output writers for a populated ScfsMatrix."""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..base.predicates import RowPredicate, all_rows
from ..base.status import ScfsStatus, StatusKind

if TYPE_CHECKING:
    from ..base.matrix import ScfsMatrix, ScfsRow

STATUS_STYLES = {
    StatusKind.ACTIVE: "green",
    StatusKind.PENDING: "yellow",
    StatusKind.INACTIVE: "red",
}


class ScfsOutput(ABC):
    """Common selection logic for writers."""

    def __init__(self, matrix: "ScfsMatrix", predicate: Optional[RowPredicate] = None):
        self.matrix = matrix
        self.predicate = predicate or all_rows

    @property
    def clusters(self) -> List[str]:
        return list(self.matrix.get_criteria().clusters or ())

    def selected_rows(self) -> List["ScfsRow"]:
        return [row for row in self.matrix.get_result_rows() if self.predicate(row)]

    @abstractmethod
    def write(self) -> None:
        """Emit the selected rows."""
        pass


class ScfsJsonOutput(ScfsOutput):
    """Writes selected rows to a JSON file."""

    def __init__(
        self,
        matrix: "ScfsMatrix",
        filename: str,
        predicate: Optional[RowPredicate] = None
    ):
        super().__init__(matrix, predicate)
        self.filename = Path(filename)

    def to_dict(self) -> Dict[str, Any]:
        clusters = self.clusters
        features = []
        for row in self.selected_rows():
            features.append({
                "feature_id": row.key,
                "description": row.desc,
                "status": [
                    {"cluster": cluster, **status.to_dict()}
                    for cluster, status in zip(clusters, row.status)
                ],
            })
        return {"clusters": clusters, "features": features}

    def write(self) -> None:
        payload = self.to_dict()
        with self.filename.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2)
        logger.info(f"Wrote {len(payload['features'])} features to {self.filename}")


class ScfsConsoleOutput(ScfsOutput):
    """Renders selected rows as a rich table."""

    def __init__(
        self,
        matrix: "ScfsMatrix",
        predicate: Optional[RowPredicate] = None,
        console: Optional[Console] = None
    ):
        super().__init__(matrix, predicate)
        self.console = console or Console()

    @staticmethod
    def format_status(status: ScfsStatus) -> str:
        return f"[{STATUS_STYLES[status.kind]}]{status}[/{STATUS_STYLES[status.kind]}]"

    def build_table(self) -> Table:
        table = Table(title="Solana Cluster Feature Status")
        headers = self.matrix.get_headers()
        for header in headers:
            table.add_column(header, overflow="fold")

        cluster_count = len(headers) - 2
        for row in self.selected_rows():
            cells = [self.format_status(status) for status in row.status]
            # Incomplete runs leave some rows short
            cells += ["-"] * (cluster_count - len(cells))
            table.add_row(row.key, *cells, escape(row.desc))
        return table

    def write(self) -> None:
        self.console.print(self.build_table())
