"""Tests for JSON and console writers."""

import asyncio
import json
from io import StringIO

import pytest
from rich.console import Console

from scfs.base.criteria import ScfsCriteria
from scfs.base.matrix import ScfsMatrix
from scfs.base.status import INACTIVE, PENDING, ScfsStatus
from scfs.utils.output import ScfsConsoleOutput, ScfsJsonOutput, ScfsOutput

from .conftest import feature_account


@pytest.fixture
def populated(features, network) -> ScfsMatrix:
    network.accounts["devnet"] = {
        features[0]: feature_account(77),
        features[1]: feature_account(),
    }
    matrix = ScfsMatrix(
        ScfsCriteria(features=features, clusters=["local", "devnet"]),
        client_factory=network.factory
    )
    asyncio.run(matrix.run())
    return matrix


class TestJsonOutput:
    """JSON report contents."""

    def test_to_dict(self, populated, features):
        payload = ScfsJsonOutput(populated, "unused.json").to_dict()

        assert payload["clusters"] == ["local", "devnet"]
        assert [f["feature_id"] for f in payload["features"]] == features
        assert payload["features"][0]["status"] == [
            {"cluster": "local", "state": "active", "slot": 0},
            {"cluster": "devnet", "state": "active", "slot": 77},
        ]
        assert payload["features"][1]["status"][1] == {
            "cluster": "devnet", "state": "pending", "slot": None
        }

    def test_write_applies_predicate(self, populated, features, tmp_path):
        target = tmp_path / "status.json"
        ScfsJsonOutput(populated, str(target), ScfsMatrix.any_inactive).write()

        written = json.loads(target.read_text())
        assert [f["feature_id"] for f in written["features"]] == features[2:]
        for feature in written["features"]:
            assert feature["status"][1]["state"] == "inactive"

    def test_unpopulated_matrix(self, features, network, tmp_path):
        matrix = ScfsMatrix(ScfsCriteria(features=features), client_factory=network.factory)
        target = tmp_path / "empty.json"
        ScfsJsonOutput(matrix, str(target)).write()

        written = json.loads(target.read_text())
        assert all(f["status"] == [] for f in written["features"])


class TestConsoleOutput:
    """Rich table rendering."""

    def test_format_status(self):
        assert ScfsConsoleOutput.format_status(ScfsStatus.active(3)) == "[green]Active(3)[/green]"
        assert ScfsConsoleOutput.format_status(PENDING) == "[yellow]Pending[/yellow]"
        assert ScfsConsoleOutput.format_status(INACTIVE) == "[red]Inactive[/red]"

    def test_table_shape(self, populated):
        table = ScfsConsoleOutput(populated).build_table()

        assert table.title == "Solana Cluster Feature Status"
        assert [column.header for column in table.columns] == list(populated.get_headers())
        assert table.row_count == len(populated.get_result_rows())

    def test_table_filtered(self, populated):
        table = ScfsConsoleOutput(populated, ScfsMatrix.all_active).build_table()
        assert table.row_count == 2

    def test_short_rows_padded(self, features, network):
        matrix = ScfsMatrix(
            ScfsCriteria(features=features, clusters=["local", "devnet"]),
            client_factory=network.factory
        )
        table = ScfsConsoleOutput(matrix).build_table()
        assert table.row_count == len(features)
        assert list(table.columns[1].cells) == ["-"] * len(features)

    def test_write_renders_to_console(self, populated):
        buffer = StringIO()
        console = Console(file=buffer, width=400, color_system=None)
        ScfsConsoleOutput(populated, console=console).write()

        rendered = buffer.getvalue()
        assert "Solana Cluster Feature Status" in rendered
        assert "Active(77)" in rendered
        assert "Pending" in rendered


class TestOutputBase:
    """Writers must provide their own write()."""

    def test_base_cannot_be_instantiated(self, populated):
        with pytest.raises(TypeError):
            ScfsOutput(populated)

    def test_writer_without_write_rejected(self, populated):
        class Incomplete(ScfsOutput):
            pass

        with pytest.raises(TypeError):
            Incomplete(populated)

    def test_subclass_shares_selection(self, populated, features):
        class Collecting(ScfsOutput):
            def write(self):
                self.written = [row.key for row in self.selected_rows()]

        writer = Collecting(populated, ScfsMatrix.any_inactive)
        writer.write()
        assert writer.written == features[2:]
        assert writer.clusters == ["local", "devnet"]
