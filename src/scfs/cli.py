"""
Command line entry point for SCFS.

Usage:
    scfs                          # all features, all clusters, rich table
    scfs -c devnet -c mainnet --filter any_inactive
    scfs -f <feature id> -o json --filename status.json

Environment Variables:
    SCFS_COMMITMENT: Commitment level for account lookups (default: finalized)
    SCFS_RPC_TIMEOUT: Request timeout in seconds (default: none)
    SCFS_LOG_LEVEL: Log level (default: INFO)
    SCFS_LOG_FILE: Optional rotating log file
"""

import asyncio
import sys

import click
from loguru import logger
from rich.console import Console
from rich.markup import escape

from .base.criteria import ScfsCriteria
from .base.matrix import ScfsMatrix
from .base.predicates import PREDICATES
from .config import SCFS_CLUSTER_LIST, ScfsSettings
from .errors import ScfsError
from .registry import SCFS_FEATURE_PKS
from .utils.logs import setup_logging
from .utils.output import ScfsConsoleOutput, ScfsJsonOutput

console = Console()


@click.command()
@click.option(
    "-c", "--cluster", "clusters",
    multiple=True,
    type=click.Choice(SCFS_CLUSTER_LIST),
    help="Cluster to query (repeatable, default: all)"
)
@click.option(
    "-f", "--feature", "features",
    multiple=True,
    help="Feature id to query (repeatable, default: all)"
)
@click.option(
    "--filter", "filter_name",
    type=click.Choice(list(PREDICATES)),
    default="all",
    show_default=True,
    help="Only report features matching this predicate"
)
@click.option(
    "-o", "--output",
    type=click.Choice(["stdout", "json"]),
    default="stdout",
    show_default=True,
)
@click.option("--filename", default="scfs.json", show_default=True, help="JSON output path")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def cli(clusters, features, filter_name, output, filename, debug):
    """Report Solana feature activation status across clusters."""
    settings = ScfsSettings.from_env()
    setup_logging("DEBUG" if debug else settings.log_level, settings.log_file)

    criteria = ScfsCriteria(
        features=features or SCFS_FEATURE_PKS,
        clusters=clusters or SCFS_CLUSTER_LIST,
    )
    predicate = PREDICATES[filter_name]

    try:
        matrix = ScfsMatrix(criteria, settings=settings)
        asyncio.run(matrix.run())
    except ScfsError as e:
        logger.error(f"scfs failed: {e}")
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        sys.exit(1)

    if output == "json":
        ScfsJsonOutput(matrix, filename, predicate).write()
        console.print(f"✅ Wrote feature status to {filename}")
    else:
        ScfsConsoleOutput(matrix, predicate, console=console).write()


if __name__ == "__main__":
    cli()
