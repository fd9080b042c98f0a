"""Command-line entry point for the membership reconciliation pass.

Example:
    $ hwtube-reconcile check
    $ hwtube-reconcile repair
"""
import logging

import typer

from hwtube.config import settings
from hwtube.database import SessionLocal
from hwtube.services.reconcile_service import ReconcileReport, find_inconsistencies, repair

# Import all models so relationships resolve
from hwtube.models.user import User                            # noqa: F401
from hwtube.models.network import Network, NetworkMembership   # noqa: F401
from hwtube.models.invitation import NetworkInvitation         # noqa: F401
from hwtube.models.application import NetworkApplication       # noqa: F401
from hwtube.models.video import Video                          # noqa: F401

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="hwtube-reconcile",
    help="Detect and restore memberships lost between paired writes",
    add_completion=False,
)


def _print_report(report: ReconcileReport) -> None:
    if report.is_consistent:
        typer.echo("No missing memberships.")
        return
    typer.echo(f"{len(report.missing)} missing membership(s):")
    for gap in report.missing:
        typer.echo(f"  network={gap.network_id} user={gap.user_id} role={gap.role.value} ({gap.source} {gap.source_id})")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level")) -> None:
    logging.basicConfig(level="DEBUG" if verbose else settings.LOG_LEVEL)


@app.command("check")
def check() -> None:
    """Report missing memberships. Exits 1 when any are found."""
    with SessionLocal() as db:
        report = find_inconsistencies(db)
    _print_report(report)
    if not report.is_consistent:
        raise typer.Exit(1)


@app.command("repair")
def repair_command() -> None:
    """Insert every missing membership in one transaction."""
    with SessionLocal() as db:
        report = repair(db, find_inconsistencies(db))
    _print_report(report)
    typer.echo(f"Restored {report.repaired} membership(s).")


if __name__ == "__main__":
    app()
