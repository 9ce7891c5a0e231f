# scripts/audit_movements.py

import asyncio
import typer

from arqap.core.database import AsyncSessionLocal, engine
from arqap.domains.mov.tasks import audit_active_movements

cli = typer.Typer()


async def run_audit(dry_run: bool) -> dict:
    """
    Runs the movement audit once. With `dry_run` the changes are rolled back.
    """
    async with AsyncSessionLocal() as db:
        try:
            summary = await audit_active_movements(db)
            if dry_run:
                await db.rollback()
            else:
                await db.commit()
        except Exception:
            await db.rollback()
            raise
    await engine.dispose()
    return summary


@cli.command()
def main(
    dry_run: bool = typer.Option(
        False, '--dry-run', '-n',
        help="Report what would be repaired without writing anything."
    ),
):
    """
    Closes duplicate active movements and realigns artefact locations with
    their movement history.
    """
    typer.echo("Running movement audit" + (" (dry run)" if dry_run else "") + "...")
    summary = asyncio.run(run_audit(dry_run))
    typer.echo(
        f"Closed {summary['closed']} stale active movement(s); "
        f"realigned {summary['realigned']} artefact location(s)."
    )


if __name__ == "__main__":
    cli()
