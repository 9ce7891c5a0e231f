# scripts/init_db.py

import asyncio
import typer

from arqap.core.database import create_db_and_tables, engine

cli = typer.Typer()


async def run_init() -> None:
    try:
        await create_db_and_tables()
    finally:
        await engine.dispose()


@cli.command()
def main():
    """
    Creates the tables of every domain in the configured database.
    Development only: existing tables are left as they are.
    """
    typer.echo("Creating database tables...")
    asyncio.run(run_init())
    typer.echo("Done.")


if __name__ == "__main__":
    cli()
