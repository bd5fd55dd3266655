"""Coedit API maintenance CLI.

Usage:
    coedit-api purge-sessions
    coedit-api version

Meant to be run by an external scheduler (cron, a Kubernetes CronJob).
Session expiry never depends on it; it only keeps the sessions table small.
"""

import asyncio

import typer

from coedit_api import __version__
from coedit_api.db import async_session_maker
from coedit_api.services.sessions import purge_expired_sessions

app = typer.Typer(
    name="coedit-api",
    help="Coedit API maintenance commands",
    no_args_is_help=True,
)


async def _purge_sessions() -> int:
    async with async_session_maker() as db:
        count = await purge_expired_sessions(db)
        await db.commit()
    return count


@app.command("purge-sessions")
def purge_sessions() -> None:
    """Delete sessions past their expiry."""
    count = asyncio.run(_purge_sessions())
    typer.echo(f"Purged {count} expired session(s)")


@app.command()
def version() -> None:
    """Show the Coedit API version."""
    typer.echo(f"coedit-api {__version__}")
