# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Alert channel commands."""

from __future__ import annotations

import asyncio
from typing import Annotated

import typer

app = typer.Typer()


@app.command()
def channels() -> None:
    """Show the alert channels configured from the environment."""
    from logtriage.core.config import get_settings
    from logtriage.notifications.factory import build_router

    router = build_router(get_settings())
    status = router.get_channel_status()
    if not status:
        typer.echo("No alert channels configured.")
        return
    for entry in status:
        state = "configured" if entry["configured"] else "incomplete"
        typer.echo(f"{entry['name']}: {state} (min_critical={entry['min_critical']})")


@app.command()
def test(
    chat_id: Annotated[
        str | None, typer.Option("--chat-id", help="Override the admin chat id")
    ] = None,
) -> None:
    """Send a test message through the Telegram channel."""
    from logtriage.core.config import get_settings
    from logtriage.notifications.telegram import TelegramChannel

    settings = get_settings()
    channel = TelegramChannel(
        settings.telegram_bot_token,
        settings.telegram_admin_chat_id,
        api_base=settings.telegram_api_base,
    )
    if not asyncio.run(channel.test_connection(chat_id)):
        typer.echo("Telegram test message failed.", err=True)
        raise typer.Exit(1)
    typer.echo("Telegram test message sent.")


@app.command()
def summary(
    days: Annotated[int, typer.Option("--days", help="Window in days")] = 1,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Print the summary instead of sending it")
    ] = False,
) -> None:
    """Send the activity summary to the configured alert channels."""
    asyncio.run(_summary(days, dry_run))


async def _summary(days: int, dry_run: bool) -> None:
    from logtriage.core.config import get_settings
    from logtriage.notifications.events import AlertEvent
    from logtriage.notifications.factory import build_router
    from logtriage.notifications.telegram import build_message
    from logtriage.processing.summary import build_daily_summary
    from logtriage.storage.database import close_db, init_db

    settings = get_settings()
    db = await init_db(settings.db_path)
    try:
        event = AlertEvent.daily_summary(await build_daily_summary(db, days=days))
    finally:
        await close_db()

    if dry_run:
        typer.echo(build_message(event, app_url=settings.app_url))
        return

    router = build_router(settings)
    if not router.channels:
        typer.echo("No alert channels configured.", err=True)
        raise typer.Exit(1)
    results = await router.dispatch(event)
    for name, ok in results.items():
        typer.echo(f"{name}: {'sent' if ok else 'failed'}")
