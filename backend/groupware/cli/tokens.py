"""Flask CLI commands for refresh token housekeeping."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from groupware.core.logger import correlation_scope, current_correlation_id
from groupware.services.refresh_tokens.wiring import get_refresh_token_service

LOGGER = logging.getLogger(__name__)


@click.group("tokens")
@click.option("--verbose", is_flag=True, help="Enable verbose logging for token commands.")
@click.pass_context
def tokens_cli(ctx: click.Context, verbose: bool) -> None:
    """Refresh token maintenance commands."""
    # One correlation id per invocation, shared by every log line it emits
    ctx.with_resource(correlation_scope())
    level = logging.DEBUG if verbose else logging.INFO
    logging.getLogger("groupware.services.refresh_tokens").setLevel(level)
    LOGGER.setLevel(level)


@tokens_cli.command("purge-expired")
@with_appcontext
def purge_expired_command() -> None:
    """Delete every stored refresh token past its expiration date."""
    service = get_refresh_token_service()
    try:
        count = service.purge_expired()
    except Exception as exc:  # pragma: no cover - CLI safeguard
        raise click.ClickException(
            f"Purge failed (request_id={current_correlation_id()}): {exc}"
        ) from exc
    click.echo(f"Purged {count} expired refresh token(s).")


@tokens_cli.command("revoke")
@click.argument("identity")
@with_appcontext
def revoke_command(identity: str) -> None:
    """Delete the refresh token held by IDENTITY."""
    service = get_refresh_token_service()
    try:
        revoked = service.revoke(identity)
    except Exception as exc:
        raise click.ClickException(
            f"Revoke failed (request_id={current_correlation_id()}): {exc}"
        ) from exc
    if revoked:
        click.echo(f"Revoked refresh token for {identity}.")
    else:
        click.echo(f"No refresh token stored for {identity}.")
