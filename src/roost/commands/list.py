"""List stored credentials."""

import typer

from roost.app_context import unlock_vault, use_context


def list_(ctx: typer.Context, filter_: str | None = typer.Argument(default=None, help="Filter names by substring")) -> None:
    """List credential names and usernames, optionally filter by substring."""
    app = use_context(ctx)
    unlock_vault(app)
    app.out.print_list(app.vault.list_credentials(filter_))
