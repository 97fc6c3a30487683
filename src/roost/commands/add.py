"""Add a credential."""

import typer

from roost.app_context import unlock_vault, use_context
from roost.vault import VaultError


def add(ctx: typer.Context, name: str, username: str = typer.Argument(default="", help="Account username")) -> None:
    """Add or replace a credential (password entered interactively)."""
    app = use_context(ctx)
    # Master password first, then the new secret
    unlock_vault(app)
    secret: str = typer.prompt(f"Password for {name}", hide_input=True, confirmation_prompt=True, err=True)
    try:
        app.vault.add(name, username, secret)
    except VaultError as e:
        app.out.print_error_and_exit(e.code, str(e))
    app.out.print_credential_added(name)
