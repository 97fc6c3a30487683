"""First-time setup: create master password."""

import typer

from roost.app_context import use_context
from roost.vault import VaultError


def init(ctx: typer.Context) -> None:
    """First-time setup: create master password."""
    app = use_context(ctx)
    if app.vault.exists:
        app.out.print_error_and_exit("already_initialized", f"Vault already exists at {app.vault.path}.")
    password: str = typer.prompt("Create master password", hide_input=True, confirmation_prompt=True, err=True)
    try:
        app.vault.init(password)
    except VaultError as e:
        app.out.print_error_and_exit(e.code, str(e))
    app.out.print_init_done(app.vault.path)
