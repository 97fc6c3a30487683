"""Delete a credential."""

import typer

from roost.app_context import unlock_vault, use_context
from roost.vault import VaultError


def delete(ctx: typer.Context, name: str) -> None:
    """Delete a credential by its exact name."""
    app = use_context(ctx)
    unlock_vault(app)
    try:
        deleted = app.vault.delete(name)
    except VaultError as e:
        app.out.print_error_and_exit(e.code, str(e))
    if not deleted:
        app.out.print_error_and_exit("not_found", f"Credential '{name}' not found.")
    app.out.print_credential_deleted(name)
