"""Explain how to remove roost."""

import shutil

import typer

from roost.app_context import use_context


def uninstall(ctx: typer.Context) -> None:
    """Show how to uninstall roost and where the vault lives."""
    app = use_context(ctx)
    app.out.print_uninstall(shutil.which("roost"), app.vault.path, vault_exists=app.vault.exists)
