"""Application context shared across CLI commands."""

from dataclasses import dataclass

import typer

from roost.config import Config
from roost.output import Output
from roost.vault import Vault, VaultError


@dataclass(frozen=True, slots=True)
class AppContext:
    """Shared application state passed through Typer context."""

    out: Output
    vault: Vault
    cfg: Config


def use_context(ctx: typer.Context) -> AppContext:
    """Extract application context from Typer context."""
    result: AppContext = ctx.obj
    return result


def unlock_vault(app: AppContext) -> None:
    """Prompt for the master password and unlock the vault, exiting on failure."""
    if not app.vault.exists:
        app.out.print_error_and_exit("not_initialized", "Vault is not initialized. Run 'roost init' first.")
    password: str = typer.prompt("Enter master password", hide_input=True, err=True)
    try:
        app.vault.unlock(password)
    except VaultError as e:
        app.out.print_error_and_exit(e.code, str(e))
