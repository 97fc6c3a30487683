"""Structured output for CLI and JSON modes.

Routing: delivered results (a shown secret, confirmations, listings) go to stdout.
Everything else that talks to the user goes to stderr: prompts, the selection
table, validation messages, failures. That keeps a shown secret alone on stdout.
"""

# ruff: noqa: T201
# This module is the output layer; print() is its sole mechanism for producing CLI output.

import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn, TextIO

import typer

from roost.credential import Credential


class Output:
    """Handles all CLI output in JSON or human-readable format."""

    def __init__(self, *, json_mode: bool, stdout: TextIO | None = None, stderr: TextIO | None = None) -> None:
        """Initialize output handler.

        Args:
            json_mode: If True, output JSON envelopes; otherwise human-readable text.
            stdout: Sink for results. Defaults to ``sys.stdout`` at write time.
            stderr: Sink for prompts and errors. Defaults to ``sys.stderr`` at write time.

        """
        self._json_mode = json_mode
        self._stdout = stdout
        self._stderr = stderr

    @property
    def stdout(self) -> TextIO:
        """Sink for delivered results."""
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def stderr(self) -> TextIO:
        """Sink for prompts, tables, and failures."""
        return self._stderr if self._stderr is not None else sys.stderr

    def _success(self, data: dict[str, object], message: str) -> None:
        """Print a success result in JSON or human-readable format."""
        if self._json_mode:
            print(json.dumps({"ok": True, "data": data}), file=self.stdout)
        else:
            print(message, file=self.stdout)

    def _info(self, message: str) -> None:
        """Print an informational line to stderr."""
        print(message, file=self.stderr)

    def print_error_and_exit(self, code: str, message: str) -> NoReturn:
        """Print an error in JSON or human-readable format and exit with code 1.

        Raises:
            typer.Exit: Always, with code 1.

        """
        if self._json_mode:
            print(json.dumps({"ok": False, "error": code, "message": message}), file=self.stdout)
        else:
            print(f"Error: {message}", file=self.stderr)
        raise typer.Exit(code=1)

    # --- Setup ---

    def print_init_done(self, vault_path: Path) -> None:
        """Print vault creation confirmation."""
        self._success({"path": str(vault_path)}, f"Vault created at {vault_path}.")

    def print_uninstall(self, executable: str | None, vault_path: Path, *, vault_exists: bool) -> None:
        """Print instructions for removing roost from the system."""
        if self._json_mode:
            data = {"executable": executable, "vault_path": str(vault_path) if vault_exists else None}
            print(json.dumps({"ok": True, "data": data}), file=self.stdout)
            return
        print("To uninstall roost from your system, run:", file=self.stdout)
        print(file=self.stdout)
        print(f"    pip uninstall roost  # installed at {executable or 'unknown location'}", file=self.stdout)
        if vault_exists:
            print(file=self.stdout)
            print("If you want to remove your vault as well, it is located at:", file=self.stdout)
            print(file=self.stdout)
            print(f"    {vault_path}", file=self.stdout)

    # --- Credentials ---

    def print_credential_added(self, name: str) -> None:
        """Print credential add confirmation."""
        self._success({"name": name}, f"Credential '{name}' saved.")

    def print_credential_deleted(self, name: str) -> None:
        """Print credential deletion confirmation."""
        self._success({"name": name}, f"Credential '{name}' deleted.")

    def print_list(self, credentials: Sequence[Credential]) -> None:
        """Print names and usernames of stored credentials."""
        if self._json_mode:
            items = [{"name": c.name, "username": c.username} for c in credentials]
            print(json.dumps({"ok": True, "data": {"credentials": items}}), file=self.stdout)
            return
        width = max((len(c.name) for c in credentials), default=0)
        for c in credentials:
            print(f"{c.name:<{width}} {c.username}".rstrip(), file=self.stdout)

    # --- Resolution ---

    def print_not_found(self, query: str) -> None:
        """Report that nothing matched. Informational, not a failure."""
        if self._json_mode:
            print(json.dumps({"ok": True, "data": {"query": query, "found": False}}), file=self.stdout)
        else:
            self._info(f"I can't find any credentials for '{query}'.")

    def print_match_table(self, rows: Sequence[str]) -> None:
        """Print the numbered candidate table, framed by blank lines."""
        self._info("")
        for row in rows:
            self._info(row)
        self._info("")

    def print_selection_prompt(self, *, show: bool) -> None:
        """Ask which listed credential to deliver."""
        if show:
            self._info("Which password would you like to see?")
        else:
            self._info("Which password would you like me to copy to your clipboard?")

    def print_invalid_number(self, reason: str, count: int) -> None:
        """Report a selection that is not a number."""
        self._info(f"This isn't a valid number (reason: {reason}). Please give me a number between 1 and {count}:")

    def print_out_of_range(self, count: int) -> None:
        """Report a selection outside the listed indexes."""
        self._info(f"Sorry, I need a number between 1 and {count}. Let's try this again:")

    def print_read_error(self, reason: str) -> None:
        """Report a failed read of the selection."""
        self._info(f"I couldn't read that (reason: {reason}). Would you mind trying that again?")

    # --- Delivery ---

    def print_secret_shown(self, credential: Credential) -> None:
        """Print a credential's secret to stdout. The only output path for raw secrets."""
        value = credential.secret.get_secret_value()
        if self._json_mode:
            data = {"name": credential.name, "username": credential.username, "secret": value}
            print(json.dumps({"ok": True, "data": data}), file=self.stdout)
        else:
            print(f"Here is your password for {credential.name}: {value}", file=self.stdout)

    def print_secret_copied(self, name: str, paste_hint: str) -> None:
        """Print clipboard copy confirmation."""
        self._success(
            {"name": name, "paste_hint": paste_hint}, f"You can paste your {name} password anywhere with {paste_hint}."
        )

    def print_copy_failed(self, name: str, reason: str) -> None:
        """Report a clipboard failure and point at --show. Does not exit."""
        message = (
            f"I tried to copy your {name} password to your clipboard, but something went wrong (reason: {reason}). "
            f"You can see it with `roost get '{name}' --show`."
        )
        if self._json_mode:
            print(json.dumps({"ok": False, "error": "clipboard_failed", "message": message}), file=self.stdout)
        else:
            print(message, file=self.stderr)
