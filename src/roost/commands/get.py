"""Find a credential and copy its password to the clipboard."""

import sys

import typer

from roost.app_context import unlock_vault, use_context
from roost.delivery import DeliveryChannel, DeliveryMode
from roost.resolver import NotFound, Resolved, Resolver, SelectionAbortedError


def get(
    ctx: typer.Context,
    query: str = typer.Argument(help="Name of the credential; fuzzy matches like 'ggl' for 'google' work too"),
    *,
    show: bool = typer.Option(False, "--show", "-s", help="Print the password instead of copying it to the clipboard"),
) -> None:
    """Copy a password to the clipboard (or --show to print it).

    If several credentials match the query, you will be asked to choose.
    """
    app = use_context(ctx)
    if not query.strip():
        app.out.print_error_and_exit("empty_query", "Query cannot be empty. For help, try: roost get --help")
    unlock_vault(app)
    try:
        resolver = Resolver(app.vault, app.out, sys.stdin, max_read_errors=app.cfg.max_read_errors)
        try:
            outcome = resolver.resolve(query, show=show)
        except SelectionAbortedError as e:
            app.out.print_error_and_exit("aborted", str(e))

        match outcome:
            case NotFound():
                app.out.print_not_found(query)
            case Resolved(credential=credential):
                mode = DeliveryMode.SHOW if show else DeliveryMode.CLIPBOARD
                DeliveryChannel(app.out).deliver(credential, mode)
    finally:
        # Decrypted credentials live only for the duration of one lookup
        app.vault.lock()
