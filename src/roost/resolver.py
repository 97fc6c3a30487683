"""Turn a free-text query into exactly one credential.

A query can match nothing, match one entry by exact name, or match several
entries fuzzily. In the last case the user picks one from a numbered table.
"""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, TextIO

from roost.credential import Credential
from roost.output import Output

logger = logging.getLogger(__name__)

# Optional sign and ASCII digits only; int() alone would also take "1_0" and non-ASCII digits
_INDEX_PATTERN = re.compile(r"[+-]?[0-9]+")


class CredentialStore(Protocol):
    """Lookup contract the resolver needs from a credential store."""

    def search(self, query: str) -> Sequence[Credential]:
        """Return credentials matching query, best first. Must not modify the store."""
        ...

    def get(self, name: str) -> Credential | None:
        """Return the credential with this exact name, or None if it does not exist."""
        ...


class SelectionAbortedError(Exception):
    """The user's input ended or failed before a credential was chosen."""


@dataclass(frozen=True)
class NotFound:
    """No credential matched the query."""

    query: str


@dataclass(frozen=True)
class Resolved:
    """A single credential was chosen."""

    credential: Credential
    prompted: bool = False


type Outcome = NotFound | Resolved


def index_width(count: int) -> int:
    """Number of decimal digits needed to print indexes 1..count."""
    return len(str(count))


def format_match_table(match_set: Sequence[Credential]) -> list[str]:
    """Render 1-indexed ``index name username`` rows with aligned columns."""
    iw = index_width(len(match_set))
    nw = max(len(c.name) for c in match_set)
    return [f"{i:>{iw}} {c.name:<{nw}} {c.username}".rstrip() for i, c in enumerate(match_set, start=1)]


class Resolver:
    """Resolves queries against a store, prompting the user when ambiguous."""

    def __init__(self, store: CredentialStore, out: Output, input_: TextIO, *, max_read_errors: int = 3) -> None:
        """Initialize the resolver.

        Args:
            store: Credential store to search.
            out: Output for the selection table and prompts.
            input_: Stream the selection is read from, one line at a time.
            max_read_errors: Consecutive read failures tolerated before aborting.

        """
        self._store = store
        self._out = out
        self._input = input_
        self._max_read_errors = max_read_errors

    def resolve(self, query: str, *, show: bool = False) -> Outcome:
        """Resolve query to one credential.

        An exact case-insensitive name match wins without prompting, even when
        other entries also match. ``show`` only affects the prompt wording.

        Raises:
            SelectionAbortedError: Input closed, or kept failing, before a valid selection.

        """
        match_set = list(self._store.search(query))
        logger.info("Query %r matched %d credential(s)", query, len(match_set))
        if not match_set:
            return NotFound(query)

        needle = query.lower()
        for credential in match_set:
            if credential.name.lower() == needle:
                return Resolved(credential)

        self._out.print_match_table(format_match_table(match_set))
        self._out.print_selection_prompt(show=show)
        chosen = match_set[self._read_index(len(match_set)) - 1]

        # Re-fetch by name so an entry removed since the search is not delivered.
        credential = self._store.get(chosen.name)
        if credential is None:
            logger.warning("Selected credential '%s' no longer exists", chosen.name)
            return NotFound(query)
        return Resolved(credential, prompted=True)

    def _read_index(self, count: int) -> int:
        """Read lines until one holds an integer in [1, count]."""
        read_errors = 0
        while True:
            try:
                line = self._input.readline()
            except OSError as e:
                read_errors += 1
                logger.warning("Selection read failed (%d/%d): %s", read_errors, self._max_read_errors, e)
                if read_errors >= self._max_read_errors:
                    raise SelectionAbortedError(f"Could not read a selection (reason: {e}).") from e
                self._out.print_read_error(str(e))
                continue
            if not line:
                raise SelectionAbortedError("Input closed before a credential was selected.")
            read_errors = 0

            text = line.strip()
            if not _INDEX_PATTERN.fullmatch(text):
                self._out.print_invalid_number(f"invalid digit in {text!r}" if text else "empty input", count)
                continue
            index = int(text)
            if not 1 <= index <= count:
                self._out.print_out_of_range(count)
                continue
            return index
