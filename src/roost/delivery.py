"""Release a chosen credential's secret through one sanctioned channel."""

import enum
import logging
from dataclasses import dataclass
from typing import Protocol

from roost.clipboard import ClipboardError, SystemClipboard
from roost.credential import Credential
from roost.output import Output

logger = logging.getLogger(__name__)


class Clipboard(Protocol):
    """Clipboard contract used for delivery."""

    def copy(self, text: str) -> None:
        """Place text on the clipboard. Raises ClipboardError on failure."""
        ...

    def paste_hint(self) -> str:
        """Human-readable key combination for pasting."""
        ...


class DeliveryMode(enum.Enum):
    """Where a secret may go."""

    SHOW = "show"
    CLIPBOARD = "clipboard"


@dataclass(frozen=True)
class DeliveryReport:
    """Outcome of a single delivery attempt."""

    name: str
    mode: DeliveryMode
    delivered: bool


class DeliveryChannel:
    """Prints a secret or copies it to the clipboard, and tells the user which happened."""

    def __init__(self, out: Output, clipboard: Clipboard | None = None) -> None:
        self._out = out
        self._clipboard = clipboard if clipboard is not None else SystemClipboard()

    def deliver(self, credential: Credential, mode: DeliveryMode = DeliveryMode.CLIPBOARD) -> DeliveryReport:
        """Deliver the credential's secret.

        A clipboard failure is reported with a hint to use ``--show`` and returned
        as ``delivered=False``; it is never raised and never falls back to printing.
        """
        if mode is DeliveryMode.SHOW:
            self._out.print_secret_shown(credential)
            logger.info("Credential '%s' shown", credential.name)
            return DeliveryReport(credential.name, mode, delivered=True)

        try:
            self._clipboard.copy(credential.secret.get_secret_value())
        except ClipboardError as e:
            logger.warning("Clipboard copy of '%s' failed: %s", credential.name, e)
            self._out.print_copy_failed(credential.name, str(e))
            return DeliveryReport(credential.name, mode, delivered=False)
        self._out.print_secret_copied(credential.name, self._clipboard.paste_hint())
        logger.info("Credential '%s' copied to clipboard", credential.name)
        return DeliveryReport(credential.name, mode, delivered=True)
