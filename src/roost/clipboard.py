"""System clipboard access via pbcopy (macOS) or xclip (Linux)."""

import platform
import subprocess  # nosec B404


class ClipboardError(Exception):
    """Copying to the system clipboard failed."""


def _is_macos() -> bool:
    return platform.system() == "Darwin"


def _copy_cmd() -> list[str]:
    """Return the platform-specific clipboard copy command."""
    return ["pbcopy"] if _is_macos() else ["xclip", "-selection", "clipboard"]


class SystemClipboard:
    """Clipboard backed by the platform's command-line copy tool."""

    def copy(self, text: str) -> None:
        """Copy text to the system clipboard.

        Raises:
            ClipboardError: The copy tool is missing or exited with an error.

        """
        cmd = _copy_cmd()
        try:
            # S603: args are controlled literals, hardcoded clipboard commands
            subprocess.run(cmd, input=text.encode(), check=True, capture_output=True, timeout=5)  # noqa: S603  # nosec B603
        except FileNotFoundError:
            raise ClipboardError(f"'{cmd[0]}' is not installed") from None
        except subprocess.CalledProcessError as e:
            detail = e.stderr.decode(errors="replace").strip() if e.stderr else f"exit status {e.returncode}"
            raise ClipboardError(f"'{cmd[0]}' failed: {detail}") from None
        except subprocess.TimeoutExpired:
            raise ClipboardError(f"'{cmd[0]}' timed out") from None
        except OSError as e:
            raise ClipboardError(f"'{cmd[0]}' could not be run: {e.strerror or e}") from None

    def paste_hint(self) -> str:
        """Key combination that pastes from the clipboard on this platform."""
        return "Cmd+V" if _is_macos() else "Ctrl+V"
