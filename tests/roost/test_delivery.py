"""Tests for secret delivery through display or clipboard."""

import io
import json
import subprocess

import pytest

from roost.clipboard import ClipboardError, SystemClipboard
from roost.credential import Credential
from roost.delivery import DeliveryChannel, DeliveryMode, DeliveryReport
from roost.output import Output

SECRET = "S3cr3t"


class FakeClipboard:
    """Records copies; optionally fails."""

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.copied: list[str] = []

    def copy(self, text: str) -> None:
        if self.fail:
            raise ClipboardError("'xclip' is not installed")
        self.copied.append(text)

    def paste_hint(self) -> str:
        return "Ctrl+V"


@pytest.fixture
def google() -> Credential:
    return Credential(name="google", username="me@example.com", secret=SECRET)


def deliver(credential: Credential, mode: DeliveryMode, clipboard: FakeClipboard, *, json_mode: bool = False):
    stdout, stderr = io.StringIO(), io.StringIO()
    channel = DeliveryChannel(Output(json_mode=json_mode, stdout=stdout, stderr=stderr), clipboard)
    report = channel.deliver(credential, mode)
    return report, stdout.getvalue(), stderr.getvalue()


class TestShow:
    """Explicit display of the secret."""

    def test_prints_name_and_secret_once(self, google: Credential) -> None:
        """Secret appears exactly once, on stdout, next to the name."""
        clipboard = FakeClipboard()
        report, out, err = deliver(google, DeliveryMode.SHOW, clipboard)
        assert report == DeliveryReport("google", DeliveryMode.SHOW, delivered=True)
        assert "google" in out
        assert out.count(SECRET) == 1
        assert SECRET not in err

    def test_never_copies(self, google: Credential) -> None:
        """Show mode does not touch the clipboard."""
        clipboard = FakeClipboard()
        deliver(google, DeliveryMode.SHOW, clipboard)
        assert clipboard.copied == []

    def test_json(self, google: Credential) -> None:
        """JSON mode emits the credential in an ok envelope."""
        _, out, _ = deliver(google, DeliveryMode.SHOW, FakeClipboard(), json_mode=True)
        assert json.loads(out) == {"ok": True, "data": {"name": "google", "username": "me@example.com", "secret": SECRET}}


class TestClipboard:
    """Clipboard delivery, the default."""

    def test_default_mode(self, google: Credential) -> None:
        """Without a mode the secret goes to the clipboard."""
        clipboard = FakeClipboard()
        channel = DeliveryChannel(Output(json_mode=False, stdout=io.StringIO(), stderr=io.StringIO()), clipboard)
        assert channel.deliver(google).mode is DeliveryMode.CLIPBOARD
        assert clipboard.copied == [SECRET]

    def test_success_reports_paste_hint(self, google: Credential) -> None:
        """Success names the credential and the paste keys, never the secret."""
        clipboard = FakeClipboard()
        report, out, err = deliver(google, DeliveryMode.CLIPBOARD, clipboard)
        assert report.delivered is True
        assert clipboard.copied == [SECRET]
        assert "google" in out
        assert "Ctrl+V" in out
        assert SECRET not in out + err

    def test_failure_suggests_show(self, google: Credential) -> None:
        """Failure is reported on stderr with a --show hint and no secret."""
        report, out, err = deliver(google, DeliveryMode.CLIPBOARD, FakeClipboard(fail=True))
        assert report == DeliveryReport("google", DeliveryMode.CLIPBOARD, delivered=False)
        assert out == ""
        assert "--show" in err
        assert "reason: 'xclip' is not installed" in err
        assert SECRET not in out + err

    def test_failure_json(self, google: Credential) -> None:
        """JSON failure envelope carries the code and no secret."""
        _, out, _ = deliver(google, DeliveryMode.CLIPBOARD, FakeClipboard(fail=True), json_mode=True)
        payload = json.loads(out)
        assert payload["ok"] is False
        assert payload["error"] == "clipboard_failed"
        assert SECRET not in out

    def test_system_clipboard_os_error_is_soft(self, google: Credential, monkeypatch: pytest.MonkeyPatch) -> None:
        """A copy tool that cannot be executed is reported, not raised."""

        def run(*args, **kwargs):
            raise PermissionError(13, "Permission denied", "xclip")

        monkeypatch.setattr(subprocess, "run", run)
        stdout, stderr = io.StringIO(), io.StringIO()
        channel = DeliveryChannel(Output(json_mode=False, stdout=stdout, stderr=stderr), SystemClipboard())
        report = channel.deliver(google, DeliveryMode.CLIPBOARD)
        assert report.delivered is False
        assert "--show" in stderr.getvalue()
        assert SECRET not in stdout.getvalue() + stderr.getvalue()


class TestSecretMasking:
    """The credential model hides its secret from incidental formatting."""

    def test_repr_and_str(self, google: Credential) -> None:
        """Neither repr nor str reveals the secret."""
        assert SECRET not in repr(google)
        assert SECRET not in str(google)
        assert SECRET not in f"{google.secret}"
