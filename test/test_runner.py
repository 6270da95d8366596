from __future__ import annotations

import json

import pytest

from osaurus_music.automation import runner as runner_mod
from osaurus_music.automation.errors import (
    ExecutionFailedError,
    MusicNotRunningError,
    PermissionDeniedError,
)
from osaurus_music.automation.runner import AppleScriptRunner, classify_failure
from osaurus_music.util.subprocess import CmdResult

from conftest import FakeOsascript, reply


@pytest.mark.parametrize(
    "stderr, expected",
    [
        ("execution error: Not authorized to send Apple events to Music. (-1743)", PermissionDeniedError),
        ("osascript is NOT ALLOWED assistive access.", PermissionDeniedError),
        ("execution error: Music got an error: Music isn't running. (-600)", MusicNotRunningError),
        ("syntax error: Expected end of line. (-2741)", ExecutionFailedError),
        ("", ExecutionFailedError),
    ],
)
def test_classify_failure(stderr, expected):
    assert isinstance(classify_failure(stderr), expected)


def test_classification_rules_apply_in_order():
    err = classify_failure("not allowed: Music isn't running")
    assert isinstance(err, PermissionDeniedError)


def test_generic_failure_carries_raw_stderr():
    err = classify_failure('bad "thing"\n')
    assert isinstance(err, ExecutionFailedError)
    assert err.message == 'bad "thing"\n'
    assert json.loads(err.to_json()) == {"error": 'Command failed: bad "thing"\n'}


def test_not_running_skips_the_script():
    osa = FakeOsascript(running=False)
    r = AppleScriptRunner(executor=osa)
    with pytest.raises(MusicNotRunningError):
        r.run('tell application "Music" to play')
    assert osa.probes == 1
    assert osa.calls == []


def test_no_probe_when_app_not_required():
    osa = FakeOsascript(running=False)
    r = AppleScriptRunner(executor=osa)
    r.run('tell application "Music" to activate', requires_music_running=False)
    assert osa.probes == 0
    assert osa.calls == ['tell application "Music" to activate']


def test_success_output_is_trimmed():
    osa = FakeOsascript().queue(reply("  hello world \n\n"))
    assert AppleScriptRunner(executor=osa).run("return 1") == "hello world"


def test_nonzero_exit_is_classified():
    osa = FakeOsascript().queue(reply(stderr="Not authorized to send Apple events", code=1))
    with pytest.raises(PermissionDeniedError):
        AppleScriptRunner(executor=osa).run("return 1")


def test_failed_probe_reads_as_not_running():
    def broken(cmd):
        return CmdResult(1, "", "System Events got an error")

    r = AppleScriptRunner(executor=broken)
    assert r.is_music_running() is False


def test_probe_uses_configured_app_name():
    osa = FakeOsascript()
    AppleScriptRunner(app_name="Spotify", executor=osa).is_music_running()
    assert osa.commands[0][-1] == 'tell application "System Events" to (name of processes) contains "Spotify"'


def test_default_executor_invokes_osascript(monkeypatch):
    seen = []

    def fake_run_cmd(cmd, timeout=None):
        seen.append((list(cmd), timeout))
        return CmdResult(0, "true\n", "")

    monkeypatch.setattr(runner_mod, "run_cmd", fake_run_cmd)
    r = AppleScriptRunner(osascript_path="/opt/osascript")
    assert r.run("return 1", requires_music_running=False) == "true"
    assert seen == [(["/opt/osascript", "-e", "return 1"], None)]
