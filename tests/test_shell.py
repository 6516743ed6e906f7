import io
from pathlib import Path

import pytest
from rich.console import Console

from safebackup.actionlog import ActionLog
from safebackup.operations import FileOperations
from safebackup.reporting import SilentReporter, set_reporter
from safebackup.session import Session
from safebackup.shell import InteractiveShell


class Script:
    """Feeds canned answers and records the prompts shown."""

    def __init__(self, *answers: str):
        self.answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


@pytest.fixture
def console_out() -> io.StringIO:
    return io.StringIO()


def _shell(sandbox: Path, script: Script, out: io.StringIO) -> InteractiveShell:
    set_reporter(SilentReporter())
    session = Session(FileOperations(sandbox), ActionLog(sandbox / "logfile.txt"))
    console = Console(file=out, force_terminal=False, width=200)
    return InteractiveShell(session, console=console, input_fn=script)


def test_full_session(sandbox: Path, console_out):
    notes = sandbox / "notes.md"
    notes.write_text("draft", encoding="utf-8")
    script = Script(
        "notes.md", "backup",
        "notes.md", "RESTORE",
        "notes.md", "delete", "yes",
        "exit",
    )
    assert _shell(sandbox, script, console_out).run() == 0
    assert not notes.exists()
    assert (sandbox / "notes.md.bak").read_text(encoding="utf-8") == "draft"
    assert "Are you sure you want to delete 'notes.md'? (yes/no)" in script.prompts
    log = (sandbox / "logfile.txt").read_text(encoding="utf-8").splitlines()
    assert [line.split(" | ")[1:] for line in log] == [
        ["backup", "notes.md", "success"],
        ["restore", "notes.md", "success"],
        ["delete", "notes.md", "success"],
    ]
    text = console_out.getvalue()
    assert text.startswith("safebackup - type 'exit' to quit")
    assert text.rstrip().endswith("Exiting.")


def test_unknown_command_keeps_looping(sandbox: Path, console_out):
    script = Script("a.txt", "copy", "EXIT")
    _shell(sandbox, script, console_out).run()
    assert "Unknown command. Allowed: backup | restore | delete | exit" in (
        console_out.getvalue()
    )
    assert not (sandbox / "logfile.txt").exists()


def test_exit_as_command(sandbox: Path, console_out):
    script = Script("a.txt", "exit", "never read")
    _shell(sandbox, script, console_out).run()
    assert script.answers == ["never read"]


def test_declined_delete(sandbox: Path, console_out):
    (sandbox / "keep.txt").write_text("x", encoding="utf-8")
    script = Script("keep.txt", "delete", "no")
    _shell(sandbox, script, console_out).run()
    assert (sandbox / "keep.txt").exists()
    log = (sandbox / "logfile.txt").read_text(encoding="utf-8")
    assert log.rstrip().endswith("| delete | keep.txt | cancelled")


def test_errors_do_not_stop_the_loop(sandbox: Path, console_out):
    (sandbox / "b.txt").write_text("x", encoding="utf-8")
    script = Script("../etc/passwd", "backup", "b.txt", "backup")
    _shell(sandbox, script, console_out).run()
    assert (sandbox / "b.txt.bak").exists()
    lines = (sandbox / "logfile.txt").read_text(encoding="utf-8").splitlines()
    assert "failure" in lines[0]
    assert lines[1].endswith("| backup | b.txt | success")


def test_eof_during_confirmation_cancels(sandbox: Path, console_out):
    (sandbox / "keep.txt").write_text("x", encoding="utf-8")
    script = Script("keep.txt", "delete")
    _shell(sandbox, script, console_out).run()
    assert (sandbox / "keep.txt").exists()


def test_interrupt_during_confirmation_cancels(sandbox: Path, console_out):
    (sandbox / "keep.txt").write_text("x", encoding="utf-8")
    answers = iter(["keep.txt", "delete"])

    def interrupt_at_confirm(prompt: str) -> str:
        if prompt.startswith("Are you sure"):
            raise KeyboardInterrupt
        return next(answers, "exit")

    shell = _shell(sandbox, Script(), console_out)
    shell._input = interrupt_at_confirm
    assert shell.run() == 0
    assert (sandbox / "keep.txt").exists()
    log = (sandbox / "logfile.txt").read_text(encoding="utf-8")
    assert log.rstrip().endswith("| delete | keep.txt | cancelled")
