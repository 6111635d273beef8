"""Run osascript and shell snippets with a bounded timeout."""

import logging
import shutil
import subprocess
from dataclasses import dataclass

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15  # seconds


@dataclass
class ScriptResult:
    ok: bool
    output: str = ""
    error: str = ""
    timed_out: bool = False


class ScriptRunner:
    """Runs AppleScript and shell snippets; never raises for host failures."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.timeout = timeout

    def available(self, program: str) -> bool:
        return shutil.which(program) is not None

    def osascript(self, script: str) -> ScriptResult:
        return self._run(["osascript", "-e", script])

    def shell(self, script: str) -> ScriptResult:
        """Feed a bash script on stdin."""
        return self._run(["bash", "-s"], stdin=script)

    def _run(self, argv: list[str], stdin: str | None = None) -> ScriptResult:
        log.debug("running %s (timeout %ss)", argv[0], self.timeout)
        try:
            proc = subprocess.run(
                argv,
                input=stdin,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            return ScriptResult(
                ok=False,
                error=f"{argv[0]} timed out after {self.timeout}s",
                timed_out=True,
            )
        except OSError as e:
            return ScriptResult(ok=False, error=f"cannot run {argv[0]}: {e}")

        if proc.returncode != 0:
            error = proc.stderr.strip() or f"{argv[0]} exited with status {proc.returncode}"
            return ScriptResult(ok=False, output=proc.stdout, error=error)
        return ScriptResult(ok=True, output=proc.stdout)
