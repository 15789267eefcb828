"""Guard / action fragment checking.

Fragment validity is decided by an external collaborator. The default
implementation drives the ``rfsmc`` compiler in ``-check_fragment`` mode,
feeding it a small context file with the signals visible to the automaton.
"""

from __future__ import annotations

import logging
import os
import subprocess
import tempfile
from collections.abc import Callable
from typing import Protocol

from rfsm_light.models import Signal

logger = logging.getLogger(__name__)

GUARD = "guard"
ACTION = "action"
STATE_VALUATION = "sval"


class FragmentChecker(Protocol):
    """Interface consumed by ``Automaton.check``."""

    def bind(self, context: list[Signal]) -> None: ...

    def check_guard(self, text: str) -> bool: ...

    def check_action(self, text: str) -> bool: ...

    def check_state_valuation(self, text: str) -> bool: ...

    def get_errors(self) -> list[str]: ...


class AcceptAllChecker:
    """Accepts every fragment. Used when no compiler is configured."""

    def bind(self, context: list[Signal]) -> None:
        pass

    def check_guard(self, text: str) -> bool:
        return True

    def check_action(self, text: str) -> bool:
        return True

    def check_state_valuation(self, text: str) -> bool:
        return True

    def get_errors(self) -> list[str]:
        return []


def fragment_source(context: list[Signal], kind: str, text: str) -> str:
    """Build the text of a fragment file for ``rfsmc -check_fragment``."""
    lines = ["-- context"]
    for sig in context:
        lines.append(f"{sig.kind.value} {sig.name}: {sig.type.value};")
    lines.append("-- fragment")
    lines.append(f"{kind} {text};")
    return "\n".join(lines) + "\n"


class RfsmcChecker:
    """Checks fragments by running the external RFSM compiler.

    Each check is a blocking process spawn. The verdict is the exit status;
    the compiler's output lines are kept as diagnostics.
    """

    def __init__(self, compiler: str = "rfsmc", timeout: float = 10.0) -> None:
        self.compiler = compiler
        self.timeout = timeout
        self._context: list[Signal] = []
        self._errors: list[str] = []

    def bind(self, context: list[Signal]) -> None:
        self._context = list(context)

    def check_guard(self, text: str) -> bool:
        return self._check(GUARD, text)

    def check_action(self, text: str) -> bool:
        return self._check(ACTION, text)

    def check_state_valuation(self, text: str) -> bool:
        return self._check(STATE_VALUATION, text)

    def get_errors(self) -> list[str]:
        return list(self._errors)

    def _check(self, kind: str, text: str) -> bool:
        self._errors = []
        fd, fname = tempfile.mkstemp(suffix=".fsm", prefix="rfsm_fragment_")
        try:
            with os.fdopen(fd, "w") as f:
                f.write(fragment_source(self._context, kind, text))
            logger.debug("Checking %s fragment %r with %s", kind, text, self.compiler)
            try:
                proc = subprocess.run(
                    [self.compiler, "-check_fragment", fname],
                    capture_output=True,
                    text=True,
                    timeout=self.timeout,
                )
            except subprocess.TimeoutExpired:
                self._errors = [f"{self.compiler} timed out after {self.timeout}s"]
                return False
            except FileNotFoundError:
                self._errors = [f"Cannot run compiler {self.compiler!r}: not found"]
                return False
        finally:
            os.unlink(fname)

        output = (proc.stderr or "") + (proc.stdout or "")
        if proc.returncode != 0:
            self._errors = [line for line in output.splitlines() if line.strip()]
            if not self._errors:
                self._errors = [f"{self.compiler} exited with status {proc.returncode}"]
            return False
        return True


class CachingChecker:
    """Memoizes the verdicts of another checker.

    Cache keys include the bound signal context, so a context change never
    reuses a stale verdict.
    """

    def __init__(self, inner: FragmentChecker) -> None:
        self.inner = inner
        self._context_key: tuple[tuple[str, str, str], ...] = ()
        self._cache: dict[tuple[object, ...], tuple[bool, list[str]]] = {}
        self._errors: list[str] = []

    def bind(self, context: list[Signal]) -> None:
        self._context_key = tuple((s.kind.value, s.name, s.type.value) for s in context)
        self.inner.bind(context)

    def check_guard(self, text: str) -> bool:
        return self._check(GUARD, text, self.inner.check_guard)

    def check_action(self, text: str) -> bool:
        return self._check(ACTION, text, self.inner.check_action)

    def check_state_valuation(self, text: str) -> bool:
        return self._check(STATE_VALUATION, text, self.inner.check_state_valuation)

    def get_errors(self) -> list[str]:
        return list(self._errors)

    def _check(self, kind: str, text: str, fn: Callable[[str], bool]) -> bool:
        key = (kind, text, self._context_key)
        if key not in self._cache:
            ok = fn(text)
            self._cache[key] = (ok, [] if ok else self.inner.get_errors())
        ok, errors = self._cache[key]
        self._errors = list(errors)
        return ok
