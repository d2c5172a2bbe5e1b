"""Bounded execution of external extraction tools."""

import os
import signal
import subprocess

from talentmatch.extraction.exceptions import (
    StrategyExecutionError,
    StrategyTimeoutError,
    UnderlyingToolMissingError,
)

_STDERR_LIMIT = 500


def run_tool(args: list[str], timeout: float) -> str:
    """Run an external tool and return its stdout.

    The tool runs in its own process group so a timeout kills it together with
    any children it spawned.

    Raises:
        UnderlyingToolMissingError: the executable cannot be launched.
        StrategyTimeoutError: the tool did not finish within *timeout* seconds.
        StrategyExecutionError: the tool exited with a non-zero status.
    """
    if timeout <= 0:
        raise StrategyTimeoutError(f"No time budget left to run {args[0]}")
    try:
        proc = subprocess.Popen(
            args,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            start_new_session=True,
        )
    except (FileNotFoundError, PermissionError) as exc:
        raise UnderlyingToolMissingError(f"{args[0]} is not available: {exc}") from exc

    try:
        stdout, stderr = proc.communicate(timeout=timeout)
    except subprocess.TimeoutExpired as exc:
        _kill(proc)
        proc.communicate()
        raise StrategyTimeoutError(f"{args[0]} timed out after {timeout:.1f}s") from exc

    if proc.returncode != 0:
        detail = stderr.decode("utf-8", errors="replace").strip()[:_STDERR_LIMIT]
        raise StrategyExecutionError(
            f"{args[0]} exited with status {proc.returncode}: {detail or 'no output'}"
        )
    return stdout.decode("utf-8", errors="replace")


def _kill(proc: subprocess.Popen[bytes]) -> None:
    if hasattr(os, "killpg"):
        try:
            os.killpg(proc.pid, signal.SIGKILL)
            return
        except ProcessLookupError:
            return
    proc.kill()
