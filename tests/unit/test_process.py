import sys
import time
from collections.abc import Callable

import pytest

from talentmatch.extraction.exceptions import (
    StrategyExecutionError,
    StrategyTimeoutError,
    UnderlyingToolMissingError,
)
from talentmatch.extraction.process import run_tool

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="fake tools are POSIX shell scripts")


@posix_only
class TestRunTool:
    def test_returns_stdout(self, make_tool: Callable[[str, str], str]) -> None:
        tool = make_tool("echo-tool", 'echo "hello $1"')
        assert run_tool([tool, "world"], timeout=5) == "hello world\n"

    def test_missing_executable(self, missing_tool: str) -> None:
        with pytest.raises(UnderlyingToolMissingError, match="is not available"):
            run_tool([missing_tool], timeout=5)

    def test_non_zero_exit_reports_stderr(self, make_tool: Callable[[str, str], str]) -> None:
        tool = make_tool("failing-tool", 'echo "bad input" >&2\nexit 2')
        with pytest.raises(StrategyExecutionError, match="status 2: bad input"):
            run_tool([tool], timeout=5)

    def test_stderr_is_truncated(self, make_tool: Callable[[str, str], str]) -> None:
        tool = make_tool("noisy-tool", "printf '%0600d' 0 >&2\nexit 1")
        with pytest.raises(StrategyExecutionError) as exc_info:
            run_tool([tool], timeout=5)
        message = str(exc_info.value)
        assert "0" * 500 in message
        assert "0" * 501 not in message

    def test_timeout_kills_process_group(self, make_tool: Callable[[str, str], str]) -> None:
        tool = make_tool("hung-tool", "sleep 30 &\nsleep 30")
        started = time.monotonic()
        with pytest.raises(StrategyTimeoutError, match="timed out"):
            run_tool([tool], timeout=0.3)
        assert time.monotonic() - started < 10

    def test_no_budget_left(self, make_tool: Callable[[str, str], str]) -> None:
        tool = make_tool("echo-tool", "echo never")
        with pytest.raises(StrategyTimeoutError, match="No time budget"):
            run_tool([tool], timeout=0)
