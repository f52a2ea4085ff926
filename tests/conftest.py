"""
Shared fixtures.

The fake toolchains are shell scripts accepting the same `build -o OUT SRC`
arguments as the real Go compiler, so build() and run() can be exercised
without Go installed.
"""

import stat
import sys
from pathlib import Path

import pytest
from loguru import logger


def _write_script(path: Path, body: str) -> Path:
    path.write_text("#!/bin/sh\n" + body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def fake_go(tmp_path) -> str:
    """Toolchain whose output exits with the code found in os.Exit(N), or 0."""
    script = r"""out="$3"
src="$4"
code=$(sed -n 's/.*os\.Exit(\(-\{0,1\}[0-9]*\)).*/\1/p' "$src")
printf '#!/bin/sh\nexit %s\n' "${code:-0}" > "$out"
chmod +x "$out"
"""
    return str(_write_script(tmp_path / "fake-go", script))


@pytest.fixture
def sleeping_go(tmp_path) -> str:
    """Toolchain whose output sleeps until terminated."""
    script = r"""out="$3"
printf '#!/bin/sh\nexec sleep 60\n' > "$out"
chmod +x "$out"
"""
    return str(_write_script(tmp_path / "sleeping-go", script))


@pytest.fixture
def failing_go(tmp_path) -> str:
    """Toolchain that reports a syntax error and exits 1."""
    script = r"""echo "# command-line-arguments" >&2
echo "./main.go:9:2: syntax error: unexpected }" >&2
exit 1
"""
    return str(_write_script(tmp_path / "failing-go", script))


@pytest.fixture
def workspace_root(tmp_path) -> Path:
    """Parent directory for build workspaces."""
    root = tmp_path / "workspaces"
    root.mkdir()
    return root


@pytest.fixture(autouse=True)
def reset_logger():
    """Restore loguru's default stderr sink after tests that reconfigure it."""
    yield
    logger.remove()
    logger.add(sys.stderr)
