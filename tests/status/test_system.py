import asyncio
import sys
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from tailview.status.system import CommandError, read_sysfs, run_command


def test_read_sysfs(tmp_path):
    path = tmp_path / "mtu"
    path.write_text("1280\n")
    assert read_sysfs(str(path)) == "1280\n"


def test_read_sysfs_missing_file(tmp_path):
    assert read_sysfs(str(tmp_path / "missing")) is None


@pytest.mark.asyncio
async def test_run_command_captures_output():
    result = await run_command([sys.executable, "-c", "import sys; print('out'); print('err', file=sys.stderr); sys.exit(3)"])
    assert result.code == 3
    assert result.stdout.strip() == "out"
    assert result.stderr.strip() == "err"


@pytest.mark.asyncio
async def test_run_command_missing_binary():
    with pytest.raises(CommandError):
        await run_command(["/nonexistent/tailscale-binary", "status"])


@pytest.mark.asyncio
async def test_run_command_timeout():
    with pytest.raises(CommandError, match="timed out"):
        await run_command([sys.executable, "-c", "import time; time.sleep(5)"], timeout=0.2)


@pytest.mark.asyncio
async def test_run_command_timeout_after_process_exited():
    process = MagicMock()
    process.communicate = MagicMock(return_value=asyncio.sleep(1))
    process.kill = MagicMock(side_effect=ProcessLookupError())
    process.wait = AsyncMock(return_value=0)

    with patch("tailview.status.system.asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
        with pytest.raises(CommandError, match="timed out"):
            await run_command(["tailscale", "status", "--json"], timeout=0.01)

    process.wait.assert_awaited_once()
