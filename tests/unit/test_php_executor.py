"""
Unit Tests for PHP Executor
===========================

The executor is exercised with the Python interpreter standing in for PHP,
so real subprocesses run without a PHP installation.
"""

import asyncio
from pathlib import Path
from unittest.mock import patch

import pytest

from escudeiro.config.settings import Settings
from escudeiro.core.exceptions import PHPExecutionError
from escudeiro.core.php.executor import PHPExecutor, run_php

from tests.conftest import FAKE_PHP


def write_script(directory: Path, name: str, source: str) -> Path:
    script = directory / name
    script.write_text(source, encoding="utf-8")
    return script


class TestPHPExecutor:
    """Test running scripts through the interpreter."""

    @pytest.fixture
    def executor(self) -> PHPExecutor:
        return PHPExecutor(php_binary=FAKE_PHP, timeout=10.0)

    @pytest.mark.asyncio
    async def test_returns_stdout(self, executor, tmp_path):
        """Test standard output is returned as bytes."""
        script = write_script(tmp_path, "hello.php", 'print("<p>hello</p>")\n')

        output = await executor.run(script)

        assert output.strip() == b"<p>hello</p>"

    @pytest.mark.asyncio
    async def test_runs_in_script_directory(self, executor, tmp_path):
        """Test the working directory is the script's directory."""
        script = write_script(tmp_path, "cwd.php", "import os\nprint(os.getcwd())\n")

        output = await executor.run(script)

        assert Path(output.decode().strip()).resolve() == tmp_path.resolve()

    @pytest.mark.asyncio
    async def test_non_zero_exit(self, executor, tmp_path):
        """Test a failing script raises with its error output."""
        script = write_script(
            tmp_path, "fail.php", 'import sys\nsys.stderr.write("Parse error")\nsys.exit(255)\n'
        )

        with pytest.raises(PHPExecutionError, match="exit status 255: Parse error"):
            await executor.run(script)

    @pytest.mark.asyncio
    async def test_missing_interpreter(self, tmp_path):
        """Test a missing interpreter is reported as an execution error."""
        script = write_script(tmp_path, "page.php", "print(1)\n")
        executor = PHPExecutor(php_binary=str(tmp_path / "no-such-php"), timeout=5.0)

        with pytest.raises(PHPExecutionError, match="could not start"):
            await executor.run(script)

    @pytest.mark.asyncio
    async def test_timeout(self, tmp_path):
        """Test a script running past the timeout is killed."""
        script = write_script(tmp_path, "slow.php", "import time\ntime.sleep(30)\n")
        executor = PHPExecutor(php_binary=FAKE_PHP, timeout=0.5)

        with pytest.raises(PHPExecutionError, match="timed out"):
            await executor.run(script)

    @pytest.mark.asyncio
    async def test_cancelled_run_kills_process(self, tmp_path):
        """Test cancelling a run does not leave the interpreter running."""
        script = write_script(tmp_path, "slow.php", "import time\ntime.sleep(30)\n")
        executor = PHPExecutor(php_binary=FAKE_PHP, timeout=60.0)
        processes = []
        spawn_process = asyncio.create_subprocess_exec

        async def spawn(*args, **kwargs):
            process = await spawn_process(*args, **kwargs)
            processes.append(process)
            return process

        with patch("escudeiro.core.php.executor.asyncio.create_subprocess_exec", new=spawn):
            task = asyncio.create_task(executor.run(script))
            for _ in range(100):
                if processes:
                    break
                await asyncio.sleep(0.05)
            task.cancel()

            with pytest.raises(asyncio.CancelledError):
                await task

        assert len(processes) == 1
        assert processes[0].returncode is not None


class TestPHPExecutorSettings:
    """Test configuration of the executor."""

    def test_defaults_from_settings(self):
        settings = Settings(environment="testing", php_binary="/usr/bin/php8", php_timeout=3.0)
        with patch("escudeiro.core.php.executor.get_settings", return_value=settings):
            executor = PHPExecutor()

        assert executor.php_binary == "/usr/bin/php8"
        assert executor.timeout == 3.0

    def test_explicit_arguments_win(self):
        with patch("escudeiro.core.php.executor.get_settings") as mock_settings:
            executor = PHPExecutor(php_binary="php7", timeout=1.0)

        mock_settings.assert_not_called()
        assert executor.php_binary == "php7"
        assert executor.timeout == 1.0

    @pytest.mark.asyncio
    async def test_run_php_uses_settings(self, tmp_path):
        script = write_script(tmp_path, "page.php", 'print("ok")\n')
        settings = Settings(environment="testing", php_binary=FAKE_PHP)
        with patch("escudeiro.core.php.executor.get_settings", return_value=settings):
            output = await run_php(script)

        assert output.strip() == b"ok"
