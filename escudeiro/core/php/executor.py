"""
PHP Executor
============

Run PHP scripts with the configured interpreter and capture their output.
"""

import asyncio
from pathlib import Path
from typing import Any, Optional

from escudeiro.config.logging import get_logger
from escudeiro.config.settings import get_settings
from escudeiro.core.exceptions import PHPExecutionError

logger = get_logger(__name__)


class PHPExecutor:
    """Runs PHP scripts as subprocesses."""

    def __init__(self, php_binary: Optional[str] = None, timeout: Optional[float] = None) -> None:
        if php_binary is None or timeout is None:
            settings = get_settings()
            php_binary = php_binary or settings.php_binary
            timeout = timeout if timeout is not None else settings.php_timeout
        self.php_binary = php_binary
        self.timeout = timeout
        self.logger: Any = logger.bind(component="php_executor", php_binary=self.php_binary)

    async def run(self, script_path: Path) -> bytes:
        """
        Execute a PHP script and return its standard output.

        The script runs with its own directory as the working directory.

        Args:
            script_path: Absolute path of the script

        Returns:
            Raw bytes written to stdout

        Raises:
            PHPExecutionError: If the interpreter is missing, fails or times out
        """
        self.logger.info("Executing PHP", script=str(script_path))

        try:
            process = await asyncio.create_subprocess_exec(
                self.php_binary,
                str(script_path),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=str(script_path.parent),
            )
        except OSError as e:
            self.logger.error("PHP interpreter could not be started", error=str(e))
            raise PHPExecutionError(f"could not start {self.php_binary}: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            await self._kill(process)
            self.logger.error("PHP execution timed out", script=str(script_path), timeout=self.timeout)
            raise PHPExecutionError(f"timed out after {self.timeout}s") from e
        except BaseException:
            # Cancelled request: do not leave the interpreter running
            await self._kill(process)
            self.logger.warning("PHP execution aborted", script=str(script_path))
            raise

        if process.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip() or "no error output"
            self.logger.error(
                "PHP execution failed",
                script=str(script_path),
                returncode=process.returncode,
                stderr=message,
            )
            raise PHPExecutionError(f"exit status {process.returncode}: {message}")

        self.logger.info("PHP execution completed", script=str(script_path), output_length=len(stdout))
        return stdout

    async def _kill(self, process: asyncio.subprocess.Process) -> None:
        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                pass
        await process.wait()


async def run_php(script_path: Path) -> bytes:
    """Execute a PHP script with the configured interpreter."""
    return await PHPExecutor().run(script_path)
