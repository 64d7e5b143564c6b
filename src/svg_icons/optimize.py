"""External SVG optimizer integration (SVGO)."""

import shutil
import subprocess
from functools import cached_property
from pathlib import Path
from typing import Protocol

DEFAULT_TIMEOUT = 60


class OptimizerError(RuntimeError):
    """Raised when the external optimizer fails on a file."""


class Optimizer(Protocol):
    """Anything that can shrink an SVG file in place."""

    @property
    def available(self) -> bool: ...

    def optimize(self, path: Path) -> None: ...


class SvgoOptimizer:
    """Run SVGO on a file, rewriting it in place.

    Rendered geometry is left intact; only byte size is reduced.
    """

    def __init__(
        self,
        executable: str = "svgo",
        multipass: bool = True,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.executable = executable
        self.multipass = multipass
        self.timeout = timeout

    @cached_property
    def executable_path(self) -> str | None:
        """Resolved path of the svgo executable, or None if not installed."""
        return shutil.which(self.executable)

    @property
    def available(self) -> bool:
        """Check if svgo is installed."""
        return self.executable_path is not None

    def build_command(self, path: Path) -> list[str]:
        """Build the svgo command line for a file."""
        cmd = [self.executable_path or self.executable]
        if self.multipass:
            cmd.append("--multipass")
        cmd.extend(["-i", str(path), "-o", str(path)])
        return cmd

    def optimize(self, path: Path) -> None:
        """Optimize an SVG file in place.

        Raises:
            OptimizerError: If svgo is missing, times out or exits non-zero.
        """
        try:
            result = subprocess.run(
                self.build_command(path),
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise OptimizerError(f"{self.executable} not found") from e
        except subprocess.TimeoutExpired as e:
            raise OptimizerError(
                f"{self.executable} timed out after {self.timeout}s"
            ) from e

        if result.returncode != 0:
            message = result.stderr.strip() or f"exit code {result.returncode}"
            raise OptimizerError(f"{self.executable} failed: {message}")
