"""Conversion of texinfo package manuals to HTML via an external program."""

from __future__ import annotations

import shlex
import subprocess
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from ..errors import ManualConversionError, ProgramNotFoundError
from ..logging import get_logger

# Exit status a POSIX shell reports for a missing command.
COMMAND_NOT_FOUND = 127

Runner = Callable[[Sequence[str]], Tuple[int, str]]


class ManualConverter:
    """Runs ``makeinfo --html`` and locates the entry page of the result."""

    def __init__(
        self,
        program: str = "makeinfo",
        *,
        extra_options: Optional[str] = None,
        runner: Runner | None = None,
    ) -> None:
        self.program = program
        self.extra_options = extra_options
        self._runner = runner or self._default_runner
        self.logger = get_logger("manual.converter")

    def command(self, source: Path, out_dir: Path) -> List[str]:
        args = [self.program, "--html", "-o", str(out_dir), str(source)]
        if self.extra_options:
            args.extend(shlex.split(self.extra_options))
        return args

    def convert(self, source: Path, out_dir: Path) -> Path:
        """Convert ``source`` into ``out_dir`` and return the manual's entry file."""
        args = self.command(source, out_dir)
        self.logger.debug("Running %s", shlex.join(args))
        status, message = self._runner(args)
        if status == COMMAND_NOT_FOUND:
            raise ProgramNotFoundError(f"Program `{self.program}' not found")
        if status:
            detail = f": {message}" if message else ""
            raise ManualConversionError(
                f"Program `{self.program}' returned failure code {status}{detail}"
            )
        return self.locate_entry(source, out_dir)

    @staticmethod
    def locate_entry(source: Path, out_dir: Path) -> Path:
        """Find the root page: ``index.html``, ``<source stem>.html`` or the only page."""
        for candidate in (out_dir / "index.html", out_dir / f"{source.stem}.html"):
            if candidate.is_file():
                return candidate
        pages = sorted(out_dir.glob("*.html"))
        if len(pages) == 1:
            return pages[0]
        raise ManualConversionError("Unable to determine the root of the HTML manual.")

    @staticmethod
    def _default_runner(args: Sequence[str]) -> Tuple[int, str]:
        try:
            completed = subprocess.run(list(args), check=False, text=True, capture_output=True)
        except FileNotFoundError:
            return COMMAND_NOT_FOUND, ""
        return completed.returncode, completed.stderr.strip()


__all__ = ["COMMAND_NOT_FOUND", "ManualConverter"]
