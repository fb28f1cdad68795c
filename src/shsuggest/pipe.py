"""Feed a suggested command into another program's stdin."""
from __future__ import annotations
import logging
import subprocess

from shsuggest.common.errors import ShsuggestError

LOGGER = logging.getLogger("shsuggest.pipe")


class PipeRunner:
    def pipe(self, program: str, payload: str) -> None:
        """
        Run `program` through the shell with `payload` on stdin.

        Raises:
            ShsuggestError: If the program cannot start or exits non-zero.
        """
        LOGGER.debug("Piping %d chars into %r", len(payload), program)
        try:
            proc = subprocess.run(
                program,
                shell=True,
                input=payload,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise ShsuggestError(f'Unable to run pipe program "{program}": {e}') from e

        if proc.returncode != 0:
            parts = [f'Pipe program "{program}" exited with code {proc.returncode}.']
            if proc.stdout.strip():
                parts.append(f"stdout: {proc.stdout.strip()}")
            if proc.stderr.strip():
                parts.append(f"stderr: {proc.stderr.strip()}")
            raise ShsuggestError(" ".join(parts))
