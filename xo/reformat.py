"""Bridge to the external code formatter.

The emitter produces correct but unstyled code; indentation and spacing are
delegated to prettier, which reads the code on stdin and writes the
formatted result to stdout.
"""

from __future__ import annotations

import logging
import subprocess
from typing import Optional

from xo.errors import FormatterError

logger = logging.getLogger(__name__)

# language mode -> prettier --parser value
PRETTIER_PARSERS = {
    "javascript": "babel",
    "typescript": "typescript",
}

DEFAULT_COMMAND = ["prettier"]


def format_source(text: str, language: str = "javascript",
                  command: Optional[list[str]] = None,
                  timeout: float = 30.0) -> str:
    """Reformat ``text`` with the external formatter and return the result."""
    if language not in PRETTIER_PARSERS:
        raise FormatterError(f"No formatter parser for language '{language}'")
    cmd = list(command or DEFAULT_COMMAND) + ["--parser", PRETTIER_PARSERS[language]]
    logger.debug("running formatter: %s", " ".join(cmd))

    try:
        proc = subprocess.run(
            cmd,
            input=text,
            capture_output=True,
            text=True,
            encoding="utf-8",
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError:
        raise FormatterError(f"Formatter not found: {cmd[0]}", cmd)
    except subprocess.TimeoutExpired:
        raise FormatterError(f"Formatter timed out after {timeout:g}s", cmd)

    if proc.returncode != 0:
        raise FormatterError(
            f"Formatter exited with status {proc.returncode}",
            cmd,
            stderr=proc.stderr,
        )
    return proc.stdout
