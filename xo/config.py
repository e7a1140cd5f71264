"""XO Configuration — Project-level .xorc.yml support.

Loads configuration from .xorc.yml (or .xorc.yaml, .xorc.json) found by
walking up from the source file's directory. Allows projects to configure:
  - The string delimiter the lexer recognises
  - Where build output goes
  - Whether and how the generated code is reformatted

Example .xorc.yml:
    quote: "'"
    build_dir: build
    format: true
    formatter: [npx, prettier]
    output_format: pretty
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from xo.lexer import DEFAULT_QUOTE, LexerConfig

logger = logging.getLogger(__name__)


@dataclass
class XoConfig:
    """Project-level XO configuration."""
    quote: str = DEFAULT_QUOTE
    build_dir: str = "build"
    # Run the external formatter over generated code
    format: bool = True
    formatter: List[str] = field(default_factory=lambda: ["prettier"])
    # Diagnostics: "pretty" or "json"
    output_format: str = "pretty"

    def lexer_config(self) -> LexerConfig:
        return LexerConfig(quote=self.quote)


# ---------------------------------------------------------------------------
# Config file names (in priority order)
# ---------------------------------------------------------------------------

_CONFIG_FILES = [
    ".xorc.yml",
    ".xorc.yaml",
    ".xorc.json",
    "xo.config.yml",
    "xo.config.json",
]


def find_config(start_dir: str = ".") -> Optional[str]:
    """Find the nearest config file by walking up from start_dir."""
    current = os.path.abspath(start_dir)
    while True:
        for name in _CONFIG_FILES:
            path = os.path.join(current, name)
            if os.path.isfile(path):
                return path
        parent = os.path.dirname(current)
        if parent == current:
            break
        current = parent
    return None


def load_config(path: Optional[str] = None, start_dir: str = ".") -> XoConfig:
    """Load configuration from a file.

    If no path is given, searches for a config file starting from start_dir.
    If no config file is found, or it cannot be read, returns defaults.
    """
    if path is None:
        path = find_config(start_dir)

    if path is None:
        return XoConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        logger.warning("could not read config %s: %s", path, e)
        return XoConfig()

    try:
        if path.endswith(".json"):
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        logger.warning("ignoring malformed config %s: %s", path, e)
        return XoConfig()

    if data is None:
        data = {}
    if not isinstance(data, dict):
        logger.warning("ignoring config %s: top level is not a mapping", path)
        return XoConfig()

    logger.debug("loaded config from %s", path)
    return _dict_to_config(data)


def _dict_to_config(data: Dict[str, Any]) -> XoConfig:
    """Convert a parsed dict to XoConfig."""
    config = XoConfig()

    if "quote" in data:
        config.quote = str(data["quote"])
    if "build_dir" in data:
        config.build_dir = str(data["build_dir"])
    if "format" in data:
        config.format = bool(data["format"])
    if "formatter" in data:
        cmd = data["formatter"]
        if isinstance(cmd, str):
            config.formatter = cmd.split()
        elif isinstance(cmd, list):
            config.formatter = [str(part) for part in cmd]
    if "output_format" in data:
        config.output_format = str(data["output_format"])

    return config
