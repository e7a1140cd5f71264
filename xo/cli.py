"""XO CLI — Command-line interface for the XO compiler.

Commands:
  xo build <file.xo>     — Compile to JavaScript under the build directory
  xo emit <file.xo>      — Compile and print JavaScript to stdout
  xo tokens <file.xo>    — Show the token stream
  xo ast <file.xo>       — Show the syntax tree
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import shutil
import sys
from typing import Optional

from xo import __version__
from xo.config import XoConfig, load_config
from xo.emitter import JavaScriptEmitter
from xo.errors import CompileError, FormatterError
from xo.formatters import format_ast, format_error, format_ok, format_tokens, node_to_dict
from xo.lexer import LexerConfig, tokenize
from xo.parser import parse
from xo.pipeline import compile_source
from xo.reformat import format_source

logger = logging.getLogger(__name__)


def _load(args: argparse.Namespace) -> Optional[tuple[str, XoConfig, LexerConfig]]:
    """Read the source file and resolve config; prints and returns None on failure."""
    source_path = args.file
    if not os.path.isfile(source_path):
        print(json.dumps({"error": f"File not found: {source_path}"}))
        return None

    config = load_config(getattr(args, "config", None),
                         start_dir=os.path.dirname(os.path.abspath(source_path)))
    if getattr(args, "quote", None) is not None:
        config.quote = args.quote
    if getattr(args, "output_format", None):
        config.output_format = args.output_format

    try:
        lexer_config = config.lexer_config()
    except ValueError as e:
        print(json.dumps({"error": str(e)}))
        return None

    with open(source_path, "r", encoding="utf-8") as f:
        source = f.read()
    logger.info("read %d characters from %s", len(source), source_path)
    return source, config, lexer_config


def _report(err: CompileError, config: XoConfig, source_path: str) -> int:
    if config.output_format == "json":
        print(err.to_json())
    else:
        print(format_error(err, source_path), file=sys.stderr)
    return 1


def _reformat(code: str, config: XoConfig) -> str:
    try:
        return format_source(code, JavaScriptEmitter.language, config.formatter)
    except FormatterError as e:
        logger.warning("%s; writing unformatted output", e)
        if e.stderr:
            logger.debug("formatter stderr:\n%s", e.stderr)
        return code


def cmd_build(args: argparse.Namespace) -> int:
    """Compile an XO source file and write the JavaScript to the build directory."""
    loaded = _load(args)
    if loaded is None:
        return 1
    source, config, lexer_config = loaded
    if args.out_dir:
        config.build_dir = args.out_dir
    if args.no_format:
        config.format = False

    try:
        code = compile_source(source, args.file, lexer_config)
    except CompileError as e:
        return _report(e, config, args.file)

    if config.format:
        code = _reformat(code, config)

    # Only clear the previous build once compilation has succeeded.
    if os.path.isdir(config.build_dir):
        logger.info("clearing %s", config.build_dir)
        shutil.rmtree(config.build_dir)
    os.makedirs(config.build_dir)

    stem = os.path.splitext(os.path.basename(args.file))[0]
    out_path = os.path.join(config.build_dir, stem + ".js")
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(code)

    if config.output_format == "json":
        print(json.dumps({"status": "compiled", "output": out_path}))
    else:
        print(format_ok(f"{args.file} → {out_path}"))
    return 0


def cmd_emit(args: argparse.Namespace) -> int:
    """Compile an XO source file and print the JavaScript."""
    loaded = _load(args)
    if loaded is None:
        return 1
    source, config, lexer_config = loaded

    try:
        code = compile_source(source, args.file, lexer_config)
    except CompileError as e:
        return _report(e, config, args.file)

    if args.format:
        code = _reformat(code, config)
    sys.stdout.write(code)
    return 0


def cmd_tokens(args: argparse.Namespace) -> int:
    """Print the token stream for an XO source file."""
    loaded = _load(args)
    if loaded is None:
        return 1
    source, config, lexer_config = loaded

    try:
        tokens = tokenize(source, args.file, lexer_config)
    except CompileError as e:
        return _report(e, config, args.file)

    if args.json:
        print(json.dumps([
            {"kind": t.kind.name, "text": t.text,
             "line": t.position.line, "column": t.position.column}
            for t in tokens
        ], indent=2))
    else:
        print(format_tokens(tokens, args.max_items or None))
    return 0


def cmd_ast(args: argparse.Namespace) -> int:
    """Print the syntax tree for an XO source file."""
    loaded = _load(args)
    if loaded is None:
        return 1
    source, config, lexer_config = loaded

    try:
        program = parse(source, args.file, lexer_config)
    except CompileError as e:
        return _report(e, config, args.file)

    if args.json:
        print(json.dumps(node_to_dict(program), indent=2))
    else:
        print(format_ast(program, args.max_items or None))
    return 0


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("file", help="XO source file (.xo)")
    p.add_argument("--config", help="Path to a config file (default: nearest .xorc.yml)")
    p.add_argument("--quote", help="String delimiter character (default from config, else ')")
    p.add_argument("--output-format", dest="output_format", choices=["pretty", "json"],
                   help="Diagnostics format")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xo",
        description="XO — compile .xo sources to JavaScript",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="More logging (-v info, -vv debug)")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # build
    p_build = subparsers.add_parser("build", help="Compile to JavaScript in the build directory")
    _add_common(p_build)
    p_build.add_argument("-o", "--out-dir", dest="out_dir", help="Build directory (cleared first)")
    p_build.add_argument("--no-format", action="store_true", dest="no_format",
                         help="Skip the external formatter")
    p_build.set_defaults(func=cmd_build)

    # emit
    p_emit = subparsers.add_parser("emit", help="Print generated JavaScript")
    _add_common(p_emit)
    p_emit.add_argument("--format", action="store_true", help="Run the external formatter")
    p_emit.set_defaults(func=cmd_emit)

    # tokens
    p_tokens = subparsers.add_parser("tokens", help="Show the token stream")
    _add_common(p_tokens)
    p_tokens.add_argument("--json", action="store_true", help="Machine-readable output")
    p_tokens.add_argument("--max-items", type=int, default=100, dest="max_items",
                          help="Truncate long lists (0 = no limit)")
    p_tokens.set_defaults(func=cmd_tokens)

    # ast
    p_ast = subparsers.add_parser("ast", help="Show the syntax tree")
    _add_common(p_ast)
    p_ast.add_argument("--json", action="store_true", help="Machine-readable output")
    p_ast.add_argument("--max-items", type=int, default=100, dest="max_items",
                       help="Truncate long child lists (0 = no limit)")
    p_ast.set_defaults(func=cmd_ast)

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    _configure_logging(args.verbose)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
