"""litenum CLI: generate Python enum modules from .lenum declarations.

Usage:
    litenum generate <enum_file_or_dir>... [--output <path> | --out-dir <dir>] [--stdout]
    litenum check <enum_file> [--json]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text

from litenum.core.config import get_config
from litenum.core.types import DslSyntaxError, GenerationError, ValidationError

__version__ = "0.1.0"

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="litenum",
        description="litenum: string-literal enum generator for Python",
        epilog="Declare the literals once. Get lookup, ordering, and data accessors generated.",
    )
    parser.add_argument("--version", action="version", version=f"litenum {__version__}")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log each pipeline stage to stderr"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- generate ---
    gen_parser = subparsers.add_parser("generate", help="Generate Python modules")
    gen_parser.add_argument(
        "enum_files", type=str, nargs="+", help="Paths to .lenum files, or directories of them"
    )
    target = gen_parser.add_mutually_exclusive_group()
    target.add_argument(
        "--output", "-o", type=str, default=None, help="Output path (single input only)"
    )
    target.add_argument(
        "--out-dir", type=str, default=None, help="Directory for generated modules"
    )
    target.add_argument(
        "--stdout", action="store_true", help="Print generated code instead of writing files"
    )

    # --- check ---
    check_parser = subparsers.add_parser("check", help="Validate a .lenum file")
    check_parser.add_argument("enum_file", type=str, help="Path to .lenum file")
    check_parser.add_argument(
        "--json", action="store_true", help="Print the validated model as JSON"
    )

    return parser


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate one module per .lenum file."""
    from litenum.compiler.compiler import compile_source

    config = get_config()
    paths = _expand_inputs(args.enum_files, config.source_suffix)
    if paths is None:
        return 1
    if args.output and len(paths) > 1:
        err_console.print("[red]Error:[/red] --output accepts a single input file")
        return 1

    failed = 0
    for path in paths:
        source = _read_source(path)
        if source is None:
            failed += 1
            continue

        try:
            module_text = compile_source(source, config)
        except GenerationError as exc:
            _report_error(path, exc)
            failed += 1
            continue

        if args.stdout:
            # Raw write: generated code must not pass through rich markup
            sys.stdout.write(module_text)
            continue

        output_path = _output_path(path, args.output, args.out_dir, config.output_suffix)
        try:
            _write_atomic(output_path, module_text, config.encoding)
        except OSError as exc:
            err_console.print(
                f"Error: Cannot write {output_path}: {exc}", style="red", markup=False
            )
            failed += 1
            continue
        err_console.print(Text.assemble(("Generated", "green"), f" {output_path}"))

    return 1 if failed else 0


def cmd_check(args: argparse.Namespace) -> int:
    """Validate a .lenum file and summarize its variants."""
    from litenum.compiler.compiler import model_from_source
    from litenum.compiler.serializer import serialize_to_json

    path = Path(args.enum_file)
    source = _read_source(path)
    if source is None:
        return 1

    try:
        model = model_from_source(source)
    except GenerationError as exc:
        _report_error(path, exc)
        return 1

    if args.json:
        sys.stdout.write(serialize_to_json(model) + "\n")
        return 0

    title = f"{model.name} ({len(model.variants)} variants)"
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Primary")
    table.add_column("Alternates")
    if model.data_field is not None:
        table.add_column(f"{model.data_field.name}: {model.data_field.type_ref}")

    for variant in model.variants:
        # Text cells so literals like "[" are not read as rich markup
        row = [
            Text(str(variant.index)),
            Text(variant.name),
            Text(repr(variant.primary)),
            Text(", ".join(repr(a) for a in variant.alternates) or "-"),
        ]
        if model.data_field is not None:
            row.append(Text(variant.data_expr or "-"))
        table.add_row(*row)

    console.print(table)
    return 0


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _expand_inputs(names: list[str], suffix: str) -> list[Path] | None:
    """Replace each directory argument by the `suffix` files directly inside it."""
    paths: list[Path] = []
    for name in names:
        path = Path(name)
        if not path.is_dir():
            paths.append(path)
            continue
        found = sorted(p for p in path.glob(f"*{suffix}") if p.is_file())
        if not found:
            err_console.print(f"Error: No {suffix} files in {path}", style="red", markup=False)
            return None
        paths.extend(found)
    return paths


def _read_source(path: Path) -> str | None:
    if not path.exists():
        err_console.print(f"Error: File not found: {path}", style="red", markup=False)
        return None
    try:
        return path.read_text(encoding=get_config().encoding)
    except (OSError, UnicodeDecodeError) as exc:
        err_console.print(f"Error: Cannot read {path}: {exc}", style="red", markup=False)
        return None


def _report_error(path: Path, exc: GenerationError) -> None:
    if isinstance(exc, DslSyntaxError):
        location = f"{path}:{exc.line}:{exc.column}"
        kind = "syntax error"
    elif isinstance(exc, ValidationError):
        location = f"{path}:{exc.line}" if exc.line else str(path)
        kind = f"validation error [{exc.invariant.value}]"
    else:
        location = str(path)
        kind = "error"
    message = getattr(exc, "message", str(exc))
    err_console.print(Text.assemble((kind, "red"), f" {location}: {message}"))


def _output_path(
    source_path: Path, output: str | None, out_dir: str | None, suffix: str
) -> Path:
    if output:
        return Path(output)
    name = source_path.stem + suffix
    if out_dir:
        return Path(out_dir) / name
    return source_path.with_name(name)


def _write_atomic(path: Path, text: str, encoding: str) -> None:
    """Write through a temp file so a failed run never leaves partial output."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        tmp_path.write_text(text, encoding=encoding)
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    dispatch = {
        "generate": cmd_generate,
        "check": cmd_check,
    }

    if args.command in dispatch:
        return dispatch[args.command](args)
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
