"""
Command line interface for umlgen.

Provides the ``generate``, ``configure`` and ``languages`` commands.
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.syntax import Syntax
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from . import __version__
from .core.config import ConfigError, GeneratorConfig, load_config
from .core.errors import UserCancelled
from .core.filesystem import LocalFileSystem, MemoryFileSystem
from .core.generator import GenerationResult, generate_code
from .core.loader import LoadedModel, ModelLoadError, load_model
from .interactive import InteractiveHandler
from .logging_config import configure_logging, get_logger
from .registry import (
    RegistryError,
    get_generator,
    list_all_language_info,
    list_supported_languages,
)

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CANCELLED = 2

DEFAULT_CONFIG_FILE = "umlgen.json"


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="umlgen",
        description="Generate Gosu source code from a design model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  umlgen generate model.json --root Model.billing -o src
  umlgen generate model.json --dry-run --root Invoice
  umlgen configure --config umlgen.json
  umlgen languages
        """.strip(),
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    subparsers = parser.add_subparsers(dest="command")

    generate = subparsers.add_parser(
        "generate", help="Generate code for a model element"
    )
    generate.add_argument("model", help="JSON model file")
    generate.add_argument(
        "--output", "-o", metavar="DIR", help="Folder generated code is placed in"
    )
    generate.add_argument(
        "--root",
        metavar="NAME",
        help="Id, qualified name or unique name of the element to generate",
    )
    generate.add_argument(
        "--language", "-l", default="gosu", help="Target language (default: gosu)"
    )
    generate.add_argument("--config", metavar="FILE", help="JSON configuration file")

    style_group = generate.add_argument_group("generation options")
    style_group.add_argument(
        "--no-docs", action="store_true", help="Don't generate GosuDoc comments"
    )
    style_group.add_argument(
        "--tabs", action="store_true", help="Indent with tabs instead of spaces"
    )
    style_group.add_argument(
        "--indent", type=int, metavar="N", help="Number of spaces for indentation"
    )
    style_group.add_argument(
        "--author", metavar="NAME", help="Author added to class documentation"
    )
    generate.add_argument(
        "--dry-run",
        action="store_true",
        help="Print generated files instead of writing them",
    )
    generate.add_argument(
        "--verbose", action="store_true", help="Show debug logging and metadata"
    )
    generate.set_defaults(func=_handle_generate)

    configure = subparsers.add_parser(
        "configure", help="Edit generator preferences"
    )
    configure.add_argument(
        "--config",
        metavar="FILE",
        default=DEFAULT_CONFIG_FILE,
        help=f"Configuration file to write (default: {DEFAULT_CONFIG_FILE})",
    )
    configure.set_defaults(func=_handle_configure)

    languages = subparsers.add_parser("languages", help="List supported languages")
    languages.set_defaults(func=_handle_languages)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point of the ``umlgen`` command.

    Returns:
        0 on success, 1 on failure, 2 when the user cancelled
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(
        logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING
    )

    if not getattr(args, "func", None):
        parser.print_help()
        return EXIT_ERROR

    try:
        return args.func(args)
    except UserCancelled as e:
        console.print(f"[yellow]⚠️  Cancelled:[/yellow] {e}")
        return EXIT_CANCELLED
    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return EXIT_ERROR


def _handle_generate(args: argparse.Namespace) -> int:
    model = _load_model(args.model)
    config = _build_config(args, model)
    handler = InteractiveHandler(console)

    if args.root:
        root = model.find(args.root)
        if root is None:
            raise CLIError(f"Element '{args.root}' not found in {args.model}")

    try:
        if not args.root:
            root = handler.select_element(model.root)
        if args.dry_run:
            output_path = Path(args.output or ".")
        elif args.output:
            output_path = Path(args.output)
        else:
            output_path = handler.select_output_dir(config.output_dir)
    except UserCancelled as e:
        return _report(GenerationResult.cancel(str(e)), args, None)

    if args.dry_run:
        filesystem = MemoryFileSystem()
    else:
        if not output_path.is_dir():
            raise CLIError(f"Output folder does not exist: {output_path}")
        filesystem = LocalFileSystem()

    try:
        generator = get_generator(args.language, config, model.repository, filesystem)
    except RegistryError as e:
        raise CLIError(str(e))

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(f"[green]Generating {root.name}...", total=None)
        result = generate_code(generator, root, output_path)

    return _report(result, args, filesystem)


def _load_model(model_path: str) -> LoadedModel:
    try:
        return load_model(model_path)
    except FileNotFoundError as e:
        raise CLIError(str(e))
    except ModelLoadError as e:
        raise CLIError(f"Invalid model: {e}")


def _build_config(args: argparse.Namespace, model: LoadedModel) -> GeneratorConfig:
    """Build configuration from config file, CLI arguments and model author."""
    overrides: Dict[str, Any] = {}

    if args.no_docs:
        overrides["doc_comments"] = False
    if args.tabs:
        overrides["use_tabs"] = True
    if args.indent is not None:
        overrides["indent_size"] = args.indent
    if args.author:
        overrides["author"] = args.author

    try:
        config = load_config(
            args.language, custom_config=overrides, config_file=args.config
        )
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}")

    if not config.author and model.author:
        config.author = model.author
    return config


def _report(
    result: GenerationResult, args: argparse.Namespace, filesystem
) -> int:
    """Print the outcome of a run and turn it into an exit code."""
    if result.cancelled:
        console.print(f"[yellow]⚠️  {result.error_message}[/yellow]")
        return EXIT_CANCELLED

    if not result.success:
        console.print(f"[red]✗ Code generation failed:[/red] {result.error_message}")
        if result.files:
            console.print(
                f"[dim]{len(result.files)} file(s) were written before the failure[/dim]"
            )
        return EXIT_ERROR

    if args.dry_run:
        for path in result.files:
            console.print()
            console.print(
                Panel(
                    Syntax(filesystem.read_text(path), "java", theme="monokai"),
                    title=f"📄 {path}",
                    border_style="green",
                )
            )
    else:
        for path in result.files:
            console.print(f"[green]✓[/green] [cyan]{path}[/cyan]")

    console.print(
        f"\n[green]✓[/green] Generated {len(result.files)} file(s) "
        f"in {len(result.directories)} folder(s)"
    )

    if args.verbose and result.metadata:
        metadata_table = Table(
            title="📊 Generation Metadata",
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
        )
        metadata_table.add_column("Property", style="bold")
        metadata_table.add_column("Value", style="green")

        for key, value in result.metadata.items():
            metadata_table.add_row(key.replace("_", " ").title(), str(value))

        console.print()
        console.print(metadata_table)

    if result.warnings:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]•[/yellow] {warning}")

    return EXIT_OK


def _handle_configure(args: argparse.Namespace) -> int:
    try:
        InteractiveHandler(console).configure(Path(args.config))
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}")
    return EXIT_OK


def _handle_languages(args: argparse.Namespace) -> int:
    """List supported languages with details."""
    language_info = list_all_language_info()

    if not language_info:
        console.print("[yellow]⚠️ No code generators available[/yellow]")
        return EXIT_OK

    table = Table(
        title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan"
    )
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for lang_name, info in sorted(language_info.items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(f"🔧 {lang_name}", info["file_extension"], info["class"], aliases)

    console.print()
    console.print(table)
    console.print(
        Panel(
            "[bold]Usage:[/bold] umlgen generate [dim]model.json[/dim] "
            "--language [cyan]"
            + " | ".join(list_supported_languages())
            + "[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
