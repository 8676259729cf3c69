"""
Command line interface for obj-for-dto.

Runs a generator for one class and writes the rendered artifacts, or lists
the registered target languages.
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .core.config import ConfigError, GeneratorConfig, get_config_manager, load_config
from .core.generator import GenerationResult, generate_code
from .logging_config import get_logger, setup_logging
from .registry import (
    RegistryError,
    get_generator,
    get_language_info,
    get_registry,
    list_all_language_info,
)

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()

SYNTAX_LEXERS = {
    ".ts": "typescript",
    ".py": "python",
}


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with its subcommands."""
    parser = argparse.ArgumentParser(
        prog="obj-for-dto",
        description="Generate DTO interfaces, JSON factories and test fixtures "
        "from a compact property specification",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  obj-for-dto generate Employee "name,age:n,active:b?,tags:s[]"
  obj-for-dto generate Team "name,lead:Employee,members:Employee[]" -o src/app
  obj-for-dto generate employee "name,manager:e?" -l py --alias e=Employee
  obj-for-dto languages
        """.strip(),
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: OBJ_FOR_DTO_LOG_LEVEL or WARNING)",
    )
    parser.add_argument("--log-file", metavar="FILE", help="Also write logs to FILE")

    subparsers = parser.add_subparsers(dest="command")

    generate = subparsers.add_parser(
        "generate",
        help="Generate the artifacts for one class",
        description="Generate interface, DTO type, factory and test skeleton",
    )
    generate.add_argument("name", help="Class name (any case, e.g. employee-record)")
    generate.add_argument(
        "specification",
        help="Property specification, e.g. 'name,age:n,active:b?,tags:s[]'",
    )
    generate.add_argument(
        "--language", "-l", default="typescript", help="Target language (default: typescript)"
    )
    generate.add_argument(
        "--output", "-o", metavar="DIR", help="Output directory (default: current directory)"
    )
    generate.add_argument("--config", metavar="FILE", help="JSON configuration file")
    generate.add_argument(
        "--alias",
        action="append",
        default=[],
        metavar="CODE=TYPE",
        help="Map a short type code to a custom type (repeatable)",
    )
    generate.add_argument(
        "--sort", action="store_true", help="Emit properties sorted by name"
    )
    generate.add_argument(
        "--no-tests", action="store_true", help="Don't generate the test file"
    )
    generate.add_argument(
        "--no-comments", action="store_true", help="Don't add the header comment"
    )
    layout = generate.add_mutually_exclusive_group()
    layout.add_argument(
        "--flat",
        dest="flat",
        action="store_true",
        default=None,
        help="Write files directly into the output directory",
    )
    layout.add_argument(
        "--nested",
        dest="flat",
        action="store_false",
        help="Write files into a sub-directory named after the class",
    )
    generate.add_argument(
        "--search-depth",
        type=int,
        metavar="N",
        help="Maximum number of parent directories searched for imports",
    )
    generate.add_argument(
        "--dry-run", action="store_true", help="Print the files instead of writing them"
    )
    generate.add_argument(
        "--verbose", action="store_true", help="Show generation result metadata"
    )
    generate.set_defaults(func=_handle_generate)

    languages = subparsers.add_parser("languages", help="List supported target languages")
    languages.add_argument(
        "language", nargs="?", help="Show details and defaults for one language"
    )
    languages.set_defaults(func=_handle_languages)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point of the ``obj-for-dto`` command.

    Args:
        argv: Arguments without the program name, defaults to sys.argv

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_file)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except (CLIError, ConfigError, RegistryError) as e:
        logger.error("%s", e)
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1


def _handle_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    registry = get_registry()
    if not registry.is_supported(args.language):
        console.print(f"[red]✗ Unsupported language '{args.language}'[/red]")
        console.print(
            f"[dim]Supported languages: {', '.join(registry.list_languages())}[/dim]"
        )
        return 1

    language = registry.resolve_name(args.language)
    config = _build_config(args, language)

    for warning in get_config_manager().validate_config(config):
        console.print(f"[yellow]⚠️  Config:[/yellow] {warning}")

    output_dir = Path(args.output) if args.output else Path.cwd()
    return _generate_and_output(args, language, config, output_dir)


def parse_aliases(values: List[str]) -> Dict[str, str]:
    """Parse ``CODE=TYPE`` pairs from the command line."""
    aliases = {}
    for value in values:
        code, separator, type_name = value.partition("=")
        if not separator or not code.strip() or not type_name.strip():
            raise CLIError(f"Invalid alias '{value}', expected CODE=TYPE")
        aliases[code.strip()] = type_name.strip()
    return aliases


def _build_config(args: argparse.Namespace, language: str) -> GeneratorConfig:
    """Build configuration from the config file, language defaults and CLI arguments."""
    config_dict = {}

    if args.no_comments:
        config_dict["add_comments"] = False

    if args.sort:
        config_dict["sort_properties"] = True

    if args.no_tests:
        config_dict["generate_tests"] = False

    if args.flat is not None:
        config_dict["flat"] = args.flat

    if args.search_depth is not None:
        config_dict["search_depth"] = args.search_depth

    aliases = parse_aliases(args.alias)

    config = load_config(language, custom_config=config_dict, config_file=args.config)

    if aliases:
        config.type_aliases = {**config.type_aliases, **aliases}

    return config


def _generate_and_output(
    args: argparse.Namespace, language: str, config: GeneratorConfig, output_dir: Path
) -> int:
    """Generate code and handle output with rich formatting."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(f"[green]Generating {language} code...", total=None)
        generator = get_generator(language, config, output_dir)
        result = generate_code(generator, args.name, args.specification)
        progress.remove_task(task)

    if not result.success:
        logger.error("Generation of %s failed: %s", args.name, result.error_message)
        console.print(f"[red]✗[/red] {result.error_message}")
        return 1

    if args.dry_run:
        _print_files(result)
    else:
        written = _write_files(result.files, output_dir)
        if written is None:
            return 1

    # Show metadata if verbose
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

    # Show warnings with rich formatting
    if result.warnings:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]•[/yellow] {warning}")
        console.print()

    return 0


def _print_files(result: GenerationResult):
    """Display every rendered file with syntax highlighting."""
    for relative_path, text in result.files.items():
        lexer = SYNTAX_LEXERS.get(Path(relative_path).suffix, "text")
        console.print()
        console.print(
            Panel(
                Syntax(text, lexer, theme="monokai"),
                title=f"📄 {relative_path}",
                border_style="green",
            )
        )


def _write_files(files: Dict[str, str], output_dir: Path) -> Optional[List[Path]]:
    """Write rendered files below ``output_dir``. Returns None on failure."""
    written = []
    for relative_path, text in files.items():
        path = output_dir / relative_path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            logger.error("Failed to write %s: %s", path, e)
            console.print(f"[red]✗ Failed to write {path}:[/red] {e}")
            return None

        logger.info("Wrote %s", path)
        console.print(f"[green]✓[/green] Wrote [cyan]{path}[/cyan]")
        written.append(path)
    return written


def _handle_languages(args: argparse.Namespace) -> int:
    """Handle the languages subcommand."""
    if args.language:
        return _show_language_info(args.language)
    return _list_languages()


def _list_languages() -> int:
    """List supported languages with details."""
    language_info = list_all_language_info()

    if not language_info:
        console.print("[yellow]⚠️ No code generators available[/yellow]")
        return 0

    table = Table(title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan")

    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for lang_name, info in sorted(language_info.items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(f"🔧 {lang_name}", info["file_extension"], info["class"], aliases)

    console.print()
    console.print(table)
    console.print()

    console.print(
        Panel(
            "[bold]Usage:[/bold] obj-for-dto generate [cyan]NAME[/cyan] "
            "[dim]'name,age:n'[/dim] -l [cyan]LANGUAGE[/cyan]\n"
            "[bold]Info:[/bold] obj-for-dto languages [cyan]LANGUAGE[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )

    return 0


def _show_language_info(language: str) -> int:
    """Show detailed information about a specific language."""
    if not get_registry().is_supported(language):
        console.print(f"[red]✗ Language '{language}' is not supported[/red]")
        console.print("[dim]Use 'obj-for-dto languages' to see available options[/dim]")
        return 1

    info = get_language_info(language)

    info_text = f"""[bold]Language:[/bold] {info['name']}
[bold]File Extension:[/bold] {info['file_extension']}
[bold]Generator Class:[/bold] {info['class']}
[bold]Module:[/bold] {info['module']}"""

    if info["aliases"]:
        info_text += f"\n[bold]Aliases:[/bold] {', '.join(info['aliases'])}"

    console.print()
    console.print(
        Panel(info_text, title=f"🔧 {info['name'].title()} Generator", border_style="green")
    )

    generator = get_generator(language)

    config_table = Table(
        title="⚙️  Default Configuration",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )

    config_table.add_column("Setting", style="bold")
    config_table.add_column("Value", style="green")

    config_table.add_row("Indent Size", str(generator.config.indent_size))
    config_table.add_row("Add Comments", str(generator.config.add_comments))
    config_table.add_row("Flat Layout", str(generator.config.flat))
    config_table.add_row("Presence Helper", str(generator.presence_helper_file))
    config_table.add_row("Test Helpers", str(generator.test_helpers_file))

    console.print()
    console.print(config_table)

    return 0


if __name__ == "__main__":
    sys.exit(main())
