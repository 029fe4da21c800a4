"""Entry point for scmfilter CLI."""

import json
import logging
from pathlib import Path

import rich_click as click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from scmfilter.core.config import OUTPUT_FORMATS, Config, ConfigError, ConfigLoader
from scmfilter.core.context import SourceContext
from scmfilter.core.filter import InvalidPatternError, OriginRegexFilter
from scmfilter.core.plugin import PluginError, PluginManager
from scmfilter.core.trait import TraitError
from scmfilter.models.head import HeadParseError, SCMHead, SCMSource, parse_heads
from scmfilter.models.trait_def import TraitConfig

click.rich_click.TEXT_MARKUP = "rich"
click.rich_click.SHOW_ARGUMENTS = True

logger = logging.getLogger("scmfilter")


def _configure_logging(verbose: bool) -> None:
    """Send scmfilter log records to stderr through rich."""
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def _get_plugin_manager() -> PluginManager:
    """Create the plugin manager with entry point and built-in plugins."""
    manager = PluginManager()
    manager.discover()
    return manager


def _load_config(config_path: str | None) -> Config:
    """Load the explicit config file, or merge the discovered ones."""
    loader = ConfigLoader()
    if config_path:
        return loader.load(Path(config_path))
    return loader.load_merged()


def _read_heads(heads_file: str) -> list[SCMHead]:
    """Read JSON lines heads from a file, or from stdin for "-".

    Raises:
        HeadParseError: If the input is not UTF-8 or not valid heads.
    """
    try:
        if heads_file == "-":
            text = click.get_text_stream("stdin", encoding="utf-8").read()
        else:
            text = Path(heads_file).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        name = "stdin" if heads_file == "-" else heads_file
        raise HeadParseError(f"{name} is not valid UTF-8: {e.reason}") from e
    return parse_heads(text)


def _print_results(
    console: Console,
    results: list[tuple[SCMHead, bool]],
    output_format: str,
    show_excluded: bool,
) -> None:
    """Print filtering results in the requested format."""
    if output_format == "count":
        excluded = sum(1 for _, is_excluded in results if is_excluded)
        console.print(f"{len(results) - excluded} kept, {excluded} excluded")
        return

    for head, is_excluded in results:
        if is_excluded and not show_excluded:
            continue
        if output_format == "json":
            record = {
                "name": head.name,
                "kind": getattr(head, "kind", None),
                "excluded": is_excluded,
            }
            click.echo(json.dumps(record))
        elif is_excluded:
            console.print(f"[dim]{escape(head.name)} (excluded)[/dim]")
        else:
            console.print(escape(head.name))


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument(
    "heads_file",
    required=False,
    type=click.Path(exists=True, dir_okay=False, allow_dash=True),
)
@click.option("--version", is_flag=True, help="Show version and exit.")
@click.option(
    "--list-traits",
    is_flag=True,
    help="List all available traits and exit."
)
@click.option(
    "--check-regex",
    type=str,
    help="Validate a regular expression and exit."
)
@click.option(
    "--regex",
    "pr_origin_regex",
    type=str,
    help="Exclude change requests whose origin branch does not fully match this regex."
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Configuration file (default: discover scmfilter.toml files)."
)
@click.option(
    "--source",
    "source_id",
    type=str,
    default="default",
    help="Identifier of the source the heads were discovered in."
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    default=None,
    help="Output format: text, json (JSONL), or count (summary)."
)
@click.option(
    "--show-excluded",
    is_flag=True,
    help="Also list excluded heads."
)
@click.option("-v", "--verbose", is_flag=True, help="Log filtering decisions.")
@click.pass_context
def cli(
    ctx: click.Context,
    heads_file: str | None,
    version: bool,
    list_traits: bool,
    check_regex: str | None,
    pr_origin_regex: str | None,
    config_path: str | None,
    source_id: str,
    output_format: str | None,
    show_excluded: bool,
    verbose: bool,
) -> None:
    """scmfilter - prefilter SCM heads before indexing.

    Reads heads as JSON lines from HEADS_FILE (or - for stdin) and prints
    those that survive the configured traits.
    """
    console = Console()
    _configure_logging(verbose)

    if version:
        from scmfilter import __version__
        click.echo(f"scmfilter {__version__}")
        return

    if check_regex is not None:
        result = OriginRegexFilter.validate(check_regex)
        if result.kind == "error":
            console.print(f"[red]Error:[/red] {escape(result.message)}")
            ctx.exit(1)
        console.print("[green]OK[/green]")
        return

    try:
        manager = _get_plugin_manager()
    except PluginError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        ctx.exit(1)

    if list_traits:
        try:
            descriptors = manager.get_descriptors()
        except PluginError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            ctx.exit(1)

        if not descriptors:
            console.print("[yellow]No traits found.[/yellow]")
            return

        table = Table(title="Available Traits")
        table.add_column("Symbol", style="cyan", no_wrap=True)
        table.add_column("Name")
        for symbol in sorted(descriptors):
            table.add_row(symbol, descriptors[symbol].display_name)
        console.print(table)
        return

    if heads_file is None:
        click.echo(ctx.get_help())
        return

    try:
        config = _load_config(config_path)
    except (ConfigError, FileNotFoundError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        ctx.exit(1)

    trait_configs = list(config.traits)
    if pr_origin_regex is not None:
        trait_configs.append(
            TraitConfig(
                symbol="RegexSCMPROriginFilter",
                options={"pr_origin_regex": pr_origin_regex},
            )
        )

    try:
        traits = manager.create_traits(trait_configs)
        heads = _read_heads(heads_file)
    except (PluginError, TraitError, HeadParseError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        ctx.exit(1)

    source = SCMSource(id=source_id)
    context = SourceContext().apply(traits)
    try:
        results = [(head, context.is_excluded(source, head)) for head in heads]
    except InvalidPatternError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        ctx.exit(1)

    if output_format is None:
        output_format = config.general.output_format
    show_excluded = show_excluded or config.general.show_excluded

    _print_results(console, results, output_format.lower(), show_excluded)


if __name__ == "__main__":
    cli()
