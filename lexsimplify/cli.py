"""Command-line interface for the lexical simplifier."""

import logging
import random
from pathlib import Path
from typing import Optional, Sequence

import click
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.text import Text

from . import __version__
from .config import LOG_LEVELS, ConfigManager, SimplifierSettings
from .embedding.database import WordDatabase
from .engine.configuration import SelectionPolicy
from .engine.errors import ConfigurationError, DataLoadError
from .engine.substitution import SubstitutionEngine
from .metrics.similarity import list_names, lookup
from .utils.logging_setup import setup_logging, log_operation

logger = logging.getLogger(__name__)

console = Console()

POLICY_CHOICES = [policy.value for policy in SelectionPolicy]


def engine_options(func):
    """Options shared by every command that runs the engine."""
    options = [
        click.option("--embeddings", "-e", type=click.Path(), help="Word embedding file"),
        click.option("--common-words", "-w", type=click.Path(), help="Common words file (one per line)"),
        click.option("--metric", "-m", "metrics", multiple=True,
                     help="Similarity metric, repeatable (default: cosine)"),
        click.option("--policy", "-p", type=click.Choice(POLICY_CHOICES, case_sensitive=False),
                     help="Replacement policy"),
        click.option("--seed", type=int, help="Seed for the random policy"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _apply_overrides(settings: SimplifierSettings,
                     embeddings: Optional[str],
                     common_words: Optional[str],
                     metrics: Sequence[str],
                     policy: Optional[str],
                     seed: Optional[int]) -> SimplifierSettings:
    if embeddings:
        settings.embeddings_path = embeddings
    if common_words:
        settings.common_words_path = common_words
    if metrics:
        settings.metrics = list(metrics)
    if policy:
        settings.policy = policy
    if seed is not None:
        settings.seed = seed
    return settings


def _load_database(settings: SimplifierSettings) -> WordDatabase:
    missing = settings.missing_paths()
    if missing:
        raise ConfigurationError(
            f"Required file paths are not set: {', '.join(missing)}",
            setting=missing[0],
        )

    database = WordDatabase()
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Loading word embeddings...", total=None)
        vectors = database.load_embeddings(settings.embeddings_path)
        progress.update(task, description="Loading common words...")
        words = database.load_common_words(settings.common_words_path)

    console.print(f"[green]Loaded {vectors.loaded} word embeddings[/green]"
                  + (f" [yellow]({vectors.skipped} malformed lines skipped)[/yellow]" if vectors.skipped else ""))
    console.print(f"[green]Loaded {words.loaded} common words[/green]")
    return database


def _build_engine(ctx: click.Context, **overrides) -> SubstitutionEngine:
    settings = _apply_overrides(ctx.obj["manager"].load(), **overrides)
    issues = settings.validate()
    if issues:
        raise ConfigurationError("; ".join(issues))
    _warn_unknown_metrics(settings)

    database = _load_database(settings)
    config = settings.to_replacement_configuration()
    rng = random.Random(settings.seed) if settings.seed is not None else None

    metric_names = ", ".join(metric.name for metric in config.metrics)
    console.print(f"[cyan]Metrics:[/cyan] {metric_names}  [cyan]Policy:[/cyan] {config.policy.label}")
    return SubstitutionEngine(database, config, rng=rng)


def _warn_unknown_metrics(settings: SimplifierSettings) -> None:
    unknown = settings.unknown_metrics()
    if unknown:
        console.print(f"[yellow]Ignoring unknown metrics: {', '.join(unknown)}[/yellow]")


def _append_output(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(text + "\n")
    console.print(f"[green]Simplified text saved to: {path}[/green]")


def _fail(ctx: click.Context, message: str) -> None:
    console.print(f"[red]✗ {message}[/red]")
    ctx.exit(1)


@click.group(name="lexsimplify")
@click.version_option(__version__, prog_name="lexsimplify")
@click.option("--config", "-c", "config_path", type=click.Path(dir_okay=False),
              help="Settings file (default: search for .lexsimplify.yml)")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--log-dir", type=click.Path(file_okay=False), help="Also write JSON logs to this directory")
@click.pass_context
def cli(ctx, config_path, verbose, log_dir):
    """Replace uncommon words with similar common words using word embeddings."""
    ctx.ensure_object(dict)
    manager = ConfigManager(Path(config_path) if config_path else None, console=console)
    ctx.obj["manager"] = manager

    try:
        settings = manager.load()
    except (ConfigurationError, FileNotFoundError, yaml.YAMLError) as e:
        _fail(ctx, str(e))
        return

    level = str(settings.log_level).upper()
    if verbose:
        level = "DEBUG"
    elif level not in LOG_LEVELS:
        level = "WARNING"
    setup_logging("lexsimplify", level=level,
                  log_dir=Path(log_dir) if log_dir else None, file=bool(log_dir))


@cli.command(name="simplify")
@click.argument("text", required=False)
@engine_options
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Append the result to this file")
@click.option("--save", is_flag=True, help="Append the result to the configured output file")
@click.pass_context
def simplify_command(ctx, text, embeddings, common_words, metrics, policy, seed, output, save):
    """Simplify TEXT (prompts for it when omitted)."""
    log_operation(logger, "simplify")
    try:
        engine = _build_engine(ctx, embeddings=embeddings, common_words=common_words,
                               metrics=metrics, policy=policy, seed=seed)
    except (ConfigurationError, DataLoadError) as e:
        _fail(ctx, e.message)
        return

    if text is None:
        text = click.prompt("Please enter text to simplify")

    simplified = engine.simplify(text)
    console.print(Panel(Text(simplified), title="[bold]Simplified Text[/bold]", border_style="green"))

    target = output or (ctx.obj["manager"].load().output_path if save else None)
    if target:
        _append_output(Path(target), simplified)


@cli.command(name="simplify-file")
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@engine_options
@click.option("--output", "-o", type=click.Path(dir_okay=False),
              help="Append results to this file (default: configured output file)")
@click.pass_context
def simplify_file_command(ctx, input_file, embeddings, common_words, metrics, policy, seed, output):
    """Simplify every line of INPUT_FILE."""
    log_operation(logger, "simplify_file", path=input_file)
    try:
        engine = _build_engine(ctx, embeddings=embeddings, common_words=common_words,
                               metrics=metrics, policy=policy, seed=seed)
    except (ConfigurationError, DataLoadError) as e:
        _fail(ctx, e.message)
        return

    lines = Path(input_file).read_text(encoding="utf-8").splitlines()
    results = [engine.simplify(line) for line in lines]
    console.print(Panel(Text("\n".join(results)), title="[bold]Simplified Text[/bold]", border_style="green"))

    target = Path(output or ctx.obj["manager"].load().output_path)
    _append_output(target, "\n".join(results))


@cli.command(name="explain")
@click.argument("word")
@engine_options
@click.pass_context
def explain_command(ctx, word, embeddings, common_words, metrics, policy, seed):
    """Show how WORD would be replaced."""
    try:
        engine = _build_engine(ctx, embeddings=embeddings, common_words=common_words,
                               metrics=metrics, policy=policy, seed=seed)
    except (ConfigurationError, DataLoadError) as e:
        _fail(ctx, e.message)
        return

    record = engine.explain_word(word)

    table = Table(title=f"Replacement for '{word}'")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    for key, value in record.to_dict().items():
        if isinstance(value, float):
            value = f"{value:.6f}"
        table.add_row(key.replace("_", " "), "-" if value is None else str(value))
    console.print(table)


@cli.command(name="metrics")
def metrics_command():
    """List the available similarity metrics."""
    table = Table(title="Similarity Metrics")
    table.add_column("Name", style="cyan")
    table.add_column("Metric")
    table.add_column("More similar when", style="green")

    for name in list_names():
        metric = lookup(name)
        table.add_row(name, metric.name, "higher" if metric.higher_is_better else "lower")
    console.print(table)


@cli.group(name="config")
def config_group():
    """Manage the settings file."""
    pass


@config_group.command(name="init")
@click.option("--force", is_flag=True, help="Overwrite an existing file")
@click.pass_context
def config_init(ctx, force):
    """Write a default settings file."""
    manager = ctx.obj["manager"]
    if manager.path.exists() and not force:
        if not click.confirm(f"Config file {manager.path} already exists. Overwrite?"):
            console.print("[yellow]Aborted[/yellow]")
            return

    path = manager.save(SimplifierSettings())
    console.print(f"[green]✓ Created config file at {path}[/green]")


@config_group.command(name="show")
@click.pass_context
def config_show(ctx):
    """Display the current configuration."""
    manager = ctx.obj["manager"]
    settings = manager.load()
    manager.display(settings)

    issues = settings.validate()
    for issue in issues:
        console.print(f"[yellow]• {issue}[/yellow]")
    if not any(issue.startswith("unknown metrics") for issue in issues):
        _warn_unknown_metrics(settings)
    for name in settings.missing_paths():
        console.print(f"[yellow]• {name} is not set[/yellow]")


@config_group.command(name="set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def config_set(ctx, key, value):
    """Set KEY to VALUE in the settings file."""
    # Fresh manager so environment overrides are not written to the file
    manager = ConfigManager(ctx.obj["manager"].config_path, console=console)
    manager.load(use_environment=False)

    try:
        if key == "metrics":
            parsed = [part.strip() for part in value.split(",") if part.strip()]
        elif key == "seed":
            parsed = None if value.lower() in ("", "none") else int(value)
        elif key == "policy":
            parsed = SelectionPolicy.parse(value).value
        else:
            parsed = value
        settings = manager.update(**{key: parsed})
    except ValueError as e:
        _fail(ctx, f"Invalid value for {key}: {e}")
        return
    except ConfigurationError as e:
        _fail(ctx, e.message)
        return

    issues = settings.validate()
    if issues:
        _fail(ctx, "; ".join(issues))
        return

    manager.save(settings)
    console.print(f"[green]✓ Set {key} = {parsed}[/green]")
    _warn_unknown_metrics(settings)


@config_group.command(name="reset")
@click.pass_context
def config_reset(ctx):
    """Reset the settings file to defaults."""
    manager = ctx.obj["manager"]
    manager.save(manager.reset())
    console.print("[yellow]Configuration reset to default.[/yellow]")


def main():
    """Console script entry point."""
    cli(prog_name="lexsimplify")


if __name__ == "__main__":
    main()
