"""CLI interface using Typer."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, NoReturn, Optional, Sequence

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from wellplan.config import get_settings
from wellplan.config.settings import OUTPUT_FORMATS, Settings, default_config_path
from wellplan.db import DatabaseConnection, SQLiteProfileStore
from wellplan.errors import PersistenceError, UnavailableInputError, WellplanError
from wellplan.export.formatters import TableFormatter, format_plans
from wellplan.meals.allocator import meal_plan_to_dict, synthesize_meal_plan
from wellplan.plans import (
    bundle_to_dict,
    generate_and_save,
    generate_plans,
    load_questionnaire_file,
)
from wellplan.profiles.body_calc import estimate_body_composition, estimate_to_dict
from wellplan.quiz.models import QuestionnaireResponse
from wellplan.quiz.need_tags import derive_need_tags
from wellplan.supplements.catalog import (
    DEFAULT_CATALOG,
    SupplementCatalogEntry,
    dump_catalog,
    entry_to_dict,
    load_catalog,
)
from wellplan.supplements.recommender import recommend_supplements, recommendation_to_dict
from wellplan.training.selector import synthesize_training_plan, training_plan_to_dict

app = typer.Typer(
    help="Derive body composition, meal, training and supplement plans from a wellness quiz",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)

# Subcommand groups
catalog_app = typer.Typer(help="Inspect and export the supplement catalog")
config_app = typer.Typer(help="Show or create the configuration file")

app.add_typer(catalog_app, name="catalog")
app.add_typer(config_app, name="config")


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: dict) -> None:
    """Output JSON response to stdout."""
    print(json.dumps(response, indent=2, ensure_ascii=False))


def fail(command: str, message: str, json_output: bool = False) -> NoReturn:
    """Report an error and exit with status 1."""
    if json_output:
        output_json({"success": False, "command": command, "errors": [message]})
    else:
        console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(1)


def configure_logging(level: str) -> None:
    """Send log records to stderr through Rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def load_quiz(path: Path, command: str, json_output: bool = False) -> QuestionnaireResponse:
    """Load a questionnaire file or exit with a readable error."""
    try:
        return load_questionnaire_file(path)
    except UnavailableInputError as e:
        fail(command, str(e), json_output)
    except WellplanError as e:
        fail(command, f"Invalid questionnaire: {e}", json_output)


def resolve_catalog(
    catalog_path: Optional[Path],
    settings: Settings,
    command: str,
    json_output: bool = False,
) -> Sequence[SupplementCatalogEntry]:
    """Pick the supplement catalog: --catalog, then settings, then built-in."""
    path = catalog_path or settings.catalog.path
    if path is None:
        logger.debug("Using built-in supplement catalog")
        return DEFAULT_CATALOG
    logger.debug("Using supplement catalog %s", path)
    try:
        return load_catalog(path)
    except WellplanError as e:
        fail(command, f"Could not load supplement catalog: {e}", json_output)


def open_store(db_path: Optional[Path], settings: Settings) -> SQLiteProfileStore:
    """Open the SQLite profile store (--db or the configured path)."""
    return SQLiteProfileStore(DatabaseConnection(db_path or settings.database.path))


# ============================================================================
# Main commands
# ============================================================================


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show debug logging"
    ),
) -> None:
    """Configure logging from settings before any command."""
    try:
        settings = get_settings()
    except (ValueError, OSError) as e:
        err_console.print(f"[red]Error: invalid configuration: {e}[/red]")
        raise typer.Exit(1)
    configure_logging("DEBUG" if verbose else settings.logging.level)


@app.command()
def generate(
    quiz_file: Path = typer.Argument(..., help="Questionnaire answers (JSON or YAML)"),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format: table, json, markdown"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output as JSON with agent-friendly envelope"
    ),
    save: bool = typer.Option(False, "--save", help="Save plans to the profile store"),
    user_id: Optional[str] = typer.Option(None, "--user", "-u", help="User id for --save"),
    db_path: Optional[Path] = typer.Option(None, "--db", help="Custom database path"),
    catalog_path: Optional[Path] = typer.Option(
        None, "--catalog", help="Supplement catalog YAML file"
    ),
) -> None:
    """Generate all plans from a questionnaire file."""
    settings = get_settings()
    output_format = output_format or settings.defaults.output_format
    if output_format not in OUTPUT_FORMATS:
        fail("generate", f"Unknown output format: {output_format}", json_output)
    if save and not user_id:
        fail("generate", "--save requires --user", json_output)

    response = load_quiz(quiz_file, "generate", json_output)
    catalog = resolve_catalog(catalog_path, settings, "generate", json_output)
    limit = settings.catalog.max_recommendations

    save_error: Optional[PersistenceError] = None
    try:
        if save:
            try:
                store = open_store(db_path, settings)
            except PersistenceError as e:
                bundle = generate_plans(response, catalog, limit)
                save_error = e
            else:
                outcome = asyncio.run(
                    generate_and_save(response, user_id, store, catalog, limit)
                )
                bundle = outcome.bundle
                save_error = outcome.error
        else:
            bundle = generate_plans(response, catalog, limit)
    except WellplanError as e:
        fail("generate", str(e), json_output)

    data = bundle_to_dict(bundle)

    if json_output:
        envelope: dict[str, Any] = {
            "success": save_error is None,
            "command": "generate",
            "data": data,
            "saved": save and save_error is None,
            "human_summary": (
                f"{len(bundle.supplement_recommendations)} supplement recommendations, "
                f"{len(bundle.training_plan.workouts) if bundle.training_plan else 0} workouts"
            ),
        }
        if save_error is not None:
            envelope["errors"] = [str(save_error)]
        output_json(envelope)
    else:
        text = format_plans(data, output_format, user_id=user_id, console=console)
        if text is not None:
            print(text)
        if save and save_error is None:
            console.print(f"[green]Saved plans for user {user_id}[/green]")

    if save_error is not None:
        if not json_output:
            console.print(f"[red]Error: plans were generated but not saved: {save_error}[/red]")
        raise typer.Exit(1)


@app.command()
def body(
    quiz_file: Path = typer.Argument(..., help="Questionnaire answers (JSON or YAML)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the body composition estimate and macro targets."""
    response = load_quiz(quiz_file, "body", json_output)
    try:
        estimate = estimate_body_composition(response)
    except WellplanError as e:
        fail("body", str(e), json_output)

    data = estimate_to_dict(estimate) if estimate is not None else None
    if json_output:
        output_json({
            "success": True,
            "command": "body",
            "data": data,
            "human_summary": estimate.summary() if estimate is not None else None,
        })
    elif data is None:
        console.print("[dim]No body composition available[/dim]")
    else:
        TableFormatter(console).format_body(data)


@app.command()
def meals(
    quiz_file: Path = typer.Argument(..., help="Questionnaire answers (JSON or YAML)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the meal-plan skeleton."""
    response = load_quiz(quiz_file, "meals", json_output)
    try:
        plan = synthesize_meal_plan(
            estimate_body_composition(response),
            response.dietary_preference,
            response.meal_frequency,
            response.food_allergies,
        )
    except WellplanError as e:
        fail("meals", str(e), json_output)

    data = meal_plan_to_dict(plan) if plan is not None else None
    if json_output:
        output_json({"success": True, "command": "meals", "data": data})
    elif data is None:
        console.print("[dim]No meal plan available[/dim]")
    else:
        TableFormatter(console).format_meals(data)


@app.command()
def training(
    quiz_file: Path = typer.Argument(..., help="Questionnaire answers (JSON or YAML)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the weekly training plan."""
    response = load_quiz(quiz_file, "training", json_output)
    try:
        plan = synthesize_training_plan(response)
    except WellplanError as e:
        fail("training", str(e), json_output)

    data = training_plan_to_dict(plan) if plan is not None else None
    if json_output:
        output_json({"success": True, "command": "training", "data": data})
    elif data is None:
        console.print("[dim]No training plan available[/dim]")
    else:
        TableFormatter(console).format_training(data)


@app.command()
def supplements(
    quiz_file: Path = typer.Argument(..., help="Questionnaire answers (JSON or YAML)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    catalog_path: Optional[Path] = typer.Option(
        None, "--catalog", help="Supplement catalog YAML file"
    ),
) -> None:
    """Show ranked supplement recommendations."""
    settings = get_settings()
    response = load_quiz(quiz_file, "supplements", json_output)
    catalog = resolve_catalog(catalog_path, settings, "supplements", json_output)

    need_tags = derive_need_tags(response)
    recommendations = recommend_supplements(
        need_tags, catalog=catalog, limit=settings.catalog.max_recommendations
    )
    data = [recommendation_to_dict(r) for r in recommendations]

    if json_output:
        output_json({
            "success": True,
            "command": "supplements",
            "data": data,
            "need_tags": sorted(need_tags),
        })
    elif not data:
        console.print("[dim]No matching supplements[/dim]")
    else:
        TableFormatter(console).format_supplements(data)
        console.print(f"[dim]Need tags: {', '.join(sorted(need_tags))}[/dim]")



@app.command()
def show(
    user_id: str = typer.Argument(..., help="User id whose saved plans to show"),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format: table, json, markdown"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    db_path: Optional[Path] = typer.Option(None, "--db", help="Custom database path"),
) -> None:
    """Show the most recently saved plans for a user."""
    settings = get_settings()
    output_format = output_format or settings.defaults.output_format
    if output_format not in OUTPUT_FORMATS:
        fail("show", f"Unknown output format: {output_format}", json_output)

    try:
        store = open_store(db_path, settings)
        data = asyncio.run(store.load_plans(user_id))
    except PersistenceError as e:
        fail("show", str(e), json_output)

    if data is None:
        fail("show", f"No saved plans for user {user_id}", json_output)

    if json_output:
        output_json({"success": True, "command": "show", "user_id": user_id, "data": data})
        return

    text = format_plans(data, output_format, user_id=user_id, console=console)
    if text is not None:
        print(text)


# ============================================================================
# Catalog commands
# ============================================================================


@catalog_app.command("list")
def catalog_list(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    catalog_path: Optional[Path] = typer.Option(
        None, "--catalog", help="Supplement catalog YAML file"
    ),
) -> None:
    """List supplement catalog entries and their tags."""
    catalog = resolve_catalog(catalog_path, get_settings(), "catalog list", json_output)

    if json_output:
        output_json({
            "success": True,
            "command": "catalog list",
            "data": [entry_to_dict(e) for e in catalog],
            "human_summary": f"{len(catalog)} supplements",
        })
        return

    table = Table(title="Supplement Catalog")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Tags", style="blue")

    for entry in catalog:
        table.add_row(entry.id, entry.name, ", ".join(entry.tags))

    console.print(table)
    console.print(f"[dim]{len(catalog)} supplements[/dim]")


@catalog_app.command("export")
def catalog_export(
    path: Path = typer.Argument(..., help="Destination YAML file"),
) -> None:
    """Write the built-in catalog to a YAML file for editing."""
    dump_catalog(DEFAULT_CATALOG, path)
    console.print(f"[green]Wrote {len(DEFAULT_CATALOG)} supplements to {path}[/green]")
    console.print("Use it with: [cyan]wellplan generate QUIZ --catalog <file>[/cyan]")


# ============================================================================
# Config commands
# ============================================================================


@config_app.command("show")
def config_show(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the active settings."""
    data = get_settings().to_dict()

    if json_output:
        output_json({"success": True, "command": "config show", "data": data})
        return

    table = Table(title="Settings")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for section, values in data.items():
        for key, value in values.items():
            table.add_row(f"{section}.{key}", "" if value is None else str(value))
    console.print(table)


@config_app.command("init")
def config_init(
    path: Optional[Path] = typer.Option(None, "--path", help="Config file location"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write a config file with default settings."""
    config_path = path or default_config_path()
    if config_path.exists() and not force:
        fail("config init", f"{config_path} already exists (use --force to overwrite)")

    Settings().save(config_path)
    console.print(f"[green]Wrote default settings to {config_path}[/green]")


if __name__ == "__main__":
    app()
