"""Output formatters for plan bundles.

All formatters take the JSON aggregate produced by ``bundle_to_dict`` (the
same shape the profile store keeps), so freshly generated and stored plans
render identically. Sections that are None or missing are skipped.
"""

from __future__ import annotations

import json
from typing import Any, Optional, Union

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

PlanData = dict[str, Any]


def _macro_rows(macros: dict[str, Any]) -> list[tuple[str, dict[str, Any]]]:
    return [(name, macros[name]) for name in ("protein", "carbs", "fat") if name in macros]


class TableFormatter:
    """Format plans as Rich tables for terminal display."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the formatter.

        Args:
            console: Rich console for output. If None, creates a new one.
        """
        self.console = console or Console()

    def format(self, data: PlanData, user_id: Optional[str] = None) -> None:
        """Print every available plan section to the console.

        Args:
            data: Plan aggregate from ``bundle_to_dict``
            user_id: Optional user id to show in the header
        """
        title = "Wellness Plan" + (f" for {user_id}" if user_id else "")

        body = data.get("bodyComposition")
        meals = data.get("mealPlan")
        training = data.get("trainingPlan")
        supplements = data.get("supplementRecommendations") or []

        if not (body or meals or training or supplements):
            self.console.print(Panel("[dim]No plans available[/dim]", title=title))
            return

        if body:
            self.format_body(body, title)
        if meals:
            self.format_meals(meals)
        if training:
            self.format_training(training)
        if supplements:
            self.format_supplements(supplements)

    def format_body(self, body: dict[str, Any], title: str = "Body Composition") -> None:
        """Print the body composition panel and macro table."""
        ideal = body.get("ideal_weight_range_kg") or {}
        lines = [
            f"BMI: [bold]{body['bmi']:.2f}[/bold] ({body['bmi_category']})",
            f"Body fat: {body['body_fat_pct']:.1f}% "
            f"(target {body['target_body_fat_pct']:.0f}%)",
            f"Lean mass: {body['lean_mass_kg']:.1f} kg | Fat mass: {body['fat_mass_kg']:.1f} kg",
            f"BMR: {body['bmr']} kcal | TDEE: {body['tdee']} kcal",
            f"Target: [bold green]{body['recommended_calories']} kcal/day[/bold green] "
            f"({body['calorie_adjustment']:+d})",
            f"Water: {body['water_intake_l']:.1f} L/day",
        ]
        if ideal:
            lines.append(f"Ideal weight: {ideal['min']:.1f}-{ideal['max']:.1f} kg")
        self.console.print(Panel("\n".join(lines), title=title))

        macro_table = Table(title="Daily Macros")
        macro_table.add_column("Macro", style="cyan")
        macro_table.add_column("%", justify="right")
        macro_table.add_column("Grams", justify="right")
        macro_table.add_column("kcal", justify="right")
        for name, target in _macro_rows(body.get("macro_split", {})):
            macro_table.add_row(
                name.title(),
                str(target["percentage"]),
                str(target["grams"]),
                str(target["calories"]),
            )
        self.console.print(macro_table)

    def format_meals(self, meals: dict[str, Any]) -> None:
        """Print the meal plan table."""
        table = Table(
            title=f"Meal Plan ({meals['diet_type']}, {meals['calories_per_day']} kcal)"
        )
        table.add_column("Meal", style="cyan")
        table.add_column("kcal", justify="right")
        table.add_column("Options")
        table.add_column("P/C/F (g)", justify="right", style="dim")

        for slot in meals.get("meal_slots", []):
            options = slot.get("options") or []
            if not options:
                table.add_row(slot["name"], str(slot["calories"]), "[dim]none[/dim]", "")
                continue
            for i, option in enumerate(options):
                table.add_row(
                    slot["name"] if i == 0 else "",
                    str(slot["calories"]) if i == 0 else "",
                    option["name"],
                    f"{option['protein_g']}/{option['carbs_g']}/{option['fat_g']}",
                )
        self.console.print(table)

    def format_training(self, training: dict[str, Any]) -> None:
        """Print the weekly training table."""
        table = Table(
            title=(
                f"Training Plan ({training['goal']}, {training['level']}, "
                f"{training['days_per_week']} days/week)"
            ),
            caption=f"{training['name']}: {training['description']}",
        )
        table.add_column("Day", style="cyan")
        table.add_column("Workout")
        table.add_column("Exercises")

        for workout in training.get("workouts", []):
            table.add_row(
                workout["day"],
                workout["name"],
                "\n".join(workout.get("exercises", [])),
            )
        self.console.print(table)

        if training.get("injury_note"):
            self.console.print(f"[yellow]{training['injury_note']}[/yellow]")

    def format_supplements(self, supplements: list[dict[str, Any]]) -> None:
        """Print the ranked supplement table."""
        table = Table(title="Supplement Recommendations")
        table.add_column("#", justify="right")
        table.add_column("Supplement", style="cyan")
        table.add_column("Score", justify="right")
        table.add_column("Why")

        for i, rec in enumerate(supplements, 1):
            entry = rec["entry"]
            table.add_row(str(i), entry["name"], str(rec["match_score"]), rec["rationale"])
        self.console.print(table)


class JSONFormatter:
    """Format plans as JSON for programmatic use."""

    def format(self, data: PlanData, user_id: Optional[str] = None) -> str:
        """Return JSON string.

        Args:
            data: Plan aggregate from ``bundle_to_dict``
            user_id: Optional user id, added as ``userId``

        Returns:
            JSON string
        """
        if user_id is not None:
            data = {"userId": user_id, **data}
        return json.dumps(data, indent=2, ensure_ascii=False)


class MarkdownFormatter:
    """Format plans as Markdown for sharing or documentation."""

    def format(self, data: PlanData, user_id: Optional[str] = None) -> str:
        """Return Markdown string.

        Args:
            data: Plan aggregate from ``bundle_to_dict``
            user_id: Optional user id to show in the title

        Returns:
            Markdown string
        """
        lines = ["# Wellness Plan" + (f" for {user_id}" if user_id else ""), ""]

        body = data.get("bodyComposition")
        if body:
            lines.extend(
                [
                    "## Body Composition",
                    "",
                    f"- **BMI:** {body['bmi']:.2f} ({body['bmi_category']})",
                    f"- **Body fat:** {body['body_fat_pct']:.1f}%",
                    f"- **BMR / TDEE:** {body['bmr']} / {body['tdee']} kcal",
                    f"- **Daily target:** {body['recommended_calories']} kcal",
                    f"- **Water:** {body['water_intake_l']:.1f} L",
                    "",
                    "| Macro | % | Grams | kcal |",
                    "|-------|---|-------|------|",
                ]
            )
            for name, target in _macro_rows(body.get("macro_split", {})):
                lines.append(
                    f"| {name.title()} | {target['percentage']} | "
                    f"{target['grams']}g | {target['calories']} |"
                )
            lines.append("")

        meals = data.get("mealPlan")
        if meals:
            lines.extend(
                [f"## Meal Plan ({meals['diet_type']}, {meals['calories_per_day']} kcal)", ""]
            )
            for slot in meals.get("meal_slots", []):
                lines.append(f"### {slot['name']} ({slot['calories']} kcal)")
                options = slot.get("options") or []
                if not options:
                    lines.append("- No options left after allergy filtering")
                for option in options:
                    lines.append(
                        f"- {option['name']} "
                        f"({option['protein_g']}g P / {option['carbs_g']}g C / "
                        f"{option['fat_g']}g F)"
                    )
                lines.append("")

        training = data.get("trainingPlan")
        if training:
            lines.extend(
                [
                    f"## Training Plan ({training['goal']}, {training['level']})",
                    "",
                    f"**{training['name']}**: {training['description']}",
                    "",
                    f"{training['days_per_week']} days/week, {training['location']}, "
                    f"{training['preferred_time']}",
                    "",
                ]
            )
            if training.get("injury_note"):
                lines.extend([f"> {training['injury_note']}", ""])
            for workout in training.get("workouts", []):
                lines.append(f"### {workout['day']}: {workout['name']}")
                for exercise in workout.get("exercises", []):
                    lines.append(f"- {exercise}")
                lines.append("")

        supplements = data.get("supplementRecommendations") or []
        if supplements:
            lines.extend(["## Supplements", ""])
            for i, rec in enumerate(supplements, 1):
                entry = rec["entry"]
                lines.append(f"{i}. [{entry['name']}]({entry['url']}): {rec['rationale']}")
            lines.append("")

        return "\n".join(lines)


Formatter = Union[TableFormatter, JSONFormatter, MarkdownFormatter]


def get_formatter(name: str, console: Optional[Console] = None) -> Formatter:
    """Get a formatter by output format name.

    Args:
        name: One of 'table', 'json', 'markdown'
        console: Rich console (for table format)

    Returns:
        Formatter instance

    Raises:
        ValueError: If the format is unknown
    """
    if name == "table":
        return TableFormatter(console)
    elif name == "json":
        return JSONFormatter()
    elif name == "markdown":
        return MarkdownFormatter()
    else:
        raise ValueError(f"Unknown output format: {name}")


def format_plans(
    data: PlanData,
    output_format: str = "table",
    user_id: Optional[str] = None,
    console: Optional[Console] = None,
) -> Optional[str]:
    """Format a plan aggregate in the specified format.

    Args:
        data: Plan aggregate from ``bundle_to_dict``
        output_format: One of 'table', 'json', 'markdown'
        user_id: Optional user id
        console: Rich console (for table format)

    Returns:
        Formatted string for json/markdown, None for table (prints directly)
    """
    formatter = get_formatter(output_format, console)
    return formatter.format(data, user_id)
