"""Rich terminal display for skymning."""

from __future__ import annotations

import calendar

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from skymning.periods import MOOD_LABELS, mood_label, week_mood_description

console = Console()

# Rich color per mood value, worst to best
MOOD_COLORS: dict[int, str] = {
    1: "medium_purple3",
    2: "slate_blue1",
    3: "deep_sky_blue1",
    4: "cyan",
    5: "spring_green2",
}

_TREND_STYLE: dict[str, tuple[str, str]] = {
    "improving": ("↗ Improving", "green"),
    "declining": ("↘ Declining", "magenta"),
    "stable": ("→ Stable", "cyan"),
}


def mood_color(average: float) -> str:
    """Map a (possibly fractional) mood to a Rich color name."""
    return MOOD_COLORS[max(1, min(5, round(average)))]


def format_average(average: float | None) -> str:
    """Format an average for display: 3.1666 -> '3.2', None -> '-'."""
    if average is None:
        return "-"
    return f"{average:.1f}"


def format_delta(delta: float | None) -> str:
    if delta is None:
        return ""
    sign = "+" if delta > 0 else ""
    return f"{sign}{delta:.1f}"


def _mood_bar(count: int, max_count: int, width: int = 20) -> str:
    """Render a distribution bar: [██████░░░░]."""
    if max_count <= 0:
        return "░" * width
    filled = int(count / max_count * width)
    if count > 0:
        filled = max(filled, 1)
    return "█" * filled + "░" * (width - filled)


def print_no_data_message() -> None:
    lines = [
        "",
        "  No entries yet.",
        "  Write your first one with:",
        "  [bold]skymning add --mood 4 --summary \"...\"[/]",
        "",
    ]
    panel = Panel(
        "\n".join(lines),
        title="[bold]Welcome to Skymning[/]",
        box=box.ROUNDED,
        border_style="grey50",
        width=50,
    )
    console.print(panel)


def print_error(message: str) -> None:
    console.print(f"[red]{message}[/]")


def print_entry_saved(entry: dict) -> None:
    mood = entry["mood"]
    color = MOOD_COLORS.get(mood, "white")
    lines = [
        "",
        f"  {entry['date']}: [bold {color}]{mood} - {mood_label(mood)}[/]",
        f"  {entry['summary']}",
        "",
    ]
    panel = Panel(
        "\n".join(lines),
        title="[bold]Entry Saved[/]",
        box=box.ROUNDED,
        border_style="green",
        width=50,
    )
    console.print(panel)


def print_summary_saved(title: str, summary: str) -> None:
    console.print(Panel(summary, title=f"[bold]{title}[/]", box=box.ROUNDED, border_style="green", width=70))


def print_entry_deleted(date: str, deleted: bool) -> None:
    if deleted:
        console.print(f"Deleted the entry for {date}.")
    else:
        console.print(f"[grey50]No entry for {date}.[/]")


def _insight_lines(insight: dict) -> list[str]:
    label, style = _TREND_STYLE[insight["trend"]]
    return [
        f"  [{style}]{label}[/]  (avg {format_average(insight['average'])},"
        f" {insight['entry_count']} entries)",
        f"  {insight['message']}",
    ]


def print_insight(insight: dict | None, days: int) -> None:
    if insight is None:
        console.print(f"[grey50]Not enough entries in the last {days} days for an insight.[/]")
        return
    panel = Panel(
        "\n".join(["", *_insight_lines(insight), ""]),
        title=f"[bold]Last {days} days[/]",
        box=box.ROUNDED,
        border_style=mood_color(insight["average"]),
        width=60,
    )
    console.print(panel)


def print_weekday_patterns(result: dict | None, days: int) -> None:
    if result is None:
        console.print(f"[grey50]Not enough entries in the last {days} days for weekday patterns.[/]")
        return

    table = Table(
        title=f"Weekday Patterns (last {days} days)",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold",
    )
    table.add_column("Day", style="bold")
    table.add_column("Average", justify="right")
    table.add_column("Entries", justify="right")
    table.add_column("", width=6)

    best = result["best_day"]["day_index"]
    worst = result["worst_day"]["day_index"]
    # Monday-first display order
    by_day = {p["day_index"]: p for p in result["patterns"]}
    for day_index in (1, 2, 3, 4, 5, 6, 0):
        pattern = by_day.get(day_index)
        if pattern is None:
            continue
        marker = "best" if day_index == best else "worst" if day_index == worst else ""
        table.add_row(
            pattern["day_name"],
            f"[{mood_color(pattern['average'])}]{format_average(pattern['average'])}[/]",
            str(pattern["count"]),
            marker,
        )
    console.print(table)


def print_dashboard(data: dict) -> None:
    """Print the main dashboard: today, streak, insight and recent mood."""
    today_entry = data.get("today_entry")
    streak = data.get("streak", {})
    recent = data.get("recent_mood")

    lines: list[str] = [""]
    if today_entry:
        mood = today_entry["mood"]
        lines.append(
            f"  Today: [bold {MOOD_COLORS.get(mood, 'white')}]{mood_label(mood)}[/]"
        )
    else:
        lines.append("  Today: [grey50]no entry yet[/]")
        if data.get("yesterday_entry") is None:
            lines.append(f"  [yellow]You missed yesterday ({data.get('yesterday')}). You can still fill it in.[/]")

    current = streak.get("current_streak", 0)
    if current > 0:
        days = "day" if current == 1 else "days"
        lines.append(f"  \U0001f525 Streak: {current} {days}  |  Longest: {streak.get('longest_streak', 0)}")
    else:
        lines.append("  No active streak")

    if recent:
        lines.append(
            f"  Last 7 days: {format_average(recent['average'])} - {recent['description']}"
        )

    insight = data.get("insight")
    if insight:
        lines.append("")
        lines.extend(_insight_lines(insight))

    last_week = data.get("last_week") or {}
    if last_week.get("summary"):
        lines.append("")
        lines.append(f"  [bold]Last week (W{last_week['week']}):[/]")
        lines.append(f"  {last_week['summary']}")

    lines.append("")
    panel = Panel(
        "\n".join(lines),
        title="[bold]SKYMNING[/]",
        box=box.ROUNDED,
        border_style=mood_color(recent["average"]) if recent else "grey50",
        width=70,
    )
    console.print(panel)

    trend = data.get("mood_trend") or []
    if trend:
        sparkline = "".join(
            f"[{MOOD_COLORS[p['mood']]}]▇[/]" for p in trend[-30:]
        )
        console.print(f"  Mood trend: {sparkline}")


def print_week(data: dict) -> None:
    table = Table(
        title=f"Week {data['week']}, {data['year']}",
        caption=week_mood_description(data["average_mood"]) or None,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold",
    )
    table.add_column("Date", width=12)
    table.add_column("Mood", width=14)
    table.add_column("Reflection", min_width=30)

    for day in data["days"]:
        entry = day["entry"]
        if entry is None:
            table.add_row(day["date"], "[grey50]-[/]", "")
            continue
        mood = entry["mood"]
        table.add_row(
            day["date"],
            f"[{MOOD_COLORS[mood]}]{mood} {mood_label(mood)}[/]",
            entry["summary"],
        )
    console.print(table)
    console.print(f"  Average: {format_average(data['average_mood'])}")
    if data.get("summary"):
        console.print(Panel(data["summary"], title="Weekly summary", box=box.ROUNDED, width=70))


def print_month(data: dict) -> None:
    title = f"{calendar.month_name[data['month']]} {data['year']}"
    lines: list[str] = [""]
    lines.append(
        f"  Average: [bold]{format_average(data['overall_average'])}[/]"
        f"  ({data['total_entries']} entries)  {data['description']}"
    )

    comparison = data["comparison"]
    prev = data["previous_month"]
    prev_name = calendar.month_name[prev["month"]]
    if comparison["trend"] is not None:
        label, style = _TREND_STYLE[comparison["trend"]]
        lines.append(
            f"  [{style}]{label} {format_delta(comparison['delta'])}[/]"
            f" vs {prev_name} ({format_average(comparison['previous_average'])})"
        )
    elif comparison["current_average"] is not None:
        lines.append(f"  [grey50]No data from {prev_name} to compare with[/]")

    best, worst = data.get("best_week"), data.get("worst_week")
    if best and worst:
        lines.append(
            f"  Best week: W{best['week']} ({format_average(best['average_mood'])})"
            f"  |  Toughest week: W{worst['week']} ({format_average(worst['average_mood'])})"
        )
    lines.append("")

    console.print(Panel("\n".join(lines), title=f"[bold]{title}[/]", box=box.ROUNDED, width=70))

    distribution = data["distribution"]
    max_count = max(distribution.values()) if distribution else 0
    table = Table(title="Distribution", box=box.SIMPLE, show_header=False)
    table.add_column("Mood", justify="right", width=8)
    table.add_column("Bar", min_width=20)
    table.add_column("Count", justify="right")
    for mood in sorted(MOOD_LABELS, reverse=True):
        count = distribution.get(mood, 0)
        table.add_row(
            MOOD_LABELS[mood],
            f"[{MOOD_COLORS[mood]}]{_mood_bar(count, max_count)}[/]",
            str(count),
        )
    console.print(table)

    weeks = Table(title="Weeks", box=box.ROUNDED, show_header=True, header_style="bold")
    weeks.add_column("Week")
    weeks.add_column("Entries", justify="right")
    weeks.add_column("Average", justify="right")
    for week in data["weeks"]:
        weeks.add_row(f"W{week['week']}", str(len(week["entries"])), format_average(week["average_mood"]))
    console.print(weeks)
    if data.get("summary"):
        console.print(Panel(data["summary"], title="Monthly summary", box=box.ROUNDED, width=70))
