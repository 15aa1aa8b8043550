"""Results screen — tabbed report for one analysis."""

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import (
    DataTable,
    Footer,
    Header,
    Label,
    Sparkline,
    Static,
    TabbedContent,
    TabPane,
)

from gitgrade.analysis.timeseries import heat_intensity
from gitgrade.models import AnalysisResult, CommitHeatmap

_BACKGROUND = (10, 14, 25)
_EMPTY_CELL = (148, 163, 184, 0.10)
_DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

_DIMENSION_LABELS = (
    ("code_quality", "Code"),
    ("structure", "Structure"),
    ("documentation", "Docs"),
    ("tests", "Tests"),
    ("commits", "Commits"),
    ("relevance", "Relevance"),
)


def _blend(r: int, g: int, b: int, alpha: float) -> str:
    br, bg, bb = _BACKGROUND
    mix = [round(c * alpha + base * (1 - alpha)) for c, base in ((r, br), (g, bg), (b, bb))]
    return f"rgb({mix[0]},{mix[1]},{mix[2]})"


def heat_color(count: int, max_count: int) -> str:
    """Terminal colour for a heatmap cell, greener with more commits."""
    t = heat_intensity(count, max_count)
    if t == 0:
        return _blend(*_EMPTY_CELL)
    g = round(197 + (245 - 197) * t)
    b = round(94 + (158 - 94) * t)
    return _blend(34, g, b, 0.18 + 0.55 * t)


def render_heatmap(heatmap: CommitHeatmap) -> Text:
    """Draw the grid with weeks as columns and weekdays as rows."""
    grid: dict[tuple[int, int], int] = {(c.week, c.day): c.count for c in heatmap.cells}
    text = Text()
    for day, name in enumerate(_DAY_NAMES):
        text.append(f"{name} ", style="dim")
        for week in range(heatmap.weeks):
            count = grid.get((week, day), 0)
            text.append("■ ", style=heat_color(count, heatmap.max_count))
        text.append("\n")
    if heatmap.cells:
        first, last = heatmap.cells[0].date, heatmap.cells[-1].date
        text.append(f"{first} → {last}  ·  busiest day: {heatmap.max_count} commits", style="dim")
    return text


def score_bar(score: int, width: int = 20) -> str:
    filled = round(score / 100 * width)
    return "█" * filled + "░" * (width - filled)


class ResultsScreen(Screen):
    """Report display with overview, breakdown, activity and roadmap tabs."""

    CSS = """
    ResultsScreen {
        layout: vertical;
    }
    #results-header {
        height: 3;
        background: $primary;
        color: $text;
        text-align: center;
        padding: 1 2;
        text-style: bold;
    }
    .section-title {
        text-style: bold;
        margin: 1 0;
        color: $secondary;
    }
    .metric-value {
        text-style: bold;
        color: $accent;
    }
    #weekly-sparkline {
        height: 5;
        margin: 1 0;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("b", "go_back", "Back"),
    ]

    def __init__(self, result: AnalysisResult, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.result = result

    def compose(self) -> ComposeResult:
        r = self.result
        yield Header(show_clock=True)
        yield Static(
            f"  📊  {r.repo or 'repository'}  ·  {r.overall}/100  ·  {r.grade.value}  ",
            id="results-header",
        )
        with TabbedContent("🏅 Overview", "📐 Breakdown", "📈 Activity", "🗂 Files", "🧭 Roadmap"):
            with TabPane("🏅 Overview"):
                yield from self._compose_overview()
            with TabPane("📐 Breakdown"):
                yield from self._compose_breakdown()
            with TabPane("📈 Activity"):
                yield from self._compose_activity()
            with TabPane("🗂 Files"):
                yield from self._compose_files()
            with TabPane("🧭 Roadmap"):
                yield from self._compose_roadmap()
        yield Footer()

    # ── Overview tab ──────────────────────────────────────────────────────

    def _compose_overview(self) -> ComposeResult:
        r = self.result
        with VerticalScroll():
            yield Static("SCORE", classes="section-title")
            yield Label(f"{r.overall}/100  ·  Grade: {r.grade.value}", classes="metric-value")
            yield Label(
                f"Files: {r.file_count}  ·  Folders: {r.folder_count}  ·  "
                f"Recent commits: {r.recent_commit_count}  ·  Language: {r.primary_language}"
            )

            yield Static("EXECUTIVE SUMMARY", classes="section-title")
            yield Label(f"Strengths: {' '.join(r.strengths) or '—'}")
            yield Label(f"Risks: {' '.join(r.risks) or '—'}")

            yield Static("RECRUITER SIGNALS", classes="section-title")
            yield Label(f"Primary language: {r.primary_language}")
            yield Label(f"Size: {r.file_count} files • {r.folder_count} folders")
            yield Label(f"Tests detected: {r.tests_detected}")
            yield Label(f"Last update: {r.last_update}")
            yield Label(f"★ {r.stars}  ·  forks {r.forks}  ·  open issues {r.open_issues}")

    # ── Breakdown tab ─────────────────────────────────────────────────────

    def _compose_breakdown(self) -> ComposeResult:
        b = self.result.breakdown
        with VerticalScroll():
            yield Static("SCORE BREAKDOWN", classes="section-title")
            table = DataTable()
            table.add_columns("Dimension", "Score", "")
            for field, label in _DIMENSION_LABELS:
                score = getattr(b, field)
                table.add_row(label, str(score), score_bar(score))
            yield table

    # ── Activity tab ──────────────────────────────────────────────────────

    def _compose_activity(self) -> ComposeResult:
        buckets = self.result.commit_buckets
        with VerticalScroll():
            yield Static("COMMIT TREND (WEEKLY)", classes="section-title")
            yield Sparkline(list(buckets.values), summary_function=max, id="weekly-sparkline")
            yield Label(
                "  ".join(f"{label}:{value}" for label, value in zip(buckets.labels, buckets.values))
            )
            yield Static("COMMIT HEATMAP", classes="section-title")
            yield Static(render_heatmap(self.result.commit_heatmap))

    # ── Files tab ─────────────────────────────────────────────────────────

    def _compose_files(self) -> ComposeResult:
        top = self.result.top_extensions
        with VerticalScroll():
            yield Static("FILE TYPES", classes="section-title")
            if not top:
                yield Label("No files found.")
                return
            peak = max(count for _, count in top) or 1
            table = DataTable()
            table.add_columns("Extension", "Files", "")
            for ext, count in top:
                table.add_row(ext, str(count), score_bar(round(count / peak * 100)))
            yield table

    # ── Roadmap tab ───────────────────────────────────────────────────────

    def _compose_roadmap(self) -> ComposeResult:
        r = self.result
        with VerticalScroll():
            yield Static("DETAILED ANALYSIS", classes="section-title")
            for line in r.details:
                yield Label(f"• {line}")
            yield Static("ROADMAP", classes="section-title")
            for item in r.roadmap:
                yield Label(f"• {item}")

    def action_go_back(self) -> None:
        self.app.pop_screen()
