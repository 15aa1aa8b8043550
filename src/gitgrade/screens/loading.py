"""Progress screen shown while a repository is fetched and graded."""

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, ProgressBar

# Five fetch phases, signal analysis, done.
ANALYSIS_STEPS = 7
BACK_HINT = "Press [b]  b  [/b] to go back and try again."


class LoadingScreen(Screen):
    """Counts status messages from the analyzer as steps of a fixed pipeline."""

    BINDINGS = [("b", "go_back", "Back")]

    CSS = """
    LoadingScreen {
        align: center middle;
    }
    #grading-box {
        width: 72;
        height: auto;
        padding: 2 4;
        border: round $primary;
        background: $surface;
    }
    #grading-target {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }
    #status-label, #phase-label {
        width: 100%;
        text-align: center;
    }
    #phase-label {
        color: $text-muted;
    }
    #status-label.failed {
        color: $error;
    }
    """

    def __init__(self, target: str = "", total_steps: int = ANALYSIS_STEPS, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.target = target
        self.total_steps = total_steps
        self.step = 0
        self.failed = False
        self.status_text = "Contacting GitHub …"
        self.phase_text = f"Step 0 of {total_steps}"

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="grading-box"):
            yield Label(f"🔍  Grading {self.target or 'repository'}", id="grading-target")
            yield Label(self.status_text, id="status-label")
            yield ProgressBar(total=self.total_steps, show_eta=False, id="progress-bar")
            yield Label(self.phase_text, id="phase-label")
        yield Footer()

    def advance(self, message: str) -> None:
        """Record one finished pipeline step and show its message."""
        self.step = min(self.step + 1, self.total_steps)
        self._render_state(message, f"Step {self.step} of {self.total_steps}")

    def finish(self) -> None:
        self.step = self.total_steps
        self._render_state("Complete!", f"Step {self.step} of {self.total_steps}")

    def fail(self, message: str) -> None:
        """Show an error and offer to go back; progress stays where it stopped."""
        self.failed = True
        self._render_state(message, BACK_HINT)

    def _render_state(self, message: str, phase: str) -> None:
        self.status_text = message
        self.phase_text = phase
        try:
            status = self.query_one("#status-label", Label)
            status.update(message)
            status.set_class(self.failed, "failed")
            self.query_one("#progress-bar", ProgressBar).update(progress=self.step)
            self.query_one("#phase-label", Label).update(phase)
        except NoMatches:
            # Not mounted yet, or already dismissed.
            return

    def action_go_back(self) -> None:
        self.app.pop_screen()
