"""Home screen — repository input."""

from typing import Optional

from textual import on
from textual.app import ComposeResult
from textual.containers import Center, Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Input, Label, Static

from gitgrade.locator import parse_repo_locator

DEMO_REPO = "https://github.com/vercel/next.js"


class HomeScreen(Screen):
    """Initial screen to collect the repository to grade."""

    CSS = """
    HomeScreen {
        align: center middle;
    }
    #home-container {
        width: 72;
        height: auto;
        padding: 1 4;
        border: round $primary;
        background: $surface;
    }
    #title-art {
        text-align: center;
        color: $accent;
    }
    #subtitle {
        text-align: center;
        color: $text-muted;
        margin-bottom: 2;
    }
    .field-label {
        margin-top: 1;
        color: $text;
    }
    #button-row {
        height: auto;
        margin-top: 2;
    }
    #button-row Button {
        width: 1fr;
        margin: 0 1;
    }
    #message-label {
        text-align: center;
        margin-top: 1;
    }
    #message-label.error {
        color: $error;
    }
    """

    TITLE_ART = """
  ┏━╸╻╺┳╸┏━╸┏━┓┏━┓╺┳┓┏━╸
  ┃╺┓┃ ┃ ┃╺┓┣┳┛┣━┫ ┃┃┣╸
  ┗━┛╹ ╹ ┗━┛╹┗╸╹ ╹╺┻┛┗━╸
"""

    def __init__(self, initial_repo: Optional[str] = None, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.initial_repo = initial_repo

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Center():
            with Vertical(id="home-container"):
                yield Static(self.TITLE_ART, id="title-art")
                yield Static(
                    "Heuristic quality grade for any public GitHub repo",
                    id="subtitle",
                )
                yield Label("Repository (URL or owner/repo):", classes="field-label")
                yield Input(
                    value=self.initial_repo or "",
                    placeholder="e.g. https://github.com/owner/repo",
                    id="repo-input",
                )
                with Horizontal(id="button-row"):
                    yield Button("▶  Analyze", id="analyze-btn", variant="primary")
                    yield Button("Demo", id="demo-btn")
                    yield Button("Reset", id="reset-btn", variant="error")
                yield Label("", id="message-label")
        yield Footer()

    def on_mount(self) -> None:
        """Focus the repo input on screen mount so paste works immediately."""
        self.query_one("#repo-input", Input).focus()
        if self.initial_repo:
            self._message("Repo loaded from the command line. Press Analyze.")

    def _message(self, text: str, error: bool = False) -> None:
        label = self.query_one("#message-label", Label)
        label.set_class(error, "error")
        label.update(text)

    @on(Button.Pressed, "#analyze-btn")
    def start_analysis(self) -> None:
        value = self.query_one("#repo-input", Input).value
        try:
            owner, repo = parse_repo_locator(value)
        except ValueError as e:
            self._message(f"⚠  {e}", error=True)
            return
        self._message("")
        self.app.run_analysis(owner, repo)  # type: ignore[attr-defined]

    @on(Input.Submitted, "#repo-input")
    def submit_on_enter(self) -> None:
        self.start_analysis()

    @on(Button.Pressed, "#demo-btn")
    def load_demo(self) -> None:
        self.query_one("#repo-input", Input).value = DEMO_REPO
        self._message("Demo repo loaded. Press Analyze.")

    @on(Button.Pressed, "#reset-btn")
    def reset(self) -> None:
        repo_input = self.query_one("#repo-input", Input)
        repo_input.value = ""
        repo_input.focus()
        self._message("")
