"""Main Textual TUI application for gitgrade."""

import logging
import os
from typing import Callable, Optional

import httpx
from textual.app import App
from textual.worker import get_current_worker

from gitgrade.analyzer import Analyzer
from gitgrade.models import AnalysisResult
from gitgrade.screens.home import HomeScreen
from gitgrade.screens.loading import LoadingScreen
from gitgrade.screens.results import ResultsScreen

log = logging.getLogger(__name__)


def describe_error(exc: BaseException, owner: str, repo: str) -> str:
    """Turn a fetch/analysis failure into a message for the user."""
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        resp_text = getattr(exc.response, "text", "")
        if status == 404:
            return (
                f"❌ Repository '{owner}/{repo}' not found. "
                "Check the owner/repo name and try again."
            )
        if status == 401:
            return "❌ Authentication failed. Please check your GitHub token."
        if status == 403:
            if "rate limit" in str(exc).lower():
                return f"❌ {exc}"
            if "rate limit" in resp_text.lower():
                return "❌ GitHub API rate limit exceeded. Wait a bit and retry."
            if "SAML" in resp_text:
                return (
                    "❌ This org requires SAML SSO. "
                    "Go to github.com/settings/tokens → "
                    "click 'Configure SSO' next to your token → "
                    "Authorize it for this organization."
                )
            if os.environ.get("GITHUB_TOKEN") or os.environ.get("GH_TOKEN"):
                return (
                    "❌ Access denied. The repository may be private "
                    "or your token lacks permissions."
                )
            return (
                "❌ Access denied — no GitHub token found. "
                "Set GITHUB_TOKEN env var: export GITHUB_TOKEN=ghp_…"
            )
        return f"❌ GitHub API error ({status}): {exc.response.reason_phrase}"
    if isinstance(exc, httpx.ConnectError):
        return "❌ Could not connect to GitHub. Check your internet connection."
    return f"❌ Error: {exc}"


class GitGradeApp(App):
    """TUI application for GitHub repository grading."""

    TITLE = "GitGrade"
    SUB_TITLE = "Code · Structure · Docs · Tests · Commits · Relevance"

    CSS = """
    Screen {
        background: $background;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(self, initial_repo: Optional[str] = None, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.initial_repo = initial_repo
        self._generation = 0

    def on_mount(self) -> None:
        self.push_screen(HomeScreen(initial_repo=self.initial_repo))

    def run_analysis(self, owner: str, repo: str) -> None:
        """Kick off the analysis; called from HomeScreen.

        Starting a new analysis supersedes any in-flight one: a superseded
        run keeps its thread until the network calls return, but nothing it
        produces reaches the screen.
        """
        self._generation += 1
        generation = self._generation
        loading = LoadingScreen(target=f"{owner}/{repo}")
        self.push_screen(loading)

        def deliver(callback: Callable[..., None], *args: object) -> None:
            if generation == self._generation and not get_current_worker().is_cancelled:
                self.call_from_thread(callback, *args)

        async def _do_work() -> None:
            analyzer = Analyzer(on_status=lambda msg: deliver(loading.advance, msg))
            try:
                result = await analyzer.inspect(owner, repo)
                deliver(loading.finish)
                deliver(self._show_results, loading, result)
            except (httpx.HTTPError, ValueError) as e:
                log.warning("Analysis of %s/%s failed: %r", owner, repo, e)
                deliver(loading.fail, describe_error(e, owner, repo))
            except Exception as e:
                log.exception("Unexpected failure analyzing %s/%s", owner, repo)
                deliver(loading.fail, describe_error(e, owner, repo))
            finally:
                await analyzer.close()

        self.run_worker(_do_work(), thread=True, group="analysis", exclusive=True)

    def _show_results(self, loading: LoadingScreen, result: AnalysisResult) -> None:
        """Swap the given loading screen for the results, if it is still showing."""
        if self.screen is not loading:
            log.debug("Dropping result for %s: its loading screen is gone", result.repo)
            return
        self.pop_screen()
        self.push_screen(ResultsScreen(result))
