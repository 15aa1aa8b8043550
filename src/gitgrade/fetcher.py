"""GitHub data fetching via REST API."""

import logging
from typing import Callable, Optional
from urllib.parse import quote

import httpx

from gitgrade.models import CommitRecord, RepoBundle, RepoMeta, TreeEntry

log = logging.getLogger(__name__)

COMMIT_SAMPLE_SIZE = 100


class GitHubFetcher:
    """Fetches the data one analysis needs from the GitHub REST API."""

    def __init__(self, token: Optional[str] = None) -> None:
        self.token = token
        self.base_url = "https://api.github.com"
        self._client: Optional[httpx.AsyncClient] = None
        self._saml_fallback = False  # True if we dropped auth due to SAML

    # ── HTTP plumbing ─────────────────────────────────────────────────────

    @property
    def headers(self) -> dict[str, str]:
        h: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token and not self._saml_fallback:
            h["Authorization"] = f"Bearer {self.token}"
        return h

    async def _client_instance(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self.headers,
                timeout=30.0,
            )
        return self._client

    async def _rebuild_client_without_auth(self) -> None:
        """Drop auth and rebuild client for SAML-protected public repos."""
        if self._client:
            await self._client.aclose()
            self._client = None
        self._saml_fallback = True
        await self._client_instance()

    async def _get(self, path: str, **kwargs) -> httpx.Response:  # type: ignore[no-untyped-def]
        """GET with automatic SAML fallback and rate-limit awareness."""
        client = await self._client_instance()
        log.debug("GET %s", path)
        resp = await client.get(path, **kwargs)
        if resp.status_code == 403 and "SAML" in resp.text:
            log.info("SAML enforcement on %s, retrying unauthenticated", path)
            await self._rebuild_client_without_auth()
            client = await self._client_instance()
            resp = await client.get(path, **kwargs)
        if resp.status_code == 403 and "rate limit" in resp.text.lower():
            remaining = resp.headers.get("x-ratelimit-remaining", "0")
            if self._saml_fallback:
                hint = (
                    "Running unauthenticated (60 req/hour) due to SAML fallback. "
                    "Authorize your PAT for this org via SAML SSO to get 5 000 req/hour."
                )
            elif self.token:
                hint = (
                    f"Authenticated rate limit hit (remaining: {remaining}). "
                    "Wait a few minutes and retry."
                )
            else:
                hint = "Set GITHUB_TOKEN to raise the limit from 60 to 5 000 req/hour."
            raise httpx.HTTPStatusError(
                f"GitHub API rate limit exceeded. {hint}",
                request=resp.request,
                response=resp,
            )
        return resp

    async def _get_json(self, path: str, **kwargs):  # type: ignore[no-untyped-def]
        resp = await self._get(path, **kwargs)
        resp.raise_for_status()
        return resp.json()

    @property
    def is_unauthenticated(self) -> bool:
        """True if we fell back to no-auth (SAML) mode."""
        return self._saml_fallback

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ── Repository data ───────────────────────────────────────────────────

    async def fetch_repo_info(self, owner: str, repo: str) -> dict:
        """Fetch basic repo information."""
        return await self._get_json(f"/repos/{owner}/{repo}")

    async def fetch_languages(self, owner: str, repo: str) -> dict[str, int]:
        """Fetch the language -> bytes breakdown."""
        data = await self._get_json(f"/repos/{owner}/{repo}/languages")
        return data if isinstance(data, dict) else {}

    async def fetch_commits(
        self, owner: str, repo: str, limit: int = COMMIT_SAMPLE_SIZE
    ) -> list[CommitRecord]:
        """Fetch one page of the most recent commits (the analysis sample)."""
        data = await self._get_json(
            f"/repos/{owner}/{repo}/commits",
            params={"per_page": str(limit)},
        )
        if not isinstance(data, list):
            return []
        return [CommitRecord.from_github(item) for item in data if isinstance(item, dict)]

    async def fetch_readme(self, owner: str, repo: str) -> str:
        """Fetch raw README content; empty when the repo has none."""
        resp = await self._get(
            f"/repos/{owner}/{repo}/readme",
            headers={"Accept": "application/vnd.github.raw+json"},
        )
        if resp.status_code == 404:
            return ""
        resp.raise_for_status()
        return resp.text

    async def fetch_branch_head_sha(self, owner: str, repo: str, branch: str) -> str:
        """Resolve the head commit SHA of `branch`."""
        data = await self._get_json(
            f"/repos/{owner}/{repo}/branches/{quote(branch, safe='')}"
        )
        sha = ((data or {}).get("commit") or {}).get("sha")
        if not sha:
            raise ValueError("Could not resolve default branch head SHA.")
        return sha

    async def fetch_tree(self, owner: str, repo: str, sha: str) -> list[TreeEntry]:
        """Fetch the full recursive file/folder tree at `sha`."""
        data = await self._get_json(
            f"/repos/{owner}/{repo}/git/trees/{quote(sha, safe='')}",
            params={"recursive": "1"},
        )
        data = data or {}
        if data.get("truncated"):
            log.warning("Tree for %s/%s was truncated by GitHub", owner, repo)
        entries = data.get("tree")
        if not isinstance(entries, list):
            return []
        return [TreeEntry.model_validate(e) for e in entries if isinstance(e, dict)]

    async def fetch_bundle(
        self,
        owner: str,
        repo: str,
        on_status: Optional[Callable[[str], None]] = None,
    ) -> RepoBundle:
        """Fetch everything one analysis needs."""
        status = on_status or (lambda _: None)

        status("Fetching repository metadata …")
        info = await self.fetch_repo_info(owner, repo)
        meta = RepoMeta.from_github(info)
        if not meta.full_name:
            meta = meta.model_copy(update={"full_name": f"{owner}/{repo}"})

        status("Fetching language breakdown …")
        languages = await self.fetch_languages(owner, repo)

        status("Fetching recent commits (sample) …")
        commits = await self.fetch_commits(owner, repo)

        status("Fetching README …")
        readme = await self.fetch_readme(owner, repo)

        status("Fetching repository file tree …")
        sha = await self.fetch_branch_head_sha(owner, repo, meta.default_branch)
        tree = await self.fetch_tree(owner, repo, sha)

        log.info(
            "Fetched %s/%s: %d commits, %d tree entries",
            owner, repo, len(commits), len(tree),
        )
        return RepoBundle(
            repo_meta=meta,
            languages=languages,
            commits=tuple(commits),
            readme=readme,
            tree=tuple(tree),
        )
