"""Repository locator parsing: URL or owner/repo slug."""

import re
from urllib.parse import urlparse

_NAME_RE = re.compile(r"^[A-Za-z0-9_.-]+$")
_HOSTS = ("github.com", "www.github.com")


def parse_repo_locator(text: str) -> tuple[str, str]:
    """Return ``(owner, repo)`` from a GitHub URL or an ``owner/repo`` slug.

    Raises:
        ValueError: with a message suitable for showing to the user.
    """
    value = (text or "").strip()
    if not value:
        raise ValueError("Paste a GitHub repository URL first.")
    if value.lower().startswith(tuple(f"{h}/" for h in _HOSTS)):
        value = f"https://{value}"

    if "://" in value:
        url = urlparse(value)
        host = (url.hostname or "").lower()
        if not host:
            raise ValueError("Invalid URL. Example: https://github.com/owner/repo")
        if host not in _HOSTS:
            raise ValueError("Only github.com repository links are supported.")
        parts = [p for p in url.path.split("/") if p]
        if len(parts) < 2:
            raise ValueError("URL must be like: https://github.com/owner/repo")
    else:
        parts = [p for p in value.split("/") if p]
        if len(parts) != 2:
            raise ValueError(
                "Enter owner/repo or a URL like https://github.com/owner/repo"
            )

    owner = parts[0]
    repo = re.sub(r"\.git$", "", parts[1], flags=re.IGNORECASE)

    if not _NAME_RE.match(owner) or not _NAME_RE.match(repo):
        raise ValueError("Owner/repo contains unsupported characters.")
    return owner, repo
