"""Utility functions for lspbins."""

from __future__ import annotations

import logging
import os
import platform as _platform
import sys

import requests
from rich.console import Console
from rich.logging import RichHandler

from .errors import ReleaseFetchError
from .models import Architecture, Os, ReleaseInfo

# Initialize rich console
console = Console(stderr=True)
logger = logging.getLogger(__name__)

_MACHINES = {
    "arm64": Architecture.AARCH64,
    "aarch64": Architecture.AARCH64,
    "x86_64": Architecture.X8664,
    "amd64": Architecture.X8664,
    "i386": Architecture.X86,
    "i686": Architecture.X86,
    "x86": Architecture.X86,
}


def setup_logging(verbose: bool = False) -> None:  # noqa: FBT001, FBT002
    """Configure logging level based on verbosity."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def current_platform() -> tuple[Os | str, Architecture | str]:
    """Detect the current platform and architecture.

    Systems and machines lspbins has no name for are returned as the raw
    strings Python reports, so a binary on PATH can still be found there.
    """
    os_: Os | str = sys.platform
    if sys.platform == "darwin":
        os_ = Os.MAC
    elif sys.platform.startswith("linux"):
        os_ = Os.LINUX
    elif sys.platform in ("win32", "cygwin"):
        os_ = Os.WINDOWS

    machine = _platform.machine().lower()
    return os_, _MACHINES.get(machine, machine)


def _maybe_github_token_header() -> dict[str, str]:
    token = os.environ.get("GITHUB_TOKEN")
    if token:
        return {"Authorization": f"Bearer {token}"}
    return {}


def get_latest_release(
    repo: str,
    *,
    require_assets: bool = True,
    pre_release: bool = False,
    timeout: float = 30,
) -> ReleaseInfo:
    """Get the newest GitHub release of ``repo`` matching the given options.

    Drafts are always skipped. Pre-releases are skipped unless ``pre_release``
    is set, and releases without assets are skipped when ``require_assets``
    is set. GitHub lists releases newest first, so the first match wins.
    """
    url = f"https://api.github.com/repos/{repo}/releases"
    console.print(f"🔍 [blue]Fetching latest release from {url}[/blue]")
    try:
        response = requests.get(
            url,
            headers={"Accept": "application/vnd.github+json", **_maybe_github_token_header()},
            timeout=timeout,
        )
        response.raise_for_status()
        releases = response.json()
    except (requests.RequestException, ValueError) as e:
        msg = f"failed to fetch releases of {repo}: {e}"
        raise ReleaseFetchError(msg) from e

    for release in releases:
        if release.get("draft"):
            continue
        if release.get("prerelease") and not pre_release:
            continue
        if require_assets and not release.get("assets"):
            continue
        logger.info("Latest release of %s is %s", repo, release["tag_name"])
        return ReleaseInfo.from_github(release)

    msg = f"no release found for {repo}"
    raise ReleaseFetchError(msg)
