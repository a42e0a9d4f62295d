"""The host capabilities the resolver depends on."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from rich.console import Console

from .config import LspbinsConfig
from .download import download_asset
from .models import Architecture, DownloadedFileType, InstallationStatus, Os, ReleaseInfo
from .utils import current_platform, get_latest_release

console = Console(stderr=True)
logger = logging.getLogger(__name__)

_STATUS_MESSAGES = {
    InstallationStatus.CHECKING_FOR_UPDATE: "🔍 [blue]{server_id}: checking for update[/blue]",
    InstallationStatus.DOWNLOADING: "📥 [blue]{server_id}: downloading[/blue]",
}


class HostEnvironment:
    """Path search, platform detection, release lookup, download and process calls.

    The resolver only talks to the outside world through this class, so tests
    replace it with a subclass.
    """

    def __init__(self, config: LspbinsConfig | None = None) -> None:
        """Initialize the HostEnvironment."""
        self.config = config or LspbinsConfig()

    def which(self, binary_name: str) -> str | None:
        """Search the user's command path for ``binary_name``."""
        return shutil.which(binary_name, path=self.config.search_path)

    def current_platform(self) -> tuple[Os | str, Architecture | str]:
        """Return the running operating system and CPU architecture."""
        return current_platform()

    def latest_release(
        self,
        repo: str,
        *,
        require_assets: bool,
        pre_release: bool,
    ) -> ReleaseInfo:
        """Fetch the newest matching release of ``repo``."""
        return get_latest_release(
            repo,
            require_assets=require_assets,
            pre_release=pre_release,
            timeout=self.config.timeout,
        )

    def download(self, url: str, destination_dir: Path, kind: DownloadedFileType) -> None:
        """Download ``url`` into ``destination_dir``, unpacking zip archives."""
        download_asset(url, destination_dir, kind, timeout=self.config.timeout)

    def set_status(self, server_id: str, status: InstallationStatus) -> None:
        """Report installation progress for ``server_id``."""
        logger.info("%s: %s", server_id, status.value)
        console.print(_STATUS_MESSAGES[status].format(server_id=server_id))

    def run_process(self, program: str, args: list[str], cwd: Path | None = None) -> int:
        """Run ``program`` to completion and return its exit code.

        Raises:
            OSError: If the program could not be started.

        """
        logger.info("Running %s %s", program, " ".join(args))
        return subprocess.run([program, *args], cwd=cwd, check=False).returncode  # noqa: S603
