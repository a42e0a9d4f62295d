"""Download and unpack functions for lspbins."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from urllib.parse import unquote, urlparse

import requests
from rich.console import Console

from .errors import DownloadError, ProvisioningError
from .extract import extract_zip
from .models import DownloadedFileType

# Initialize rich console
console = Console(stderr=True)
logger = logging.getLogger(__name__)


def asset_file_name(url: str) -> str:
    """Return the file name a download URL is saved under."""
    return unquote(urlparse(url).path.rsplit("/", 1)[-1])


def download_file(url: str, destination: Path, timeout: float = 30) -> Path:
    """Download a file from a URL to a destination path."""
    console.print(f"📥 [blue]Downloading from {url}[/blue]")
    try:
        response = requests.get(url, stream=True, timeout=timeout)
        response.raise_for_status()

        with open(destination, "wb") as f:
            for chunk in response.iter_content(chunk_size=8192):
                f.write(chunk)
    except (requests.RequestException, OSError) as e:
        console.print(f"❌ [bold red]Download failed: {e}[/bold red]")
        msg = f"failed to download file: {e}"
        raise DownloadError(msg) from e
    return destination


def download_asset(
    url: str,
    destination_dir: Path,
    kind: DownloadedFileType,
    timeout: float = 30,
) -> Path:
    """Download ``url`` into ``destination_dir``, unpacking it if ``kind`` is zip.

    Returns:
        The downloaded file for uncompressed assets, or ``destination_dir``
        once a zip archive has been unpacked into it.

    """
    destination_dir.mkdir(parents=True, exist_ok=True)
    archive = download_file(url, destination_dir / asset_file_name(url), timeout)
    if kind is DownloadedFileType.UNCOMPRESSED:
        return archive

    console.print(f"📦 [blue]Extracting {archive.name}[/blue]")
    extract_zip(archive, destination_dir)
    archive.unlink()
    return destination_dir


def make_executable(path: Path) -> None:
    """Add execute permission bits to ``path``."""
    path.chmod(path.stat().st_mode | 0o755)


def prune_work_dir(work_dir: Path, keep: str) -> list[Path]:
    """Remove every entry of ``work_dir`` except the one named ``keep``.

    Removal is best effort: entries that cannot be deleted are logged and
    skipped. Failing to list ``work_dir`` itself raises ProvisioningError.

    Returns:
        The entries that could not be removed.

    """
    try:
        entries = list(work_dir.iterdir())
    except OSError as e:
        msg = f"failed to list working directory {e}"
        raise ProvisioningError(msg) from e

    leftovers = []
    for entry in entries:
        if entry.name == keep:
            continue
        try:
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()
        except OSError as e:
            logger.warning("Could not remove stale entry %s: %s", entry, e)
            leftovers.append(entry)
        else:
            logger.info("Removed stale entry %s", entry)
    return leftovers
