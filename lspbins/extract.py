"""Extract files from archives."""

from __future__ import annotations

import zipfile
from pathlib import Path

from .errors import DownloadError


class ExtractionError(DownloadError):
    """Error during extraction process."""

    def __init__(self, message: str, archive_path: str | None = None) -> None:
        """Initialize the ExtractionError."""
        self.archive_path = archive_path
        super().__init__(message)


def _is_definitely_not_exec(filename: str) -> bool:
    """Check if a file is definitely not executable."""
    return filename.endswith((".deb", ".1", ".txt", ".md"))


def is_exec(filename: str, mode: int) -> bool:
    """Determine if a file is executable based on name and permissions."""
    # First check mode bits
    if mode & 0o111 != 0 and not _is_definitely_not_exec(filename):
        return True

    # Then check filename
    if _is_definitely_not_exec(filename):
        return False

    return filename.endswith(".exe") or "." not in Path(filename).name


def _member_mode(info: zipfile.ZipInfo) -> int:
    """Return the unix permission bits stored for a zip member."""
    mode = (info.external_attr >> 16) & 0o777
    return mode or 0o644


def _write_file(data: bytes, path: Path, mode: int) -> None:
    """Write data to a file with specified permissions."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    path.chmod(mode)


def _safe_target(destination_dir: Path, name: str) -> Path:
    """Resolve ``name`` inside ``destination_dir``, refusing escapes."""
    target = (destination_dir / name).resolve()
    root = destination_dir.resolve()
    if target != root and root not in target.parents:
        msg = f"Refusing to extract {name} outside of {destination_dir}"
        raise ExtractionError(msg)
    return target


def extract_zip(archive_path: Path, destination_dir: Path) -> list[Path]:
    """Extract every member of a zip archive into ``destination_dir``.

    Unix permission bits stored in the archive are kept, and files that look
    like executables get their execute bits set.

    Returns:
        The paths of the extracted regular files.

    """
    destination_dir.mkdir(parents=True, exist_ok=True)
    extracted = []
    try:
        with zipfile.ZipFile(archive_path) as zip_file:
            for info in zip_file.infolist():
                target = _safe_target(destination_dir, info.filename)
                if info.is_dir():
                    target.mkdir(parents=True, exist_ok=True)
                    continue
                mode = _member_mode(info)
                if is_exec(info.filename, mode):
                    mode |= 0o111
                _write_file(zip_file.read(info), target, mode)
                extracted.append(target)
    except (zipfile.BadZipFile, OSError) as e:
        msg = f"Failed to extract zip {archive_path}: {e}"
        raise ExtractionError(msg, str(archive_path)) from e
    return extracted
