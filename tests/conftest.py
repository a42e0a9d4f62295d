"""Configuration for pytest fixtures used in lspbins tests."""

from __future__ import annotations

import shutil
import tarfile
import tempfile
import zipfile
from pathlib import Path
from typing import Callable

import pytest

from lspbins.config import LspbinsConfig
from lspbins.download import asset_file_name
from lspbins.environment import HostEnvironment
from lspbins.extract import extract_zip
from lspbins.models import (
    Architecture,
    Asset,
    DownloadedFileType,
    InstallationStatus,
    Os,
    ReleaseInfo,
)

DHALL_ASSETS = [
    "dhall-1.42.2-x86_64-linux.tar.bz2",
    "dhall-lsp-server-1.1.4-aarch64-darwin.tar.bz2",
    "dhall-lsp-server-1.1.4-x86_64-darwin.tar.bz2",
    "dhall-lsp-server-1.1.4-x86_64-linux.tar.bz2",
    "dhall-lsp-server-1.1.4-x86_64-windows.zip",
]


def make_release(version: str = "1.42.2", names: list[str] | None = None) -> ReleaseInfo:
    """Build a release whose assets point at example.com."""
    names = DHALL_ASSETS if names is None else names
    return ReleaseInfo(
        version=version,
        assets=[
            Asset(name=name, download_url=f"https://example.com/{version}/{name}")
            for name in names
        ],
    )


class FakeEnvironment(HostEnvironment):
    """A HostEnvironment that records calls instead of touching the network."""

    def __init__(
        self,
        archive: Path | None = None,
        platform: tuple[Os | str, Architecture | str] = (Os.LINUX, Architecture.X8664),
        release: ReleaseInfo | Exception | None = None,
        on_path: str | None = None,
        exit_status: int = 0,
        launch_error: OSError | None = None,
    ) -> None:
        super().__init__(LspbinsConfig())
        self.archive = archive
        self.platform = platform
        self.release = make_release() if release is None else release
        self.on_path = on_path
        self.exit_status = exit_status
        self.launch_error = launch_error
        self.calls: list[tuple] = []
        self.statuses: list[tuple[str, InstallationStatus]] = []

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)

    def which(self, binary_name: str) -> str | None:
        self.calls.append(("which", binary_name))
        return self.on_path

    def current_platform(self) -> tuple[Os | str, Architecture | str]:
        return self.platform

    def latest_release(self, repo: str, *, require_assets: bool, pre_release: bool) -> ReleaseInfo:
        self.calls.append(("latest_release", repo, require_assets, pre_release))
        if isinstance(self.release, Exception):
            raise self.release
        return self.release

    def download(self, url: str, destination_dir: Path, kind: DownloadedFileType) -> None:
        self.calls.append(("download", url, kind))
        assert self.archive is not None
        destination_dir.mkdir(parents=True, exist_ok=True)
        target = destination_dir / asset_file_name(url)
        shutil.copy(self.archive, target)
        if kind is DownloadedFileType.ZIP:
            extract_zip(target, destination_dir)
            target.unlink()

    def set_status(self, server_id: str, status: InstallationStatus) -> None:
        self.statuses.append((server_id, status))

    def run_process(self, program: str, args: list[str], cwd: Path | None = None) -> int:
        self.calls.append(("run_process", program, args))
        if self.launch_error is not None:
            raise self.launch_error
        if self.exit_status:
            return self.exit_status
        # args are ["-xf", archive, "-C", destination]
        with tarfile.open(args[1]) as tar:
            tar.extractall(args[3])  # noqa: S202
        return 0


@pytest.fixture
def create_dummy_archive() -> Callable:
    r"""Create an archive file with binary files for testing.

    Returns a function that creates archive files with specified binaries.

    Usage:
        archive_path = create_dummy_archive(
            dest_path=tmp_path / "test.tar.bz2",
            binary_names=["dhall-lsp-server"],
            archive_type="tar.bz2",
            binary_content="#!/bin/sh\necho test"
        )
    """

    def _create_archive(
        dest_path: Path,
        binary_names: str | list[str],
        archive_type: str = "tar.bz2",
        binary_content: str = "#!/usr/bin/env echo\n",
        nested_dir: str | None = "bin",
    ) -> Path:
        if isinstance(binary_names, str):
            binary_names = [binary_names]

        with tempfile.TemporaryDirectory() as tmp_dir:
            tmp_path = Path(tmp_dir)

            # Create nested directory if requested
            if nested_dir:
                bin_dir = tmp_path / nested_dir
                bin_dir.mkdir(exist_ok=True, parents=True)
            else:
                bin_dir = tmp_path

            created_files = []
            for binary in binary_names:
                bin_file = bin_dir / binary
                bin_file.write_text(binary_content)
                bin_file.chmod(0o755)
                created_files.append(bin_file)

            # Create the archive
            if archive_type == "tar.bz2":
                with tarfile.open(dest_path, "w:bz2") as tar:
                    for file_path in created_files:
                        tar.add(file_path, arcname=str(file_path.relative_to(tmp_path)))
            elif archive_type == "zip":
                with zipfile.ZipFile(dest_path, "w") as zipf:
                    for file_path in created_files:
                        zipf.write(file_path, arcname=str(file_path.relative_to(tmp_path)))
            else:  # pragma: no cover
                msg = f"Unsupported archive type: {archive_type}"
                raise ValueError(msg)

            return dest_path

    return _create_archive


@pytest.fixture
def linux_archive(tmp_path: Path, create_dummy_archive: Callable) -> Path:
    """A dhall-lsp-server tarball laid out like the upstream release."""
    return create_dummy_archive(tmp_path / "upstream.tar.bz2", "dhall-lsp-server")


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    """An empty working directory for downloaded versions."""
    path = tmp_path / "work"
    path.mkdir()
    return path
