"""Locate or provision a language-server binary."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

from .download import asset_file_name, make_executable, prune_work_dir
from .environment import HostEnvironment
from .errors import (
    AssetNotFoundError,
    DecompressionExitError,
    DecompressionLaunchError,
    ProvisioningError,
    UnsupportedPlatformError,
)
from .models import (
    Architecture,
    Asset,
    Command,
    DownloadedFileType,
    InstallationStatus,
    LanguageServerSpec,
    Os,
    ReleaseInfo,
)

logger = logging.getLogger(__name__)


def asset_target(
    spec: LanguageServerSpec,
    platform: Os | str,
    arch: Architecture | str,
) -> tuple[str, DownloadedFileType]:
    """Return the asset suffix and download kind for a platform."""
    try:
        return spec.assets[(platform, arch)]
    except KeyError:
        raise UnsupportedPlatformError(str(platform), str(arch)) from None


def find_asset(spec: LanguageServerSpec, release: ReleaseInfo, suffix: str) -> Asset:
    """Find the release asset built for ``suffix``."""
    for asset in release.assets:
        if asset.name.startswith(spec.asset_prefix) and asset.name.endswith(suffix):
            return asset
    raise AssetNotFoundError(f"{spec.asset_prefix}-*-{suffix}", suffix)


class LanguageServer:
    """Resolves the binary of one managed language server.

    Lookup order is the user's PATH, then the last resolved path, then the
    latest GitHub release unpacked under ``work_dir``. Only one version
    directory is kept in ``work_dir`` after a download.
    """

    def __init__(self, spec: LanguageServerSpec, work_dir: Path) -> None:
        """Initialize the LanguageServer."""
        self.spec = spec
        self.work_dir = work_dir
        self.cached_binary_path: str | None = None

    def command(self, server_id: str, env: HostEnvironment) -> Command:
        """Return the command that launches this language server."""
        return Command(command=self.binary_path(server_id, env))

    def binary_path(self, server_id: str, env: HostEnvironment) -> str:
        """Return a path to an executable language-server binary."""
        platform, arch = env.current_platform()
        binary_name = self.spec.executable_name(platform)

        path = env.which(binary_name)
        if path:
            logger.info("Using %s from PATH", path)
            return path

        if self.cached_binary_path and os.path.isfile(self.cached_binary_path):
            return self.cached_binary_path

        binary_path = self._provision(server_id, env, platform, arch, binary_name)
        self.cached_binary_path = str(binary_path)
        return self.cached_binary_path

    def _provision(
        self,
        server_id: str,
        env: HostEnvironment,
        platform: Os | str,
        arch: Architecture | str,
        binary_name: str,
    ) -> Path:
        suffix, kind = asset_target(self.spec, platform, arch)

        env.set_status(server_id, InstallationStatus.CHECKING_FOR_UPDATE)
        release = env.latest_release(self.spec.repo, require_assets=True, pre_release=False)
        asset = find_asset(self.spec, release, suffix)

        version_dir = self.work_dir / self.spec.version_dir(release.version)
        binary_path = version_dir / "bin" / binary_name
        if binary_path.is_file():
            logger.info("%s %s is already installed", self.spec.binary_name, release.version)
            return binary_path

        env.set_status(server_id, InstallationStatus.DOWNLOADING)
        self._install(env, asset, kind, version_dir, binary_name)
        if platform is not Os.WINDOWS:
            try:
                make_executable(binary_path)
            except OSError as e:
                msg = f"failed to make {binary_path} executable: {e}"
                raise ProvisioningError(msg) from e

        leftovers = prune_work_dir(self.work_dir, keep=version_dir.name)
        if leftovers:
            logger.warning("%d stale entries were left in %s", len(leftovers), self.work_dir)
        return binary_path

    def _install(
        self,
        env: HostEnvironment,
        asset: Asset,
        kind: DownloadedFileType,
        version_dir: Path,
        binary_name: str,
    ) -> None:
        """Download and unpack ``asset`` into ``version_dir``.

        Everything happens in a staging directory that is renamed into place,
        so ``version_dir`` either holds a complete installation or is absent.
        """
        self.work_dir.mkdir(parents=True, exist_ok=True)
        staging = Path(tempfile.mkdtemp(prefix=f".{version_dir.name}-", dir=self.work_dir))
        try:
            env.download(asset.download_url, staging, kind)
            if kind is DownloadedFileType.UNCOMPRESSED:
                self._decompress(env, staging / asset_file_name(asset.download_url), staging)

            if not (staging / "bin" / binary_name).is_file():
                msg = f"{asset.name} does not contain bin/{binary_name}"
                raise ProvisioningError(msg)

            if (version_dir / "bin" / binary_name).is_file():
                logger.info("%s was installed concurrently", version_dir)
                return
            if version_dir.exists():
                # left over from an interrupted install
                shutil.rmtree(version_dir)
            try:
                staging.rename(version_dir)
            except OSError as e:
                if not (version_dir / "bin" / binary_name).is_file():
                    msg = f"failed to move {staging} to {version_dir}: {e}"
                    raise ProvisioningError(msg) from e
                logger.info("%s was installed concurrently", version_dir)
        finally:
            shutil.rmtree(staging, ignore_errors=True)

    def _decompress(self, env: HostEnvironment, archive: Path, destination: Path) -> None:
        try:
            status = env.run_process("tar", ["-xf", str(archive), "-C", str(destination)])
        except OSError as e:
            raise DecompressionLaunchError(str(archive), e) from e
        if status != 0:
            raise DecompressionExitError(str(archive), status)
