"""Data types shared by the resolver and the host environment."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Os(str, Enum):
    """Operating systems lspbins can detect."""

    MAC = "mac"
    LINUX = "linux"
    WINDOWS = "windows"

    def __str__(self) -> str:
        """Return the plain value."""
        return self.value


class Architecture(str, Enum):
    """CPU architectures lspbins can detect."""

    AARCH64 = "aarch64"
    X86 = "x86"
    X8664 = "x86_64"

    def __str__(self) -> str:
        """Return the plain value."""
        return self.value


class DownloadedFileType(str, Enum):
    """How a downloaded asset is turned into files on disk."""

    UNCOMPRESSED = "uncompressed"  # saved verbatim, unpacked with tar afterwards
    ZIP = "zip"  # unpacked natively by the download step


class InstallationStatus(str, Enum):
    """Progress notifications emitted while provisioning."""

    CHECKING_FOR_UPDATE = "checking_for_update"
    DOWNLOADING = "downloading"


@dataclass(frozen=True)
class Asset:
    """A single downloadable file attached to a release."""

    name: str
    download_url: str


@dataclass(frozen=True)
class ReleaseInfo:
    """The latest published release of an upstream project."""

    version: str
    assets: list[Asset] = field(default_factory=list)

    @classmethod
    def from_github(cls, data: dict) -> ReleaseInfo:
        """Build a ReleaseInfo from a GitHub releases API object."""
        return cls(
            version=data["tag_name"],
            assets=[
                Asset(name=asset["name"], download_url=asset["browser_download_url"])
                for asset in data.get("assets", [])
            ],
        )


@dataclass
class Command:
    """Everything the host needs to launch a language server."""

    command: str
    args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class LanguageServerSpec:
    """Fixed coordinates of one managed language server."""

    server_id: str
    binary_name: str
    asset_prefix: str
    repo: str
    project: str
    assets: dict[tuple[Os, Architecture], tuple[str, DownloadedFileType]]

    def executable_name(self, platform: Os | str) -> str:
        """Return the binary file name for ``platform``."""
        if platform is Os.WINDOWS:
            return f"{self.binary_name}.exe"
        return self.binary_name

    def version_dir(self, version: str) -> str:
        """Return the name of the directory holding ``version``."""
        return f"{self.project}-{version}"


DHALL = LanguageServerSpec(
    server_id="dhall",
    binary_name="dhall-lsp-server",
    asset_prefix="dhall-lsp-server",
    repo="dhall-lang/dhall-haskell",
    project="dhall-haskell",
    assets={
        (Os.MAC, Architecture.AARCH64): (
            "aarch64-darwin.tar.bz2",
            DownloadedFileType.UNCOMPRESSED,
        ),
        (Os.MAC, Architecture.X8664): (
            "x86_64-darwin.tar.bz2",
            DownloadedFileType.UNCOMPRESSED,
        ),
        (Os.LINUX, Architecture.X8664): (
            "x86_64-linux.tar.bz2",
            DownloadedFileType.UNCOMPRESSED,
        ),
        (Os.WINDOWS, Architecture.X8664): ("x86_64-windows.zip", DownloadedFileType.ZIP),
    },
)

LANGUAGE_SERVERS: dict[str, LanguageServerSpec] = {DHALL.server_id: DHALL}
