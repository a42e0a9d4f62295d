"""Errors raised while resolving language-server binaries."""

from __future__ import annotations


class LspbinsError(Exception):
    """Base class for every error lspbins reports to its caller."""

    def __init__(self, message: str) -> None:
        """Initialize the LspbinsError."""
        self.message = message
        super().__init__(message)


class UnknownLanguageServerError(LspbinsError):
    """The requested language server identity is not managed by lspbins."""

    def __init__(self, server_id: str) -> None:
        """Initialize the UnknownLanguageServerError."""
        self.server_id = server_id
        super().__init__(f"unknown language server: {server_id}")


class UnsupportedPlatformError(LspbinsError):
    """No release artifact exists for this operating system and architecture."""

    def __init__(self, platform: str, arch: str) -> None:
        """Initialize the UnsupportedPlatformError."""
        self.platform = platform
        self.arch = arch
        super().__init__(f"unsupported platform/arch combination: {platform}/{arch}")


class ReleaseFetchError(LspbinsError):
    """Release metadata could not be fetched from GitHub."""


class AssetNotFoundError(LspbinsError):
    """The latest release has no asset for the current platform."""

    def __init__(self, pattern: str, suffix: str) -> None:
        """Initialize the AssetNotFoundError."""
        self.suffix = suffix
        super().__init__(f"no asset found matching {pattern}")


class DownloadError(LspbinsError):
    """An asset could not be downloaded or unpacked."""


class DecompressionError(LspbinsError):
    """The external decompression step failed."""

    def __init__(self, message: str, archive_path: str) -> None:
        """Initialize the DecompressionError."""
        self.archive_path = archive_path
        super().__init__(message)


class DecompressionLaunchError(DecompressionError):
    """The decompression program could not be started."""

    def __init__(self, archive_path: str, cause: OSError) -> None:
        """Initialize the DecompressionLaunchError."""
        self.cause = cause
        super().__init__(f"failed to decompress {archive_path}: {cause!r}", archive_path)


class DecompressionExitError(DecompressionError):
    """The decompression program exited with a non-zero status."""

    def __init__(self, archive_path: str, status: int) -> None:
        """Initialize the DecompressionExitError."""
        self.status = status
        super().__init__(f"failed to decompress {archive_path}: status {status}", archive_path)


class ProvisioningError(LspbinsError):
    """The version directory could not be prepared or cleaned up."""
