"""lspbins - Language Server Binary Manager.

Makes sure a language-server binary is available on the local machine and
reports the command that launches it. A binary on the user's PATH is used
as is; otherwise the latest GitHub release for the current platform is
downloaded, unpacked and kept until a newer one appears.
"""

from __future__ import annotations

__version__ = "0.1.0"

from . import cli, config, download, environment, extension, extract, models, resolver, utils
from .cli import main
from .config import LspbinsConfig
from .environment import HostEnvironment
from .errors import LspbinsError
from .extension import Extension
from .models import DHALL, Command, LanguageServerSpec
from .resolver import LanguageServer

__all__ = [
    "DHALL",
    "Command",
    "Extension",
    "HostEnvironment",
    "LanguageServer",
    "LanguageServerSpec",
    "LspbinsConfig",
    "LspbinsError",
    "cli",
    "config",
    "download",
    "environment",
    "extension",
    "extract",
    "main",
    "models",
    "resolver",
    "utils",
]
