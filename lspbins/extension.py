"""Route language-server identities to their resolvers."""

from __future__ import annotations

from pathlib import Path

from .environment import HostEnvironment
from .errors import UnknownLanguageServerError
from .models import LANGUAGE_SERVERS, Command, LanguageServerSpec
from .resolver import LanguageServer


class Extension:
    """Entry point for a host that launches managed language servers.

    Resolvers are created on first use and kept for the life of the
    extension, so each one's cached binary path survives between calls.
    """

    def __init__(
        self,
        work_dir: Path,
        servers: dict[str, LanguageServerSpec] | None = None,
    ) -> None:
        """Initialize the Extension."""
        self.work_dir = work_dir
        self.servers = LANGUAGE_SERVERS if servers is None else servers
        self.language_servers: dict[str, LanguageServer] = {}

    def language_server(self, server_id: str) -> LanguageServer:
        """Return the resolver for ``server_id``, creating it if needed."""
        if server_id not in self.servers:
            raise UnknownLanguageServerError(server_id)
        if server_id not in self.language_servers:
            self.language_servers[server_id] = LanguageServer(
                self.servers[server_id],
                self.work_dir,
            )
        return self.language_servers[server_id]

    def language_server_command(self, server_id: str, env: HostEnvironment) -> Command:
        """Return the launch command for ``server_id``."""
        return self.language_server(server_id).command(server_id, env)
