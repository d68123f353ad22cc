"""Run configuration: where to mirror to, and with which token."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from gitsync.exceptions import ConfigurationError


@dataclass
class SyncConfig:
    """Settings for one sync run."""

    sync_dir: Path
    token: str = field(repr=False)
    include_private: bool = False
    force: bool = False
    continue_on_error: bool = False
    api_url: str = "https://api.github.com"
    git_host: str = "https://github.com"
    timeout: float = 30.0

    @classmethod
    def resolve(
        cls,
        directory: str | Path | None = None,
        token: str | None = None,
        include_private: bool = False,
        force: bool = False,
        continue_on_error: bool = False,
        timeout: float = 30.0,
    ) -> "SyncConfig":
        """
        Build a configuration from explicit options and the environment.

        Environment variables:
            GITHUB_TOKEN: Token used when ``token`` is not given
            GITSYNC_API_URL: API base URL (optional, default: https://api.github.com)
            GITSYNC_GIT_HOST: Clone URL prefix (optional, default: https://github.com)

        The sync directory defaults to the current directory; a relative
        directory is taken relative to it. The directory is created if missing.

        Raises:
            ConfigurationError: If no token is available or the directory cannot be created
        """
        cwd = Path.cwd()
        if directory is None:
            sync_dir = cwd
        else:
            sync_dir = Path(directory).expanduser()
            if not sync_dir.is_absolute():
                sync_dir = cwd / sync_dir

        try:
            sync_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigurationError(f"Could not create sync directory {sync_dir}: {e}") from e

        if token is None:
            token = os.environ.get("GITHUB_TOKEN")
            if token is None:
                raise ConfigurationError(
                    "No GitHub token: set GITHUB_TOKEN or pass --token"
                )

        if not token.strip():
            raise ConfigurationError("GitHub token must not be empty")

        return cls(
            sync_dir=sync_dir,
            token=token.strip(),
            include_private=include_private,
            force=force,
            continue_on_error=continue_on_error,
            api_url=os.environ.get("GITSYNC_API_URL", cls.api_url),
            git_host=os.environ.get("GITSYNC_GIT_HOST", cls.git_host),
            timeout=timeout,
        )
