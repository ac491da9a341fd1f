"""Rewrite the generated configuration files of a provisioned project.

Two independent writes, in this order:

1. ``package.json``: the ``name`` field becomes the project directory name.
2. ``.env``: written from scratch with placeholder connection settings and a
   fresh session secret.  An existing ``.env`` is overwritten, never merged.

The writes are not atomic and nothing is rolled back.  Errors propagate to
the caller.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from .config import Config
from .models import ConfigurationAnswers, ProjectTarget
from .rendering import TemplateRenderer
from .utils import generate_token, load_json, save_json

ENV_TEMPLATE = "env.j2"

# Placeholders the user fills in after generation; DB_PASS is left empty.
ENV_DEFAULTS: dict[str, Any] = {
    "mongodb_uri": "mongodb://<-add-your-mongodb-uri->",
    "db": {
        "host": "localhost",
        "port": "5432",
        "name": "nrtgmp",
        "user": "postgres",
        "password": "",
    },
    "sequelize_prefix": "pg",
    "session_cookie_name": "NSESSION",
}


class ProjectMaterializer:
    """Applies the resolved answers to the files of a fetched template."""

    def __init__(
        self,
        config: Config,
        token_factory: Callable[[int], str] = generate_token,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.token_factory = token_factory
        self.renderer = renderer or TemplateRenderer()

    async def materialize(
        self, target: ProjectTarget, answers: ConfigurationAnswers
    ) -> list[Path]:
        """Rewrite the metadata document and write the environment file.

        Returns:
            The paths written, metadata first.

        Raises:
            OSError: If either file cannot be read or written.
            ValueError: If the metadata document is not a JSON object.
        """
        project_root = target.absolute_path
        metadata_path = await self.update_metadata(project_root, target.base_name)
        env_path = await self.write_env(project_root, answers)
        return [metadata_path, env_path]

    async def update_metadata(self, project_root: Path, name: str) -> Path:
        """Set the ``name`` field of the project's ``package.json``."""
        metadata_path = self.config.metadata_path(project_root)
        package = load_json(metadata_path)
        package["name"] = name
        await save_json(package, metadata_path)
        return metadata_path

    async def write_env(
        self, project_root: Path, answers: ConfigurationAnswers
    ) -> Path:
        """Write a fresh ``.env`` file, replacing any existing one."""
        # The single variant bundles both integrations, so every key is
        # written regardless of *answers*.
        context = dict(ENV_DEFAULTS)
        context["session_secret"] = self.token_factory(self.config.secret_length)
        return await self.renderer.render_to_file(
            ENV_TEMPLATE, self.config.env_path(project_root), context
        )
