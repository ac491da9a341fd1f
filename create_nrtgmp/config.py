"""create-nrtgmp-app configuration.

Typed configuration for a scaffolding run. All settings use Pydantic v2 models
so they are validated at construction time and can be overridden from
environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_TEMPLATE_URL = "https://github.com/iamabhi747/nrtgmp-template"


class TimeoutConfig(BaseModel):
    """Per-command timeouts in seconds.

    A value of ``0`` disables the timeout and waits for the command forever.
    """

    clone: int = Field(default=300, ge=0, description="git clone of the template")
    git: int = Field(default=60, ge=0, description="Local git commands (init, add, commit)")
    install: int = Field(default=900, ge=0, description="Dependency installation")


class Config(BaseModel):
    """Global create-nrtgmp-app configuration.

    Instances are created once by the CLI entry point and passed to every
    stage of the scaffolding workflow.
    """

    template_url: str = Field(default=DEFAULT_TEMPLATE_URL)
    metadata_file: str = Field(default="package.json")
    env_file: str = Field(default=".env")
    install_command: list[str] = Field(default_factory=lambda: ["npm", "install"])
    commit_message: str = Field(default="Initial commit via NRTGMP")
    secret_length: int = Field(default=40, ge=16)
    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def metadata_path(self, project_root: Path) -> Path:
        """Path to the project metadata document inside *project_root*."""
        return project_root / self.metadata_file

    def env_path(self, project_root: Path) -> Path:
        """Path to the environment file inside *project_root*."""
        return project_root / self.env_file

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            NRTGMP_TEMPLATE_URL, NRTGMP_INSTALL_COMMAND, NRTGMP_COMMIT_MESSAGE,
            NRTGMP_CLONE_TIMEOUT, NRTGMP_GIT_TIMEOUT, NRTGMP_INSTALL_TIMEOUT.
        """
        timeout_kwargs: dict[str, Any] = {}
        if os.environ.get("NRTGMP_CLONE_TIMEOUT"):
            timeout_kwargs["clone"] = int(os.environ["NRTGMP_CLONE_TIMEOUT"])
        if os.environ.get("NRTGMP_GIT_TIMEOUT"):
            timeout_kwargs["git"] = int(os.environ["NRTGMP_GIT_TIMEOUT"])
        if os.environ.get("NRTGMP_INSTALL_TIMEOUT"):
            timeout_kwargs["install"] = int(os.environ["NRTGMP_INSTALL_TIMEOUT"])

        kwargs: dict[str, Any] = {"timeouts": TimeoutConfig(**timeout_kwargs)}
        if os.environ.get("NRTGMP_TEMPLATE_URL"):
            kwargs["template_url"] = os.environ["NRTGMP_TEMPLATE_URL"]
        if os.environ.get("NRTGMP_INSTALL_COMMAND"):
            kwargs["install_command"] = os.environ["NRTGMP_INSTALL_COMMAND"].split()
        if os.environ.get("NRTGMP_COMMIT_MESSAGE"):
            kwargs["commit_message"] = os.environ["NRTGMP_COMMIT_MESSAGE"]

        return cls(**kwargs)
