"""Install dependencies and record the initial commit of a new project."""

from __future__ import annotations

from pathlib import Path

from .config import Config
from .models import FailureReason, StageOutcome
from .utils import CommandError, print_error, print_success, run_command, run_git


class EnvironmentBootstrapper:
    """Prepares a materialised project for development.

    Runs the configured install command in the project directory and then
    commits the whole tree.  Command failures are reported and returned as a
    ``bootstrap_failed`` outcome.
    """

    def __init__(self, config: Config) -> None:
        self.config = config

    async def bootstrap(self, project_path: Path) -> StageOutcome:
        """Run the install command, then ``git add .`` and ``git commit``.

        Stops at the first failing command.  Installed packages or staged
        files from the steps that did run are left as they are.
        """
        timeouts = self.config.timeouts
        try:
            print_success("Installing dependencies...")
            await run_command(
                *self.config.install_command,
                cwd=project_path,
                timeout=timeouts.install,
            )

            print_success("Creating initial commit...")
            await run_git("add", ".", cwd=project_path, timeout=timeouts.git)
            await run_git(
                "commit",
                "-m",
                self.config.commit_message,
                cwd=project_path,
                timeout=timeouts.git,
            )
        except CommandError as exc:
            print_error(f"Failed to set up development environment: {exc}")
            return StageOutcome.failure(FailureReason.BOOTSTRAP_FAILED, str(exc))

        return StageOutcome.success()
