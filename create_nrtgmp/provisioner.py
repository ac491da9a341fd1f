"""Fetch a template variant into the target directory.

The template is shallow-cloned from the configured repository, its git
history is removed, and a fresh empty repository is initialised in place.
"""

from __future__ import annotations

import asyncio
import shutil

from rich.markup import escape

from .config import Config
from .models import FailureReason, ProjectTarget, StageOutcome, TemplateVariant
from .utils import CommandError, console, print_error, run_git


class TemplateProvisioner:
    """Materialises a :class:`TemplateVariant` at a :class:`ProjectTarget`."""

    def __init__(self, config: Config) -> None:
        self.config = config

    async def provision(
        self, variant: TemplateVariant, target: ProjectTarget
    ) -> StageOutcome:
        """Clone *variant* into ``target.absolute_path`` with a fresh history.

        Never raises for git or filesystem failures: they are reported and
        returned as a ``provision_failed`` outcome.  Whatever was already
        written to disk is left in place.
        """
        project_path = target.absolute_path
        timeouts = self.config.timeouts

        try:
            await run_git(
                "clone",
                f"--branch={variant.identifier}",
                "--single-branch",
                "--depth=1",
                self.config.template_url,
                str(project_path),
                timeout=timeouts.clone,
            )
            await asyncio.to_thread(shutil.rmtree, project_path / ".git")
            await run_git("init", cwd=project_path, timeout=timeouts.git)
        except (CommandError, OSError) as exc:
            print_error(f"Failed to get template data: {exc}")
            return StageOutcome.failure(FailureReason.PROVISION_FAILED, str(exc))

        console.print(
            f"  [green]+[/green] Template [bold]{escape(variant.identifier)}[/bold] "
            f"fetched into {escape(str(project_path))}"
        )
        return StageOutcome.success(str(project_path))
