"""create-nrtgmp-app workflow orchestrator.

Runs the scaffolding stages strictly in order:

1. Preconditions -- a project name was given and its directory does not exist.
2. Collect      -- ask the database configuration questions.
3. Resolve      -- map the answers to a template variant (with fallback).
4. Provision    -- clone the variant and give it a fresh git history.
5. Materialize  -- rewrite ``package.json`` and write ``.env``.
6. Bootstrap    -- install dependencies and make the initial commit.

Every stage reports a :class:`StageOutcome`; the run stops at the first
failure without cleaning up what earlier stages created.

Usage::

    create-nrtgmp-app my-app
    python -m create_nrtgmp my-app
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from rich.markup import escape
from rich.panel import Panel

from . import __version__
from .bootstrapper import EnvironmentBootstrapper
from .collector import Prompter, PromptCancelled, RichPrompter, collect_answers
from .config import Config
from .materializer import ProjectMaterializer
from .models import (
    ConfigurationAnswers,
    FailureReason,
    ProjectTarget,
    StageOutcome,
    TemplateVariant,
)
from .provisioner import TemplateProvisioner
from .resolver import FallbackDeclined, resolve_with_fallback
from .utils import console, print_error, print_success

PROG = "create-nrtgmp-app"

# Exit status per failure reason; success is always 0.
EXIT_CODES: dict[FailureReason, int] = {reason: 1 for reason in FailureReason}


def exit_code_for(outcome: StageOutcome) -> int:
    """Map a run outcome to the process exit status."""
    if outcome.ok:
        return 0
    assert outcome.reason is not None
    return EXIT_CODES[outcome.reason]


class Scaffolder:
    """Drives one scaffolding run.

    Attributes:
        config: Tool configuration.
        prompter: Source of interactive answers.
        target: Destination resolved from the project name (set by ``run``).
        answers: The answers actually applied, after any fallback.
        variant: The template variant that was fetched.
    """

    def __init__(
        self,
        config: Config,
        prompter: Prompter | None = None,
        provisioner: TemplateProvisioner | None = None,
        materializer: ProjectMaterializer | None = None,
        bootstrapper: EnvironmentBootstrapper | None = None,
    ) -> None:
        self.config = config
        self.prompter = prompter or RichPrompter()
        self.provisioner = provisioner or TemplateProvisioner(config)
        self.materializer = materializer or ProjectMaterializer(config)
        self.bootstrapper = bootstrapper or EnvironmentBootstrapper(config)
        self.target: ProjectTarget | None = None
        self.answers: ConfigurationAnswers | None = None
        self.variant: TemplateVariant | None = None

    # ------------------------------------------------------------------
    # Preconditions
    # ------------------------------------------------------------------

    def check_preconditions(
        self, project_name: str | None, cwd: Path | None = None
    ) -> StageOutcome:
        """Validate the project name and target directory; no side effects."""
        if not project_name or not project_name.strip():
            print_error("Please specify the project name:")
            console.print(f"  [green]{PROG}[/green] [green]<project-name>[/green]")
            return StageOutcome.failure(FailureReason.MISSING_NAME)

        target = ProjectTarget.from_name(project_name, cwd=cwd)
        if target.absolute_path.exists():
            print_error(f"Error: Directory {project_name} already exists.")
            return StageOutcome.failure(
                FailureReason.TARGET_EXISTS, str(target.absolute_path)
            )

        self.target = target
        return StageOutcome.success(str(target.absolute_path))

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    async def run(self, project_name: str | None, cwd: Path | None = None) -> StageOutcome:
        """Execute every stage for *project_name* and return the final outcome."""
        outcome = self.check_preconditions(project_name, cwd=cwd)
        if not outcome.ok:
            return outcome
        assert self.target is not None

        print_success("\nDatabase Configuration:")
        try:
            requested = collect_answers(self.prompter)
            self.variant, self.answers = resolve_with_fallback(requested, self.prompter)
        except PromptCancelled as exc:
            return StageOutcome.failure(FailureReason.CANCELLED, str(exc))
        except FallbackDeclined as exc:
            return StageOutcome.failure(FailureReason.FALLBACK_DECLINED, str(exc))

        print_success("Creating your project...")
        print_success("Fetching template...")
        outcome = await self.provisioner.provision(self.variant, self.target)
        if not outcome.ok:
            print_error("Failed to create project.")
            return outcome

        try:
            await self.materializer.materialize(self.target, self.answers)
        except (OSError, ValueError) as exc:
            print_error(f"Error: {exc}")
            return StageOutcome.failure(FailureReason.MATERIALIZE_FAILED, str(exc))

        outcome = await self.bootstrapper.bootstrap(self.target.absolute_path)
        if not outcome.ok:
            return outcome

        self._print_final_summary()
        return StageOutcome.success(str(self.target.absolute_path))

    def _print_final_summary(self) -> None:
        assert self.target is not None and self.answers is not None
        answers = self.answers

        mongodb = "✓ MongoDB" if answers.wants_document_store else "✗ MongoDB"
        if answers.wants_relational_orm and answers.relational_dialect is not None:
            sequelize = f"✓ Sequelize ({answers.relational_dialect.value})"
        else:
            sequelize = "✗ Sequelize"

        console.print(
            Panel(
                f"[green]Success! Created {escape(self.target.name)} at "
                f"{escape(str(self.target.absolute_path))}[/green]\n\n"
                f"Selected options:\n"
                f"  {mongodb}\n"
                f"  {sequelize}\n\n"
                f"Next Steps:\n"
                f"  - Fill the environment variables in {self.config.env_file} file\n\n"
                f"Happy hacking!",
                title="[bold]Project Ready[/bold]",
                border_style="green",
            )
        )


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``create-nrtgmp-app``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Create a new NRTGMP project from the starter template",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            f"  {PROG} my-app\n"
            "  NRTGMP_TEMPLATE_URL=https://example.com/fork.git "
            f"{PROG} my-app\n"
        ),
    )
    parser.add_argument(
        "project_name",
        nargs="?",
        default=None,
        help="Directory to create (relative to the current directory)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    args = parser.parse_args(argv)

    try:
        scaffolder = Scaffolder(Config.from_env())
        outcome = asyncio.run(scaffolder.run(args.project_name))
    except Exception as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    code = exit_code_for(outcome)
    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
