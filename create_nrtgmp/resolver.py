"""Map integration choices to a template variant.

Resolution is split in two:

* :func:`resolve_variant` is a pure lookup into :data:`VARIANT_TABLE`, which
  enumerates every valid ``(mongodb, sequelize, dialect)`` combination.
* :func:`resolve_with_fallback` handles unsupported combinations by warning
  the user and asking whether to fall back to the default variant.
"""

from __future__ import annotations

from dataclasses import dataclass

from .collector import Prompter
from .models import DEFAULT_ANSWERS, ConfigurationAnswers, Dialect, TemplateVariant
from .utils import print_warning

DEFAULT_VARIANT = TemplateVariant(identifier="main", is_default=True)

DIALECT_UNSUPPORTED = (
    "Sorry, currently modifications are not supported by create-nrtgmp-app. "
    "Only PostgreSQL is supported by the default template. "
    "You can change it manually after the project is created."
)
INTEGRATIONS_REQUIRED = (
    "Sorry, currently modifications are not supported by create-nrtgmp-app "
    "use default template with both MongoDB and Sequelize."
)


class FallbackDeclined(Exception):
    """Raised when the user refuses to fall back to the default template."""


@dataclass(frozen=True)
class Unsupported:
    """Table entry for a combination no template variant provides."""

    reason: str


VariantKey = tuple[bool, bool, Dialect | None]


def _build_table() -> dict[VariantKey, TemplateVariant | Unsupported]:
    table: dict[VariantKey, TemplateVariant | Unsupported] = {}
    for mongodb in (True, False):
        table[(mongodb, False, None)] = Unsupported(INTEGRATIONS_REQUIRED)
        for dialect in Dialect:
            if not mongodb:
                table[(mongodb, True, dialect)] = Unsupported(INTEGRATIONS_REQUIRED)
            elif dialect is Dialect.POSTGRES:
                table[(mongodb, True, dialect)] = DEFAULT_VARIANT
            else:
                table[(mongodb, True, dialect)] = Unsupported(DIALECT_UNSUPPORTED)
    return table


VARIANT_TABLE: dict[VariantKey, TemplateVariant | Unsupported] = _build_table()


def resolve_variant(answers: ConfigurationAnswers) -> TemplateVariant | Unsupported:
    """Look up the template variant for *answers*. No I/O."""
    return VARIANT_TABLE[answers.key]


def resolve_with_fallback(
    answers: ConfigurationAnswers, prompter: Prompter
) -> tuple[TemplateVariant, ConfigurationAnswers]:
    """Resolve *answers*, asking to fall back when they are unsupported.

    Returns:
        The variant to fetch and the answers it actually implements (the
        default answers after a fallback).

    Raises:
        FallbackDeclined: If the user declines the default template.
        PromptCancelled: If the user cancels the confirmation.
    """
    resolved = resolve_variant(answers)
    if isinstance(resolved, TemplateVariant):
        return resolved, answers

    print_warning(resolved.reason)
    if not prompter.confirm("Do you want to use default template?", default=True):
        raise FallbackDeclined(resolved.reason)

    return DEFAULT_VARIANT, DEFAULT_ANSWERS
