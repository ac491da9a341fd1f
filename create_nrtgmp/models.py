"""Data models shared by every stage of the scaffolding workflow."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Dialect(str, Enum):
    """Relational dialects offered for the Sequelize integration, in menu order."""

    POSTGRES = "postgres"
    MYSQL = "mysql"
    MARIADB = "mariadb"
    SQLITE = "sqlite"
    MSSQL = "mssql"

    @property
    def display_name(self) -> str:
        return _DIALECT_TITLES[self]


_DIALECT_TITLES: dict[Dialect, str] = {
    Dialect.POSTGRES: "PostgreSQL",
    Dialect.MYSQL: "MySQL",
    Dialect.MARIADB: "MariaDB",
    Dialect.SQLITE: "SQLite",
    Dialect.MSSQL: "Microsoft SQL Server",
}


class ConfigurationAnswers(BaseModel):
    """The user's integration choices.

    ``relational_dialect`` is set if and only if ``wants_relational_orm`` is
    true.  Instances are frozen; the resolver builds a new one on fallback.
    """

    model_config = ConfigDict(frozen=True)

    wants_document_store: bool
    wants_relational_orm: bool
    relational_dialect: Dialect | None = None

    @model_validator(mode="after")
    def _dialect_matches_orm(self) -> "ConfigurationAnswers":
        if self.wants_relational_orm and self.relational_dialect is None:
            raise ValueError("relational_dialect is required when wants_relational_orm is true")
        if not self.wants_relational_orm and self.relational_dialect is not None:
            raise ValueError("relational_dialect must be absent when wants_relational_orm is false")
        return self

    @property
    def key(self) -> tuple[bool, bool, Dialect | None]:
        """Lookup key into the variant table."""
        return (self.wants_document_store, self.wants_relational_orm, self.relational_dialect)


DEFAULT_ANSWERS = ConfigurationAnswers(
    wants_document_store=True,
    wants_relational_orm=True,
    relational_dialect=Dialect.POSTGRES,
)


class TemplateVariant(BaseModel):
    """A fetchable template snapshot; ``identifier`` is its git branch."""

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(..., min_length=1)
    is_default: bool = False


class ProjectTarget(BaseModel):
    """Destination directory of a scaffolding run."""

    name: str
    absolute_path: Path

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("project name must not be empty")
        return value

    @classmethod
    def from_name(cls, name: str, cwd: Path | None = None) -> "ProjectTarget":
        """Resolve *name* against *cwd* (default: the current directory)."""
        base = cwd or Path.cwd()
        return cls(name=name, absolute_path=(base / name).resolve())

    @property
    def base_name(self) -> str:
        return self.absolute_path.name


class FailureReason(str, Enum):
    """Why a scaffolding run stopped."""

    MISSING_NAME = "missing_name"
    TARGET_EXISTS = "target_exists"
    CANCELLED = "cancelled"
    FALLBACK_DECLINED = "fallback_declined"
    PROVISION_FAILED = "provision_failed"
    MATERIALIZE_FAILED = "materialize_failed"
    BOOTSTRAP_FAILED = "bootstrap_failed"


class StageOutcome(BaseModel):
    """Result of one workflow stage, or of the whole run."""

    ok: bool
    reason: FailureReason | None = None
    detail: str = ""

    @classmethod
    def success(cls, detail: str = "") -> "StageOutcome":
        return cls(ok=True, detail=detail)

    @classmethod
    def failure(cls, reason: FailureReason, detail: str = "") -> "StageOutcome":
        return cls(ok=False, reason=reason, detail=detail)
