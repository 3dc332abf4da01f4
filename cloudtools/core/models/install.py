"""
Install models — requests in, outcomes out.

An ``InstallRequest`` describes one artifact to install.  Installers
return an ``InstallOutcome`` tagged installed / skipped / failed; the
batch orchestrator folds outcomes into a ``BatchResult``.

Usage errors (bad arguments, missing prerequisites) are raised as
exceptions instead; an outcome only records what happened to an
install that was actually attempted.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool

LATEST = "latest"

ArtifactKind = Literal["binary", "plugin"]
OutcomeStatus = Literal["installed", "skipped", "failed"]


class Platform(BaseModel):
    """OS family and CPU architecture of the host."""

    model_config = ConfigDict(frozen=True)

    os: Literal["linux", "macos"]
    arch: Literal["amd64", "arm64"]

    def __str__(self) -> str:
        return f"{self.os}/{self.arch}"


class InstallOptions(BaseModel):
    """Options shared by every item of a batch install."""

    version: str = LATEST
    location: str = "/usr/local/bin"
    skip_if_detected: StrictBool = True
    kind: ArtifactKind = "binary"
    plugin_home: str | None = None


class InstallRequest(BaseModel):
    """One artifact to install.

    ``skip_if_detected`` is strict: string tokens must be parsed with
    ``parse_boolean`` at the input boundary before a request is built.
    """

    artifact: str
    version: str = LATEST
    location: str = "/usr/local/bin"
    skip_if_detected: StrictBool = True
    url: str | None = None              # explicit source, bypasses templates
    kind: ArtifactKind = "binary"
    plugin_home: str | None = None      # IBMCLOUD_HOME for plugin installs

    @classmethod
    def from_options(cls, artifact: str, options: InstallOptions) -> InstallRequest:
        """Build a request for ``artifact`` from batch-wide options."""
        return cls(artifact=artifact, **options.model_dump())


class InstallOutcome(BaseModel):
    """Result of one install attempt."""

    artifact: str
    status: OutcomeStatus
    error: str | None = None
    path: str | None = None
    version: str | None = None
    url: str | None = None
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        """Whether the artifact is in place (installed or already present)."""
        return self.status != "failed"

    @classmethod
    def installed(cls, artifact: str, **kwargs) -> InstallOutcome:
        return cls(artifact=artifact, status="installed", **kwargs)

    @classmethod
    def skipped(cls, artifact: str, **kwargs) -> InstallOutcome:
        return cls(artifact=artifact, status="skipped", **kwargs)

    @classmethod
    def failed(cls, artifact: str, error: str, **kwargs) -> InstallOutcome:
        return cls(artifact=artifact, status="failed", error=error, **kwargs)


class BatchResult(BaseModel):
    """Aggregated outcomes of a multi-artifact install."""

    outcomes: list[InstallOutcome] = Field(default_factory=list)

    def _names(self, status: OutcomeStatus) -> list[str]:
        return [o.artifact for o in self.outcomes if o.status == status]

    @property
    def installed(self) -> list[str]:
        return self._names("installed")

    @property
    def skipped(self) -> list[str]:
        return self._names("skipped")

    @property
    def failed(self) -> list[str]:
        return self._names("failed")

    @property
    def ok(self) -> bool:
        """True iff no item failed."""
        return not self.failed

    def add(self, outcome: InstallOutcome) -> None:
        self.outcomes.append(outcome)

    def summary(self) -> dict[str, int]:
        return {
            "installed": len(self.installed),
            "skipped": len(self.skipped),
            "failed": len(self.failed),
        }
