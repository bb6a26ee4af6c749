from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class PatchedArtifactsError(Exception):
    """Base class for errors raised while looking up prebuilt artifacts."""


class CommandError(PatchedArtifactsError):
    """An external command exited with a non-zero status or printed nothing."""

    def __init__(self, command, returncode, stderr=""):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        message = f"Command '{' '.join(self.command)}' failed with exit code {returncode}"
        if stderr:
            message += f": {stderr}"
        super().__init__(message)


class MalformedResponse(PatchedArtifactsError):
    """A gh reply or POM document is missing a required field."""


class UnavailableReason(Enum):
    NO_CLI = "no_cli"
    INSUFFICIENT_SCOPE = "insufficient_scope"
    CREDENTIAL_ERROR = "credential_error"


class FallbackReason(Enum):
    FORCED = "forced"
    NO_CLI = "no_cli"
    INSUFFICIENT_SCOPE = "insufficient_scope"
    CREDENTIAL_ERROR = "credential_error"
    NO_MATCH = "no_match"
    ERROR = "error"

    @classmethod
    def from_unavailable(cls, reason: UnavailableReason) -> "FallbackReason":
        return cls(reason.value)


@dataclass(frozen=True)
class Credentials:
    username: str
    token: str = field(repr=False)


@dataclass(frozen=True)
class Unavailable:
    """Credentials could not be acquired. `message` is the operator-facing diagnostic."""
    reason: UnavailableReason
    message: str


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of one resolution run.

    When `build_from_source` is True the remaining coordinates must be ignored.
    """
    build_from_source: bool = True
    version: Optional[str] = None
    package_name: Optional[str] = None
    github_username: Optional[str] = None
    github_token: Optional[str] = field(default=None, repr=False)
    reason: Optional[FallbackReason] = None

    @classmethod
    def from_source(cls, reason, package_name=None):
        return cls(build_from_source=True, package_name=package_name, reason=reason)

    @classmethod
    def use_artifact(cls, package_name, version, credentials):
        return cls(
            build_from_source=False,
            version=version,
            package_name=package_name,
            github_username=credentials.username,
            github_token=credentials.token,
        )

    def to_dict(self):
        return {
            "buildFromSource": self.build_from_source,
            "version": self.version,
            "packageName": self.package_name,
            "githubUsername": self.github_username,
            "githubToken": self.github_token,
            "reason": self.reason.value if self.reason else None,
        }
