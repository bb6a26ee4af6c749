import json
from .. import cli_logger
from ..models import CommandError, Credentials, MalformedResponse, Unavailable, UnavailableReason
from .command_executor import run_command

GH = "gh"
REQUIRED_SCOPES = ("read:packages", "write:packages")


def has_github_cli():
    _, _, returncode = run_command(["which", GH])
    return returncode == 0


def has_required_scopes():
    """True when `gh auth status` reports at least one of the package scopes."""
    stdout, stderr, _ = run_command([GH, "auth", "status"])
    status = f"{stdout}\n{stderr}"
    return any(scope in status for scope in REQUIRED_SCOPES)


def _run_gh(args):
    command = [GH] + list(args)
    stdout, stderr, returncode = run_command(command)
    if returncode != 0:
        raise CommandError(command, returncode, stderr)
    return stdout


def get_github_username():
    user = json.loads(_run_gh(["api", "user"]))
    if not isinstance(user, dict) or not user.get("login"):
        raise MalformedResponse("'gh api user' returned no login")
    return user["login"]


def get_github_token():
    token = _run_gh(["auth", "token"]).strip()
    if not token:
        raise CommandError([GH, "auth", "token"], 0, "empty token")
    return token


def _unavailable(reason, message):
    cli_logger.warn_not_configured(message)
    return Unavailable(reason, message)


def acquire_credentials():
    """
    Looks up GitHub Packages credentials through the gh CLI.

    Returns:
        Credentials on success, otherwise an Unavailable carrying the reason.
        Never raises.
    """
    if not has_github_cli():
        return _unavailable(UnavailableReason.NO_CLI, "No Github CLI found.")

    try:
        if not has_required_scopes():
            return _unavailable(
                UnavailableReason.INSUFFICIENT_SCOPE,
                "Github token does not have required scope read:packages.",
            )

        return Credentials(username=get_github_username(), token=get_github_token())
    except Exception as e:
        cli_logger.logger.debug(f"Credential lookup failed: {type(e).__name__}: {e}")
        return _unavailable(
            UnavailableReason.CREDENTIAL_ERROR,
            "Failed to get Github credentials. This might be due to an expired token or not being logged in.",
        )
