import json
import unittest
from unittest.mock import patch
from patched_artifacts.models import Credentials, Unavailable, UnavailableReason
from patched_artifacts.utils import credentials

AUTH_STATUS = """github.com
  ✓ Logged in to github.com account octocat (keyring)
  - Active account: true
  - Token scopes: 'gist', 'repo', {scopes}
"""


def fake_gh(scopes="'read:packages'", user=None, token="gho_secret", which_code=0, status_on_stderr=False):
    """Builds a run_command stand-in answering the gh invocations."""
    user = json.dumps({"login": "octocat"}) if user is None else user
    status = AUTH_STATUS.format(scopes=scopes)

    def run(command, **kwargs):
        if command[0] == "which":
            return ("/usr/bin/gh" if which_code == 0 else "", "", which_code)
        if command[1:] == ["auth", "status"]:
            return ("", status, 0) if status_on_stderr else (status, "", 0)
        if command[1:] == ["api", "user"]:
            return (user, "", 0)
        if command[1:] == ["auth", "token"]:
            return (token, "", 0)
        raise AssertionError(f"unexpected command {command}")
    return run


@patch('patched_artifacts.cli_logger.logger')
class TestAcquireCredentials(unittest.TestCase):

    @patch('patched_artifacts.utils.credentials.run_command')
    def test_credentials_acquired(self, mock_run_command, mock_logger):
        mock_run_command.side_effect = fake_gh()
        result = credentials.acquire_credentials()
        self.assertEqual(result, Credentials(username="octocat", token="gho_secret"))
        mock_logger.warning.assert_not_called()

    @patch('patched_artifacts.utils.credentials.run_command')
    def test_no_cli(self, mock_run_command, mock_logger):
        mock_run_command.side_effect = fake_gh(which_code=1)
        result = credentials.acquire_credentials()
        self.assertIsInstance(result, Unavailable)
        self.assertEqual(result.reason, UnavailableReason.NO_CLI)
        mock_run_command.assert_called_once_with(["which", "gh"])
        mock_logger.warning.assert_any_call("No Github CLI found.")

    @patch('patched_artifacts.utils.credentials.run_command')
    def test_write_scope_alone_is_sufficient(self, mock_run_command, mock_logger):
        mock_run_command.side_effect = fake_gh(scopes="'write:packages'")
        result = credentials.acquire_credentials()
        self.assertIsInstance(result, Credentials)

    @patch('patched_artifacts.utils.credentials.run_command')
    def test_scope_reported_on_stderr(self, mock_run_command, mock_logger):
        mock_run_command.side_effect = fake_gh(status_on_stderr=True)
        result = credentials.acquire_credentials()
        self.assertIsInstance(result, Credentials)

    @patch('patched_artifacts.utils.credentials.run_command')
    def test_missing_scope(self, mock_run_command, mock_logger):
        mock_run_command.side_effect = fake_gh(scopes="'workflow'")
        result = credentials.acquire_credentials()
        self.assertEqual(result.reason, UnavailableReason.INSUFFICIENT_SCOPE)
        mock_logger.warning.assert_any_call("Github token does not have required scope read:packages.")

    @patch('patched_artifacts.utils.credentials.run_command')
    def test_malformed_user_reply(self, mock_run_command, mock_logger):
        mock_run_command.side_effect = fake_gh(user="not json")
        result = credentials.acquire_credentials()
        self.assertEqual(result.reason, UnavailableReason.CREDENTIAL_ERROR)

    @patch('patched_artifacts.utils.credentials.run_command')
    def test_user_reply_without_login(self, mock_run_command, mock_logger):
        mock_run_command.side_effect = fake_gh(user=json.dumps({"id": 1}))
        result = credentials.acquire_credentials()
        self.assertEqual(result.reason, UnavailableReason.CREDENTIAL_ERROR)

    @patch('patched_artifacts.utils.credentials.run_command')
    def test_empty_token(self, mock_run_command, mock_logger):
        mock_run_command.side_effect = fake_gh(token="")
        result = credentials.acquire_credentials()
        self.assertEqual(result.reason, UnavailableReason.CREDENTIAL_ERROR)

    def test_token_not_in_repr(self, mock_logger):
        self.assertNotIn("gho_secret", repr(Credentials(username="octocat", token="gho_secret")))

if __name__ == '__main__':
    unittest.main()
