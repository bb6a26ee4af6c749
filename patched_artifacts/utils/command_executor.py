import subprocess
from ..cli_logger import logger

COMMAND_TIMEOUT = 10


def run_command(command, timeout=COMMAND_TIMEOUT, env=None, cwd=None):
    """
    Executes a command without a shell and waits at most `timeout` seconds.

    Args:
        command (list): The command to execute as a list of strings.
        timeout (float): Seconds to wait before the process is killed.
        env (dict, optional): A dictionary of environment variables.
        cwd (str, optional): The working directory for the command.

    Returns:
        A tuple (stdout, stderr, return_code) with trailing whitespace removed
        from both streams. A command that cannot be started or that overruns
        its timeout is reported with return code -1; a killed process's own
        exit status is never reported.
    """
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            env=env,
            check=False,
            cwd=cwd,
            timeout=timeout,
        )
        return result.stdout.rstrip(), result.stderr.rstrip(), result.returncode

    except subprocess.TimeoutExpired:
        logger.error(f"Command timed out after {timeout} seconds: {command[0]}")
        return "", f"Timed out after {timeout} seconds", -1
    except FileNotFoundError as e:
        logger.debug(f"Command not found: {e.filename}")
        return "", str(e), -1
    except Exception as e:
        logger.error(f"An unexpected error occurred while running {command[0]}: {e}")
        return "", str(e), -1
