import json
import os
from ..cli_logger import logger
from ..models import CommandError, MalformedResponse
from .command_executor import run_command

PATCHES_HASH_SCRIPT = os.path.join("scripts", "compute-patches-hash.sh")
DEFAULT_NEW_DOT_ROOT = ".."


def get_new_dot_root(path=".", new_dot_root=None):
    """Return the NewDot checkout root relative to the Android project directory."""
    return os.path.normpath(os.path.join(path, new_dot_root or DEFAULT_NEW_DOT_ROOT))


def get_patch_directories(new_dot_root_dir, hybrid_app=False):
    """
    Returns the patch directories in the order the hash script expects them.

    The primary patch set always comes first; the Mobile-Expensify patch set is
    appended only for the hybrid app.
    """
    directories = [os.path.join(new_dot_root_dir, "patches")]
    if hybrid_app:
        directories.append(os.path.join(new_dot_root_dir, "Mobile-Expensify", "patches"))
    return directories


def compute_patches_hash(script, patch_dirs):
    """Runs the hash script over `patch_dirs` and returns its fingerprint line."""
    command = [script] + list(patch_dirs)
    stdout, stderr, returncode = run_command(command)
    if returncode != 0:
        raise CommandError(command, returncode, stderr)
    patches_hash = stdout.strip()
    if not patches_hash:
        raise CommandError(command, returncode, "no patches hash printed")
    return patches_hash


def get_local_patches_hash(new_dot_root_dir, hybrid_app=False):
    script = os.path.join(new_dot_root_dir, PATCHES_HASH_SCRIPT)
    patches_hash = compute_patches_hash(script, get_patch_directories(new_dot_root_dir, hybrid_app))
    logger.debug(f"Local patches hash: {patches_hash}")
    return patches_hash


def get_react_native_version(new_dot_root_dir):
    """Reads the react-native dependency version from the checkout's package.json."""
    package_json_path = os.path.join(new_dot_root_dir, "package.json")
    with open(package_json_path, "r") as f:
        package_json = json.load(f)
    try:
        return package_json["dependencies"]["react-native"]
    except (KeyError, TypeError):
        raise MalformedResponse(f"No react-native dependency declared in {package_json_path}")
