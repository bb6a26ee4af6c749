import click
import os
import sys
from .. import config as config_module
from ..cli_logger import logger
from ..models import PatchedArtifactsError
from ..utils import credentials, patches_hash


def check_environment(path="."):
    """Reports every prerequisite of the artifact lookup. Returns True if all are met."""
    ok = True
    settings = config_module.load_config(path=path).get(config_module.SECTION, {})
    new_dot_root_dir = patches_hash.get_new_dot_root(path, settings.get("new_dot_root"))

    if not settings.get("package_name"):
        logger.warning("No package name configured (patchedArtifacts.packageName).")
        ok = False
    else:
        logger.step_info(f"Package name: {settings['package_name']}", indent=2)

    if credentials.has_github_cli():
        logger.step_info("Github CLI: found", indent=2)
        if credentials.has_required_scopes():
            logger.step_info("Github token scopes: ok", indent=2)
        else:
            logger.warning("Github token does not have required scope read:packages.")
            ok = False
    else:
        logger.warning("No Github CLI found.")
        ok = False

    script = os.path.join(new_dot_root_dir, patches_hash.PATCHES_HASH_SCRIPT)
    if os.path.exists(script):
        logger.step_info(f"Patches hash script: {script}", indent=2)
    else:
        logger.warning(f"Patches hash script not found at {script}")
        ok = False

    try:
        logger.step_info(f"react-native version: {patches_hash.get_react_native_version(new_dot_root_dir)}", indent=2)
    except (IOError, ValueError, PatchedArtifactsError) as e:
        logger.warning(f"Could not read the react-native version: {e}")
        ok = False

    return ok


@click.command()
@click.pass_context
def doctor(ctx):
    """Check that prebuilt artifacts can be looked up from this project."""
    logger.info("Running environment check...")
    try:
        if check_environment(ctx.obj["path"]):
            logger.success("Environment check completed successfully.")
        else:
            logger.error("Environment check found issues. Please review the warnings above.")
    except Exception as e:
        logger.error(f"An unexpected error occurred during environment check: {e}")
        logger.exception(*sys.exc_info())
