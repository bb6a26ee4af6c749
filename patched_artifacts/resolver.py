from .cli_logger import logger
from .models import FallbackReason, ResolutionResult, Unavailable
from .utils import credentials as credentials_module
from .utils import patches_hash
from .utils import registry

LOG_PREFIX = "PatchedArtifacts"


def find_matching_version(package_name, local_hash, token, required_version):
    """
    Returns the first candidate, in registry order, whose POM carries `local_hash`.

    POM files are fetched one at a time and the search stops at the first
    match. Returns None when nothing matches.
    """
    for candidate in registry.list_candidates(package_name, required_version):
        remote_hash = registry.fetch_patches_hash(candidate, package_name, token)
        logger.debug(f"{package_name}:{candidate} patches hash: {remote_hash}")
        if remote_hash == local_hash:
            return candidate
    return None


def resolve(package_name, new_dot_root_dir, hybrid_app=False):
    """Decides between a prebuilt artifact and a source build. Never raises."""
    try:
        local_hash = patches_hash.get_local_patches_hash(new_dot_root_dir, hybrid_app)
    except Exception as e:
        logger.error(f"Failed to find matching artifacts version for {package_name}. Reason: {e}")
        return ResolutionResult.from_source(FallbackReason.ERROR, package_name)

    credentials = credentials_module.acquire_credentials()
    if isinstance(credentials, Unavailable):
        return ResolutionResult.from_source(FallbackReason.from_unavailable(credentials.reason), package_name)

    try:
        required_version = patches_hash.get_react_native_version(new_dot_root_dir)
        version = find_matching_version(package_name, local_hash, credentials.token, required_version)
    except Exception as e:
        logger.error(f"Failed to find matching artifacts version for {package_name}. Reason: {e}")
        return ResolutionResult.from_source(FallbackReason.ERROR, package_name)

    if version is None:
        return ResolutionResult.from_source(FallbackReason.NO_MATCH, package_name)
    return ResolutionResult.use_artifact(package_name, version, credentials)


def configure(conf, path="."):
    """
    Produces the resolution applied to the build configuration.

    `conf` is the loaded project configuration (see config.load_config).
    """
    logger.set_prefix(LOG_PREFIX)
    settings = conf.get("patched_artifacts", {})
    package_name = settings.get("package_name")

    if settings.get("force_build_from_source"):
        logger.lifecycle("Forcing build from source.")
        return ResolutionResult.from_source(FallbackReason.FORCED, package_name)

    if package_name:
        new_dot_root = settings.get("new_dot_root")
        result = resolve(
            package_name,
            patches_hash.get_new_dot_root(path, new_dot_root),
            hybrid_app=bool(new_dot_root),
        )
    else:
        logger.error("No package name configured for patched artifacts.")
        result = ResolutionResult.from_source(FallbackReason.ERROR)

    # Every coordinate must be present, whatever resolve() reported.
    coordinates = (result.version, result.package_name, result.github_username, result.github_token)
    if result.build_from_source or not all(coordinates):
        logger.lifecycle(f"No matching artifacts version found for {package_name}. Building react-native from source.")
        return ResolutionResult.from_source(result.reason or FallbackReason.NO_MATCH, package_name)

    logger.lifecycle(f"Using patched react-native artifacts: {result.package_name}:{result.version}")
    return result
