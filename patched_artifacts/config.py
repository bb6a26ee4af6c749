import toml
import os
from .cli_logger import logger

CONFIG_FILE = "patched_artifacts.toml"
GRADLE_PROPERTIES_FILE = "gradle.properties"
SECTION = "patched_artifacts"

# gradle.properties key -> [patched_artifacts] key
GRADLE_PROPERTY_KEYS = {
    "patchedArtifacts.forceBuildFromSource": "force_build_from_source",
    "patchedArtifacts.packageName": "package_name",
    "newDotRoot": "new_dot_root",
}


def load_gradle_properties(path="."):
    """Parses the key=value pairs of gradle.properties, ignoring comments."""
    properties_path = os.path.join(path, GRADLE_PROPERTIES_FILE)
    properties = {}
    if not os.path.exists(properties_path):
        return properties
    try:
        with open(properties_path, "r") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith(("#", "!")):
                    continue
                separator = min((i for i in (line.find("="), line.find(":")) if i != -1), default=-1)
                if separator == -1:
                    properties[line] = ""
                    continue
                properties[line[:separator].strip()] = line[separator + 1:].strip()
    except IOError as e:
        logger.error(f"Error reading {properties_path}: {e}")
    return properties


def load_file_config(path="."):
    config_path = os.path.join(path, CONFIG_FILE)
    if os.path.exists(config_path):
        try:
            with open(config_path, "r") as f:
                return toml.load(f)
        except toml.TomlDecodeError as e:
            logger.error(f"Error decoding TOML file at {config_path}: {e}")
            logger.info("Please check the file's format for syntax errors.")
        except IOError as e:
            logger.error(f"Error reading configuration file at {config_path}: {e}")
            logger.info("Please check file permissions.")
    return {}


def load_config(path="."):
    """
    Returns the effective configuration for the project at `path`.

    Values from gradle.properties take precedence over patched_artifacts.toml.
    """
    conf = load_file_config(path)
    settings = conf.get(SECTION)
    if not isinstance(settings, dict):
        if settings is not None:
            logger.warning(f"Ignoring '{SECTION}' in {CONFIG_FILE}: expected a table, got {type(settings).__name__}.")
        settings = conf[SECTION] = {}
    properties = load_gradle_properties(path)
    for prop, key in GRADLE_PROPERTY_KEYS.items():
        if prop in properties:
            settings[key] = properties[prop]
    # `config set` and gradle.properties both store the flag as a string
    settings["force_build_from_source"] = str(settings.get("force_build_from_source", False)).lower() == "true"
    return conf


def save_config(config, path="."):
    config_path = os.path.join(path, CONFIG_FILE)
    logger.info(f"Saving configuration to {config_path}")
    try:
        with open(config_path, "w") as f:
            toml.dump(config, f)
        return True
    except IOError as e:
        logger.error(f"Error saving configuration to {config_path}: {e}")
        logger.info("Please check file permissions and ensure the directory is writable.")
        return False
