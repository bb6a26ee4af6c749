import xml.etree.ElementTree as ET

import requests

from ..cli_logger import logger
from ..models import CommandError, MalformedResponse
from .command_executor import run_command

GITHUB_ORG = "Expensify"
MAVEN_REGISTRY_URL = "https://maven.pkg.github.com/Expensify/App"
GROUP_PATH = "com/expensify"
ARTIFACT_ID = "react-android"
PATCHES_HASH_PROPERTY = "patchesHash"
REQUEST_TIMEOUT = 30


def versions_api_path(package_name):
    return f"/orgs/{GITHUB_ORG}/packages/maven/com.expensify.{package_name}.{ARTIFACT_ID}/versions"


def pom_url(version, package_name):
    return (
        f"{MAVEN_REGISTRY_URL}/{GROUP_PATH}/{package_name}/{ARTIFACT_ID}/{version}/"
        f"{ARTIFACT_ID}-{version}.pom"
    )


def list_candidates(package_name, required_version):
    """
    Lists published versions of the package that start with `required_version`.

    The registry's ordering is preserved; nothing is sorted locally.
    """
    command = ["gh", "api", versions_api_path(package_name), "--jq", ".[].name"]
    stdout, stderr, returncode = run_command(command)
    if returncode != 0:
        raise CommandError(command, returncode, stderr)

    versions = [line.strip() for line in stdout.splitlines() if line.strip()]
    candidates = [v for v in versions if v.startswith(required_version)]
    logger.debug(f"Found {len(candidates)} candidate(s) for {package_name} matching {required_version}: {candidates}")
    return candidates


def _local_name(tag):
    return tag.rsplit("}", 1)[-1]


def parse_patches_hash(pom_text):
    """Extracts project/properties/patchesHash from a POM document."""
    try:
        root = ET.fromstring(pom_text)
    except ET.ParseError as e:
        raise MalformedResponse(f"Could not parse POM file: {e}")

    for child in root:
        if _local_name(child.tag) != "properties":
            continue
        for prop in child:
            if _local_name(prop.tag) == PATCHES_HASH_PROPERTY:
                return (prop.text or "").strip()
    raise MalformedResponse(f"POM file has no {PATCHES_HASH_PROPERTY} property")


def fetch_patches_hash(version, package_name, token, timeout=REQUEST_TIMEOUT):
    """
    Downloads the candidate's POM file and returns its embedded patches hash.

    Network, HTTP and parse failures are raised to the caller.
    """
    url = pom_url(version, package_name)
    headers = {"Authorization": f"Bearer {token}"}
    with requests.get(url, headers=headers, timeout=timeout) as response:
        response.raise_for_status()
        return parse_patches_hash(response.content)
