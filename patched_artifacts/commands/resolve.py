import click
import json
import sys
from .. import config as config_module
from .. import resolver
from ..cli_logger import logger
from ..models import FallbackReason, ResolutionResult

PROPERTIES_PREFIX = "patchedArtifacts"


def format_result(result, output_format):
    document = result.to_dict()
    if output_format == "json":
        return json.dumps(document, indent=2)
    lines = []
    for key, value in document.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = str(value).lower()
        lines.append(f"{PROPERTIES_PREFIX}.{key}={value}")
    return "\n".join(lines)


@click.command()
@click.pass_context
@click.option("--package-name", default=None, help="Published package name, e.g. react-native or hybrid-app.")
@click.option("--force-build-from-source", is_flag=True, default=False, help="Skip the artifact lookup.")
@click.option("--format", "output_format", type=click.Choice(["json", "properties"]), default="json",
              help="Output format of the resolution.")
@click.option("--output", "-o", type=click.Path(dir_okay=False, writable=True), default=None,
              help="Write the resolution to a file instead of stdout.")
def resolve(ctx, package_name, force_build_from_source, output_format, output):
    """Find a prebuilt artifact built from the local patches, or fall back to source."""
    path = ctx.obj["path"]
    try:
        conf = config_module.load_config(path=path)
        settings = conf[config_module.SECTION]
        if package_name:
            settings["package_name"] = package_name
        package_name = settings.get("package_name")
        if force_build_from_source:
            settings["force_build_from_source"] = True

        result = resolver.configure(conf, path=path)
    except Exception as e:
        # the build still needs a decision to read
        logger.error(f"Failed to resolve patched artifacts for {package_name}: {e}")
        logger.exception(*sys.exc_info())
        result = ResolutionResult.from_source(FallbackReason.ERROR, package_name)

    document = format_result(result, output_format)

    if output:
        with open(output, "w") as f:
            f.write(document + "\n")
        logger.info(f"Resolution written to {output}")
    else:
        click.echo(document)
    return result
