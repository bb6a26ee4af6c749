import click
import os
import sys
import json
from .. import config as config_module
from ..cli_logger import logger


def _load_or_report(ctx):
    conf = config_module.load_file_config(path=ctx.obj["path"])
    if not conf:
        logger.error(f"Error: No {config_module.CONFIG_FILE} found in {ctx.obj['path']}.")
    return conf


@click.group()
@click.pass_context
def config(ctx):
    """View or edit the patched_artifacts.toml configuration file."""
    pass

@config.command()
@click.pass_context
def view(ctx):
    """View the contents of the patched_artifacts.toml file."""
    if not _load_or_report(ctx):
        return
    config_file_path = os.path.join(ctx.obj["path"], config_module.CONFIG_FILE)
    try:
        with open(config_file_path, 'r') as f:
            click.echo(f.read())
    except IOError as e:
        logger.error(f"Error reading {config_file_path}: {e}")
        logger.info("Please check file permissions.")
    except Exception as e:
        logger.error(f"An unexpected error occurred while viewing {config_file_path}: {e}")
        logger.exception(*sys.exc_info())

@config.command("list")
@click.pass_context
def list_config(ctx):
    """List the effective configuration, gradle.properties included."""
    conf = config_module.load_config(path=ctx.obj["path"])
    click.echo(json.dumps(conf, indent=4))

@config.command()
@click.argument('key')
@click.pass_context
def get(ctx, key):
    """Get a value from the patched_artifacts.toml file."""
    conf = _load_or_report(ctx)
    if not conf:
        return

    value = conf
    try:
        for k in key.split('.'):
            value = value[k]
        click.echo(value)
    except (KeyError, TypeError):
        logger.error(f"Error: Key '{key}' not found in {config_module.CONFIG_FILE}")

@config.command("set")
@click.argument('key')
@click.argument('value')
@click.pass_context
def set_value(ctx, key, value):
    """Set a value in the patched_artifacts.toml file."""
    conf = config_module.load_file_config(path=ctx.obj["path"])

    keys = key.split('.')
    d = conf
    for k in keys[:-1]:
        d = d.setdefault(k, {})
    d[keys[-1]] = value

    if config_module.save_config(conf, path=ctx.obj["path"]):
        logger.info(f"Set '{key}' to '{value}'")

@config.command()
@click.argument('key')
@click.pass_context
def unset(ctx, key):
    """Remove a key from the patched_artifacts.toml file."""
    conf = _load_or_report(ctx)
    if not conf:
        return

    keys = key.split('.')
    d = conf
    try:
        for k in keys[:-1]:
            d = d[k]
        del d[keys[-1]]
        if config_module.save_config(conf, path=ctx.obj["path"]):
            logger.info(f"Unset '{key}'")
    except (KeyError, TypeError):
        logger.error(f"Error: Key '{key}' not found in {config_module.CONFIG_FILE}")
