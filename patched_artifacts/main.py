import click
from .commands import resolve, doctor, config, log, version


@click.group()
@click.option("--path", "-p", default=".", help="Path to the Android project directory.")
@click.pass_context
def cli(ctx, path):
    """Prebuilt patched React Native artifacts resolver."""
    ctx.obj = {"path": path}

cli.add_command(resolve)
cli.add_command(doctor)
cli.add_command(config)
cli.add_command(log)
cli.add_command(version)

if __name__ == '__main__':
    try:
        cli()
    except Exception as e:
        click.echo(f"An unexpected error occurred: {e}", err=True)
        click.echo("Please report this issue to the patched-artifacts maintainers.", err=True)
