import logging

import click

from tailview.cli.status import status


@click.group()
@click.option("--config", "config_path", help="Path to the configuration file.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx, config_path, verbose):
    """Tailview CLI"""
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    from tailview.config.settings import load_config_file
    try:
        ctx.obj["config_path"] = load_config_file(config_path)
    except (OSError, ValueError) as e:
        raise click.FileError(config_path or "config.yaml", hint=str(e))

main.add_command(status)


@main.command()
@click.option('--host', default='127.0.0.1', help='The host to bind to.')
@click.option('--port', default=8000, help='The port to bind to.')
def server(host, port):
    """Run the FastAPI server."""
    import uvicorn

    from tailview.api.server import app
    uvicorn.run(app, host=host, port=port)


@main.command()
def version():
    """Show the application version."""
    from tailview.version import get_version
    click.echo(get_version())
