import typer

from adb_client import __version__


def version_callback(value: bool):
    if value:
        typer.echo(f"Databricks management API client aka adb, version ~> {__version__}")
        raise typer.Exit()


def version_entrypoint(
    version: bool = typer.Option(None, "--version", callback=version_callback, is_eager=True),
):
    pass
