import click
import typer
from rich.traceback import install

from adb_client.commands.libraries import libraries_app
from adb_client.commands.version import version_entrypoint

install(suppress=[click])

app = typer.Typer(
    name="adb",
    help="""
    🧱 Client for the Databricks management REST API.
""",
    rich_markup_mode="markdown",
    pretty_exceptions_show_locals=False,
)

app.callback()(version_entrypoint)

app.add_typer(
    libraries_app,
    name="libraries",
    short_help="📚 Manages libraries installed on clusters.",
    help="""📚 Manages libraries installed on clusters.

    Library descriptors follow the Libraries API format, one of `jar`, `egg`, `whl`, `maven`, `pypi` or `cran`.""",
)


def entrypoint():
    app()
