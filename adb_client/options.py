import typer

PROFILE_OPTION = typer.Option(
    None,
    "--profile",
    help="""Databricks CLI profile to use.


    Please note that this profile shall only be used for local development.


    For CI/CD pipelines please use `DATABRICKS_HOST` and `DATABRICKS_TOKEN` environment variables.""",
    show_default=False,
)

CLUSTER_ID_OPTION = typer.Option(..., "--cluster-id", help="Identifier of the target cluster.")

LIBRARY_FILE_OPTION = typer.Option(
    None,
    "--library-file",
    help="""Path to a `.json`, `.yaml` or `.yml` file with library descriptors.


    The file shall contain either a list of descriptors or a mapping with the `libraries` key.""",
    exists=True,
    dir_okay=False,
    show_default=False,
)

JAR_OPTION = typer.Option(None, "--jar", help="Path to a JAR artifact, can be repeated.", show_default=False)
EGG_OPTION = typer.Option(None, "--egg", help="Path to a Python egg artifact, can be repeated.", show_default=False)
WHL_OPTION = typer.Option(None, "--whl", help="Path to a Python wheel artifact, can be repeated.", show_default=False)
MAVEN_OPTION = typer.Option(
    None, "--maven", help="Maven coordinates in the `group:artifact:version` format, can be repeated.", show_default=False
)
PYPI_OPTION = typer.Option(None, "--pypi", help="PyPI package name, can be repeated.", show_default=False)
CRAN_OPTION = typer.Option(None, "--cran", help="CRAN package name, can be repeated.", show_default=False)
REPO_OPTION = typer.Option(
    None,
    "--repo",
    help="Repository URL applied to the `--maven`, `--pypi` and `--cran` libraries.",
    show_default=False,
)
