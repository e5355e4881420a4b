import time
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.status import Status
from rich.table import Table

from adb_client.api.client_provider import DatabricksClientProvider
from adb_client.api.readers import LibraryFileReader
from adb_client.api.services.libraries import LibrariesService
from adb_client.models.libraries import (
    EggLibrary,
    JarLibrary,
    Library,
    LibraryCodec,
    LibraryFullStatus,
    LibraryInstallStatus,
    MavenLibrary,
    MavenLibrarySpec,
    PythonPyPiLibrary,
    PythonPyPiLibrarySpec,
    RCranLibrary,
    RCranLibrarySpec,
    WheelLibrary,
)
from adb_client.options import (
    CLUSTER_ID_OPTION,
    CRAN_OPTION,
    EGG_OPTION,
    JAR_OPTION,
    LIBRARY_FILE_OPTION,
    MAVEN_OPTION,
    PROFILE_OPTION,
    PYPI_OPTION,
    REPO_OPTION,
    WHL_OPTION,
)
from adb_client.utils import adb_echo
from adb_client.utils.json import JsonUtils

libraries_app = typer.Typer(rich_markup_mode="markdown")


def describe_library(library: Optional[Library]) -> str:
    if library is None:
        return "-"
    kind, payload = next(iter(LibraryCodec.encode(library).items()))
    if isinstance(payload, dict):
        reference = payload.get("coordinates") or payload.get("package")
        if payload.get("repo"):
            reference = f"{reference} from {payload['repo']}"
        return f"{kind}: {reference}"
    return f"{kind}: {payload}"


def collect_libraries(
    library_file: Optional[Path],
    jars: Optional[List[str]],
    eggs: Optional[List[str]],
    whls: Optional[List[str]],
    mavens: Optional[List[str]],
    pypis: Optional[List[str]],
    crans: Optional[List[str]],
    repo: Optional[str],
) -> List[Library]:
    libraries: List[Library] = LibraryFileReader(library_file).get_libraries() if library_file else []
    libraries += [JarLibrary(jar=j) for j in jars or []]
    libraries += [EggLibrary(egg=e) for e in eggs or []]
    libraries += [WheelLibrary(whl=w) for w in whls or []]
    libraries += [MavenLibrary(maven=MavenLibrarySpec(coordinates=m, repo=repo)) for m in mavens or []]
    libraries += [PythonPyPiLibrary(pypi=PythonPyPiLibrarySpec(package=p, repo=repo)) for p in pypis or []]
    libraries += [RCranLibrary(cran=RCranLibrarySpec(package=c, repo=repo)) for c in crans or []]

    if not libraries:
        raise typer.BadParameter(
            "No libraries were provided. "
            "Please use --library-file or at least one of --jar, --egg, --whl, --maven, --pypi, --cran."
        )
    return libraries


def _statuses_table(title: str, statuses: List[LibraryFullStatus]) -> Table:
    table = Table(title=title)
    table.add_column("Library")
    table.add_column("Status")
    table.add_column("Messages")
    for s in statuses:
        table.add_row(escape(describe_library(s.library)), s.status.value, escape("; ".join(s.messages or [])))
    return table


@libraries_app.command(
    short_help="🔎 Shows library statuses.",
    help="""🔎 Shows library statuses.

    If `--cluster-id` is provided, statuses for the given cluster are shown.<br/>
    Otherwise, statuses for all clusters in the workspace are shown.""",
)
def status(
    cluster_id: Optional[str] = typer.Option(
        None, "--cluster-id", help="Identifier of the cluster, all clusters if not provided.", show_default=False
    ),
    profile: Optional[str] = PROFILE_OPTION,
    write_to_file: Optional[Path] = typer.Option(
        None,
        "--write-to-file",
        help="Writes the statuses in the API format into the given JSON file.",
        dir_okay=False,
        show_default=False,
    ),
):
    service = LibrariesService(DatabricksClientProvider.get_v2_client(profile))

    if cluster_id:
        statuses = {cluster_id: service.cluster_status(cluster_id)}
    else:
        statuses = {c.cluster_id: c.library_statuses for c in service.all_cluster_statuses()}

    console = Console()
    for _cluster_id, _statuses in statuses.items():
        console.print(_statuses_table(f"Cluster {_cluster_id}", _statuses))

    if write_to_file:
        content = [
            {"cluster_id": _id, "library_statuses": [s.model_dump(mode="json", exclude_none=True) for s in _s]}
            for _id, _s in statuses.items()
        ]
        JsonUtils.write(write_to_file, content)
        adb_echo(f"Library statuses were written to {write_to_file}")


@libraries_app.command(
    short_help="📦 Installs libraries on the cluster.",
    help="""📦 Installs libraries on the cluster.

    Libraries can be provided via `--library-file` and via the per-kind options, for example:
    ```
    adb libraries install --cluster-id 0123-456789-abc --pypi requests --maven org.jsoup:jsoup:1.7.2
    ```

    If `--wait` is provided, the command polls the cluster until every library reaches a final status.<br/>
    The command fails if any of the libraries failed to install.""",
)
def install(
    cluster_id: str = CLUSTER_ID_OPTION,
    library_file: Optional[Path] = LIBRARY_FILE_OPTION,
    jars: Optional[List[str]] = JAR_OPTION,
    eggs: Optional[List[str]] = EGG_OPTION,
    whls: Optional[List[str]] = WHL_OPTION,
    mavens: Optional[List[str]] = MAVEN_OPTION,
    pypis: Optional[List[str]] = PYPI_OPTION,
    crans: Optional[List[str]] = CRAN_OPTION,
    repo: Optional[str] = REPO_OPTION,
    wait: bool = typer.Option(False, "--wait", help="Wait until the installation is finished."),
    poll_interval: int = typer.Option(5, "--poll-interval", help="Polling interval in seconds for `--wait`.", min=1),
    profile: Optional[str] = PROFILE_OPTION,
):
    libraries = collect_libraries(library_file, jars, eggs, whls, mavens, pypis, crans, repo)
    service = LibrariesService(DatabricksClientProvider.get_v2_client(profile))
    service.install(cluster_id, libraries)

    if wait:
        with Console().status("Waiting for the libraries to be installed", spinner="dots") as _status:
            results = wait_for_installation(service, cluster_id, libraries, poll_interval, _status)

        failed = [r for r in results if r.status == LibraryInstallStatus.FAILED]
        for r in failed:
            adb_echo(f":boom: Library {escape(describe_library(r.library))} failed to install: {r.messages}")
        if failed:
            raise typer.Exit(1)

    adb_echo(f"✅ Libraries were submitted for installation on cluster {cluster_id}")


def wait_for_installation(
    service: LibrariesService, cluster_id: str, libraries: List[Library], poll_interval: int, status: Status
) -> List[LibraryFullStatus]:
    pending = list(libraries)
    results: List[LibraryFullStatus] = []

    while pending:
        still_pending = []
        statuses = service.cluster_status(cluster_id)
        for library in pending:
            found = service.match_status(statuses, library)
            if found is None or not found.status.is_terminal:
                still_pending.append(library)
            else:
                results.append(found)

        pending = still_pending
        if pending:
            status.update(f"Waiting for {len(pending)} libraries, next check in {poll_interval} seconds")
            time.sleep(poll_interval)

    return results


@libraries_app.command(
    short_help="🧹 Uninstalls libraries from the cluster.",
    help="""🧹 Uninstalls libraries from the cluster.

    Libraries are matched by value, the same descriptors as for the installation shall be provided.<br/>
    Libraries are removed when the cluster is restarted.""",
)
def uninstall(
    cluster_id: str = CLUSTER_ID_OPTION,
    library_file: Optional[Path] = LIBRARY_FILE_OPTION,
    jars: Optional[List[str]] = JAR_OPTION,
    eggs: Optional[List[str]] = EGG_OPTION,
    whls: Optional[List[str]] = WHL_OPTION,
    mavens: Optional[List[str]] = MAVEN_OPTION,
    pypis: Optional[List[str]] = PYPI_OPTION,
    crans: Optional[List[str]] = CRAN_OPTION,
    repo: Optional[str] = REPO_OPTION,
    profile: Optional[str] = PROFILE_OPTION,
):
    libraries = collect_libraries(library_file, jars, eggs, whls, mavens, pypis, crans, repo)
    service = LibrariesService(DatabricksClientProvider.get_v2_client(profile))
    service.uninstall(cluster_id, libraries)
    adb_echo(f"✅ Libraries are marked for removal on cluster {cluster_id}, restart it to complete the removal")
