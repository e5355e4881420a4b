import json
from pathlib import Path
from unittest.mock import MagicMock

from pytest_mock import MockerFixture

from adb_client import __version__
from adb_client.api.services.libraries import LibrariesService
from adb_client.cli import app
from adb_client.commands.libraries import describe_library
from adb_client.models.libraries import (
    ClusterLibraryStatuses,
    EggLibrary,
    JarLibrary,
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
from tests.unit.conftest import invoke_cli_runner


def test_version():
    res = invoke_cli_runner("--version")
    assert __version__ in res.stdout


def test_describe_library():
    assert describe_library(None) == "-"
    assert describe_library(JarLibrary(jar="x.jar")) == "jar: x.jar"
    assert describe_library(MavenLibrary(maven=MavenLibrarySpec(coordinates="g:a:1"))) == "maven: g:a:1"
    assert (
        describe_library(PythonPyPiLibrary(pypi=PythonPyPiLibrarySpec(package="requests", repo="https://repo")))
        == "pypi: requests from https://repo"
    )


def test_install_from_options(mocker: MockerFixture, mocked_client_provider: MagicMock):
    install_mock = mocker.patch.object(LibrariesService, "install", MagicMock())
    invoke_cli_runner(
        [
            "libraries",
            "install",
            "--cluster-id",
            "c1",
            "--jar",
            "x.jar",
            "--egg",
            "x.egg",
            "--whl",
            "x.whl",
            "--maven",
            "g:a:1",
            "--pypi",
            "requests",
            "--cran",
            "dplyr",
            "--repo",
            "https://repo",
        ]
    )
    install_mock.assert_called_once_with(
        "c1",
        [
            JarLibrary(jar="x.jar"),
            EggLibrary(egg="x.egg"),
            WheelLibrary(whl="x.whl"),
            MavenLibrary(maven=MavenLibrarySpec(coordinates="g:a:1", repo="https://repo")),
            PythonPyPiLibrary(pypi=PythonPyPiLibrarySpec(package="requests", repo="https://repo")),
            RCranLibrary(cran=RCranLibrarySpec(package="dplyr", repo="https://repo")),
        ],
    )
    mocked_client_provider.assert_called_once_with(None)


def test_install_from_file(mocker: MockerFixture, mocked_client_provider: MagicMock, tmp_path: Path):
    install_mock = mocker.patch.object(LibrariesService, "install", MagicMock())
    _file = tmp_path / "libraries.json"
    _file.write_text(json.dumps({"libraries": [{"whl": "x.whl"}]}), encoding="utf-8")
    invoke_cli_runner(
        ["libraries", "install", "--cluster-id", "c1", "--library-file", str(_file), "--pypi", "requests"]
    )
    install_mock.assert_called_once_with(
        "c1", [WheelLibrary(whl="x.whl"), PythonPyPiLibrary(pypi=PythonPyPiLibrarySpec(package="requests"))]
    )


def test_install_no_libraries(mocked_client_provider: MagicMock):
    res = invoke_cli_runner(["libraries", "install", "--cluster-id", "c1"], expected_error=True)
    assert res.exit_code == 2
    mocked_client_provider.assert_not_called()


def test_app_name():
    assert app.info.name == "adb"
    res = invoke_cli_runner(["--help"])
    assert "libraries" in res.stdout


def test_install_wait(mocker: MockerFixture, mocked_client_provider: MagicMock):
    mocker.patch.object(LibrariesService, "install", MagicMock())
    sleep_mock = mocker.patch("adb_client.commands.libraries.time.sleep", MagicMock())
    library = PythonPyPiLibrary(pypi=PythonPyPiLibrarySpec(package="requests"))
    status_mock = mocker.patch.object(
        LibrariesService,
        "cluster_status",
        MagicMock(
            side_effect=[
                [],
                [LibraryFullStatus(library=library, status=LibraryInstallStatus.INSTALLING)],
                [LibraryFullStatus(library=library, status=LibraryInstallStatus.INSTALLED)],
            ]
        ),
    )
    res = invoke_cli_runner(["libraries", "install", "--cluster-id", "c1", "--pypi", "requests", "--wait"])
    assert status_mock.call_count == 3
    assert sleep_mock.call_count == 2
    assert "submitted for installation" in res.stdout


def test_install_wait_one_request_per_cycle(mocker: MockerFixture, mocked_client_provider: MagicMock):
    mocker.patch.object(LibrariesService, "install", MagicMock())
    sleep_mock = mocker.patch("adb_client.commands.libraries.time.sleep", MagicMock())
    jar = JarLibrary(jar="x.jar")
    whl = WheelLibrary(whl="x.whl")
    egg = EggLibrary(egg="x.egg")
    status_mock = mocker.patch.object(
        LibrariesService,
        "cluster_status",
        MagicMock(
            side_effect=[
                [
                    LibraryFullStatus(library=jar, status=LibraryInstallStatus.INSTALLED),
                    LibraryFullStatus(library=whl, status=LibraryInstallStatus.RESOLVING),
                    LibraryFullStatus(library=egg, status=LibraryInstallStatus.PENDING),
                ],
                [
                    LibraryFullStatus(library=jar, status=LibraryInstallStatus.INSTALLED),
                    LibraryFullStatus(library=whl, status=LibraryInstallStatus.INSTALLED),
                    LibraryFullStatus(library=egg, status=LibraryInstallStatus.INSTALLED),
                ],
            ]
        ),
    )
    find_mock = mocker.patch.object(LibrariesService, "find_status", MagicMock())
    invoke_cli_runner(
        ["libraries", "install", "--cluster-id", "c1", "--jar", "x.jar", "--whl", "x.whl", "--egg", "x.egg", "--wait"]
    )
    assert status_mock.call_count == 2
    assert sleep_mock.call_count == 1
    find_mock.assert_not_called()


def test_install_wait_failed(mocker: MockerFixture, mocked_client_provider: MagicMock):
    mocker.patch.object(LibrariesService, "install", MagicMock())
    library = JarLibrary(jar="x.jar")
    mocker.patch.object(
        LibrariesService,
        "cluster_status",
        MagicMock(
            return_value=[
                LibraryFullStatus(library=library, status=LibraryInstallStatus.FAILED, messages=["File not found"])
            ]
        ),
    )
    res = invoke_cli_runner(
        ["libraries", "install", "--cluster-id", "c1", "--jar", "x.jar", "--wait"], expected_error=True
    )
    assert res.exit_code == 1
    assert "failed to install" in res.stdout


def test_uninstall(mocker: MockerFixture, mocked_client_provider: MagicMock):
    uninstall_mock = mocker.patch.object(LibrariesService, "uninstall", MagicMock())
    invoke_cli_runner(["libraries", "uninstall", "--cluster-id", "c1", "--maven", "g:a:1", "--profile", "dev"])
    uninstall_mock.assert_called_once_with("c1", [MavenLibrary(maven=MavenLibrarySpec(coordinates="g:a:1"))])
    mocked_client_provider.assert_called_once_with("dev")


def test_status_single_cluster(mocker: MockerFixture, mocked_client_provider: MagicMock, tmp_path: Path):
    mocker.patch.object(
        LibrariesService,
        "cluster_status",
        MagicMock(
            return_value=[
                LibraryFullStatus(library=WheelLibrary(whl="x.whl"), status=LibraryInstallStatus.INSTALLED),
            ]
        ),
    )
    _file = tmp_path / "statuses.json"
    res = invoke_cli_runner(["libraries", "status", "--cluster-id", "c1", "--write-to-file", str(_file)])
    assert "INSTALLED" in res.stdout
    assert json.loads(_file.read_text(encoding="utf-8")) == [
        {"cluster_id": "c1", "library_statuses": [{"library": {"whl": "x.whl"}, "status": "INSTALLED"}]}
    ]


def test_status_all_clusters(mocker: MockerFixture, mocked_client_provider: MagicMock):
    all_mock = mocker.patch.object(
        LibrariesService,
        "all_cluster_statuses",
        MagicMock(
            return_value=[
                ClusterLibraryStatuses(
                    cluster_id="c1",
                    library_statuses=[LibraryFullStatus(library=None, status=LibraryInstallStatus.PENDING)],
                ),
                ClusterLibraryStatuses(cluster_id="c2"),
            ]
        ),
    )
    res = invoke_cli_runner(["libraries", "status"])
    all_mock.assert_called_once()
    assert "PENDING" in res.stdout
    assert "c2" in res.stdout
