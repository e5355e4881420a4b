from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List

import yaml

from adb_client.models.libraries import Library, LibraryCodec
from adb_client.utils.json import JsonUtils


class AbstractLibraryReader(ABC):
    def __init__(self, path: Path):
        self._path = path

    @abstractmethod
    def _read_content(self) -> Any:
        """Reads the raw file content"""

    def read(self) -> List[Library]:
        content = self._read_content()
        if isinstance(content, dict):
            content = content.get("libraries")
        if not isinstance(content, list):
            raise ValueError(
                f"Library file {self._path} should contain either a list or a mapping with the libraries key, "
                f"provided: {content}"
            )
        return LibraryCodec.decode_all(content)


class YamlLibraryReader(AbstractLibraryReader):
    def _read_content(self) -> Any:
        return yaml.load(self._path.read_text(encoding="utf-8"), yaml.SafeLoader)


class JsonLibraryReader(AbstractLibraryReader):
    def _read_content(self) -> Any:
        return JsonUtils.read(self._path)


class LibraryFileReader:
    """
    Reads library descriptors from a JSON or YAML file, for example:

        libraries:
          - whl: "dbfs:/mnt/libs/x.whl"
          - pypi:
              package: "requests"
    """

    def __init__(self, path: Path):
        self._path = path
        self._reader = self._define_reader()

    def _define_reader(self) -> AbstractLibraryReader:
        if self._path.suffix == ".json":
            return JsonLibraryReader(self._path)
        elif self._path.suffix in [".yaml", ".yml"]:
            return YamlLibraryReader(self._path)

        raise Exception(
            f"Unexpected extension of the library file: {self._path}. Supported extensions are .json, .yaml, .yml"
        )

    def get_libraries(self) -> List[Library]:
        return self._reader.read()
