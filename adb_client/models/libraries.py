from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Type, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer
from typing_extensions import Annotated

from adb_client.models.exceptions import UnrecognizedLibraryKind, UnsupportedVariant
from adb_client.models.flexible import FlexibleModel

# library values are never mutated, "updating" a library means replacing it
_IMMUTABLE = ConfigDict(frozen=True)


class MavenLibrarySpec(BaseModel):
    model_config = _IMMUTABLE

    coordinates: str
    repo: Optional[str] = None
    exclusions: Optional[Tuple[str, ...]] = None


class PythonPyPiLibrarySpec(BaseModel):
    model_config = _IMMUTABLE

    package: str
    repo: Optional[str] = None


class RCranLibrarySpec(BaseModel):
    model_config = _IMMUTABLE

    package: str
    repo: Optional[str] = None


class JarLibrary(BaseModel):
    model_config = _IMMUTABLE

    jar: str


class EggLibrary(BaseModel):
    model_config = _IMMUTABLE

    egg: str


class WheelLibrary(BaseModel):
    model_config = _IMMUTABLE

    whl: str


class MavenLibrary(BaseModel):
    model_config = _IMMUTABLE

    maven: MavenLibrarySpec


class PythonPyPiLibrary(BaseModel):
    model_config = _IMMUTABLE

    pypi: PythonPyPiLibrarySpec


class RCranLibrary(BaseModel):
    model_config = _IMMUTABLE

    cran: RCranLibrarySpec


Library = Union[JarLibrary, EggLibrary, WheelLibrary, MavenLibrary, PythonPyPiLibrary, RCranLibrary]

# order matters: the first key found in a payload decides the variant
LIBRARY_KINDS: Tuple[Tuple[str, Type[BaseModel]], ...] = (
    ("jar", JarLibrary),
    ("egg", EggLibrary),
    ("whl", WheelLibrary),
    ("maven", MavenLibrary),
    ("pypi", PythonPyPiLibrary),
    ("cran", RCranLibrary),
)
LIBRARY_VARIANTS: Tuple[Type[BaseModel], ...] = tuple(variant for _, variant in LIBRARY_KINDS)


class LibraryCodec:
    """
    Converts library descriptors between the wire format and the typed variants.

    The wire format is a JSON object where the variant is identified by the presence of one of the keys
    ``jar``, ``egg``, ``whl``, ``maven``, ``pypi`` or ``cran``, for example:

        {"jar": "dbfs:/mnt/libs/x.jar"}
        {"maven": {"coordinates": "org.jsoup:jsoup:1.7.2", "exclusions": ["slf4j:slf4j"]}}

    If several keys are present, the first one in the order above wins and the other ones are ignored.
    """

    @staticmethod
    def decode(payload: Optional[Mapping[str, Any]]) -> Optional[Library]:
        if payload is None:
            return None

        if isinstance(payload, Mapping):
            for key, variant in LIBRARY_KINDS:
                if key in payload:
                    return variant.model_validate(dict(payload))

        raise UnrecognizedLibraryKind()

    @staticmethod
    def encode(library: Library) -> Dict[str, Any]:
        if type(library) not in LIBRARY_VARIANTS:
            raise UnsupportedVariant(library)
        return library.model_dump(mode="json", exclude_none=True)

    @classmethod
    def decode_all(cls, payloads: Optional[Iterable[Optional[Mapping[str, Any]]]]) -> List[Library]:
        # null entries stand for an absent library and are skipped
        _decoded = [cls.decode(p) for p in payloads or []]
        return [lib for lib in _decoded if lib is not None]

    @classmethod
    def encode_all(cls, libraries: Iterable[Library]) -> List[Dict[str, Any]]:
        return [cls.encode(lib) for lib in libraries]


def _coerce_library(value: Any) -> Any:
    if isinstance(value, LIBRARY_VARIANTS):
        return value
    return LibraryCodec.decode(value)


# field type for models carrying libraries, both validation and serialization go through the codec
AnyLibrary = Annotated[
    Library,
    BeforeValidator(_coerce_library),
    PlainSerializer(LibraryCodec.encode, return_type=Dict[str, Any]),
]


class LibraryInstallStatus(str, Enum):
    PENDING = "PENDING"
    RESOLVING = "RESOLVING"
    INSTALLING = "INSTALLING"
    INSTALLED = "INSTALLED"
    SKIPPED = "SKIPPED"
    FAILED = "FAILED"
    UNINSTALL_ON_RESTART = "UNINSTALL_ON_RESTART"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_INSTALL_STATUSES


TERMINAL_INSTALL_STATUSES = frozenset(
    [
        LibraryInstallStatus.INSTALLED,
        LibraryInstallStatus.SKIPPED,
        LibraryInstallStatus.FAILED,
        LibraryInstallStatus.UNINSTALL_ON_RESTART,
    ]
)


class LibraryFullStatus(FlexibleModel):
    library: Optional[AnyLibrary] = None
    status: LibraryInstallStatus
    messages: Optional[List[str]] = None
    is_library_for_all_clusters: Optional[bool] = None


class ClusterLibraryStatuses(FlexibleModel):
    cluster_id: str
    library_statuses: List[LibraryFullStatus] = []
