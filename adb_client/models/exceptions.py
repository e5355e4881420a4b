from typing import Any


class UnrecognizedLibraryKind(ValueError):
    """
    Raised when a library payload carries none of the known discriminant keys.
    """

    def __init__(self):
        super().__init__("Library not recognized")


class UnsupportedVariant(TypeError):
    """
    Raised when a value outside the closed set of library variants is passed for serialization.
    """

    def __init__(self, value: Any):
        self.variant_type = type(value)
        super().__init__(f"Library serialization is not implemented for type {self.variant_type.__name__}")
