from pydantic import BaseModel


class FlexibleModel(BaseModel, extra="allow"):
    """
    Base class for the API payload models.
    Undeclared fields are kept as-is, so that API additions survive a read-modify-write cycle.
    """
