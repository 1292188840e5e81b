from . import _log_helper as log
from ._component import Component
from ._decorators import operation
from ._loader import Loader
from ._provider import Provider
from ._response import Response
from .data_model import DataModel

__all__ = [
    "Component",
    "DataModel",
    "Loader",
    "Provider",
    "Response",
    "log",
    "operation",
]
