import importlib
import inspect
from typing import Any

from .exceptions import InvalidConfigurationError


class Loader:
    @staticmethod
    def load_class(path: str, type: Any) -> Any:
        class_name = None
        if ":" in path:
            module_name, class_name = path.split(":", 1)
        else:
            module_name = path
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise InvalidConfigurationError(
                f"Provider module {module_name} could not be loaded"
            ) from e
        if class_name is not None:
            return getattr(module, class_name)
        for _, cls in inspect.getmembers(module, inspect.isclass):
            if issubclass(cls, type) and cls.__module__ == module_name:
                return cls
        raise InvalidConfigurationError(
            f"{type.__name__} not found at {module_name}"
        )

    @staticmethod
    def load_provider_instance(
        path: str,
        parameters: dict[str, Any] | None = None,
    ) -> Any:
        from ._provider import Provider

        provider = Loader.load_class(path, Provider)
        return provider(**(parameters or {}))
