import inspect
from functools import wraps
from typing import Any, Callable, TypeVar, cast

T = TypeVar("T", bound=Callable[..., Any])


def operation(**config: Any) -> Callable[[T], T]:
    """Route a component method to the bound provider.

    The provider method with the same name is called with the
    same arguments. When no provider is bound, or the provider
    does not implement the operation, the component method runs.
    """

    def decorator(func: T) -> T:
        setattr(func, "__operation__", True)
        setattr(func, "__config__", config)
        if not inspect.iscoroutinefunction(func):

            @wraps(func)
            def wrapper(self, *args, **kwargs) -> Any:
                target = _get_target(self, func.__name__)
                if target is None:
                    return func(self, *args, **kwargs)
                return self.__finalize__(target(*args, **kwargs))

            return cast(T, wrapper)

        @wraps(func)
        async def awrapper(self, *args, **kwargs) -> Any:
            target = _get_target(self, func.__name__)
            if target is None:
                return await func(self, *args, **kwargs)
            return self.__finalize__(await target(*args, **kwargs))

        return cast(T, awrapper)

    return decorator


def _get_target(component: Any, name: str) -> Callable[..., Any] | None:
    provider = getattr(component, "__provider__", None)
    if provider is None:
        return None
    target = getattr(provider, name, None)
    if target is None or not callable(target):
        return None
    return target
