"""Name-keyed registry of pluggable implementations.

Output formats register themselves with a decorator and the command
line picks one by name::

    renderer_registry = Registry("renderer")

    @renderer_registry.register("text")
    class TextRenderer(CatalogRenderer):
        ...

    renderer = renderer_registry.create("text", bold=False)
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Type, TypeVar

T = TypeVar("T")


class Registry:
    """Map string keys to classes registered through :meth:`register`."""

    def __init__(self, name: str = "registry") -> None:
        self._name = name
        self._items: Dict[str, Type[Any]] = {}

    def register(self, key: str) -> Callable[[Type[T]], Type[T]]:
        """Class decorator registering the class under ``key``.

        Raises:
            ValueError: ``key`` is taken.
        """
        def decorator(cls: Type[T]) -> Type[T]:
            if key in self._items:
                raise ValueError(
                    f"{self._name}: '{key}' is already taken by {self._items[key].__name__}"
                )
            self._items[key] = cls
            return cls
        return decorator

    def get(self, key: str) -> Type[Any]:
        """Return the class registered under ``key``.

        Raises:
            KeyError: Nothing is registered under ``key``.
        """
        try:
            return self._items[key]
        except KeyError:
            available = ", ".join(sorted(self._items))
            raise KeyError(f"{self._name}: unknown key '{key}'. Available: {available}") from None

    def create(self, key: str, **kwargs: Any) -> Any:
        """Instantiate the class registered under ``key`` with ``kwargs``."""
        return self.get(key)(**kwargs)

    def keys(self) -> List[str]:
        """Registered keys in registration order, e.g. for argparse choices."""
        return list(self._items)

    def __contains__(self, key: str) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)
