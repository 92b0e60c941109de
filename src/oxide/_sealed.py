"""Sealed classes and modules.

Once built, the container classes and their module-level bindings are
read-only: `Option.all = ...`, `del Some.map` or `oxide.option.Nothing = 5`
raise AttributeError.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable
from types import ModuleType
from typing import Any

import msgspec

__all__ = ['SealedMeta', 'SealedModule', 'SealedStructMeta', 'SingletonStructMeta', 'seal_module']


class SealedMeta(type):
    """Metaclass rejecting attribute assignment and deletion after class creation."""

    def __init__(cls, name: str, bases: tuple[type, ...], namespace: dict[str, Any], **kwargs: Any) -> None:
        super().__init__(name, bases, namespace)
        type.__setattr__(cls, '__sealed__', True)

    def __setattr__(cls, name: str, value: Any) -> None:
        if cls.__dict__.get('__sealed__', False):
            msg = f"cannot set '{name}' on sealed class '{cls.__name__}'"
            raise AttributeError(msg)
        super().__setattr__(name, value)

    def __delattr__(cls, name: str) -> None:
        if cls.__dict__.get('__sealed__', False):
            msg = f"cannot delete '{name}' from sealed class '{cls.__name__}'"
            raise AttributeError(msg)
        super().__delattr__(name)


class SealedStructMeta(SealedMeta, msgspec.StructMeta):
    """SealedMeta for msgspec Struct variants of a sealed base."""


class SingletonStructMeta(SealedStructMeta):
    """SealedStructMeta whose classes construct one instance only."""

    _instances: dict[type, Any] = {}

    def __call__(cls, *args: Any, **kwargs: Any) -> Any:
        instances = SingletonStructMeta._instances
        if cls not in instances:
            instances[cls] = super().__call__(*args, **kwargs)
        return instances[cls]


class SealedModule(ModuleType):
    """Module type whose names listed in `__sealed__` cannot be rebound."""

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self.__dict__.get('__sealed__', ()):
            msg = f"cannot reassign '{self.__name__}.{name}'"
            raise AttributeError(msg)
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        if name in self.__dict__.get('__sealed__', ()):
            msg = f"cannot delete '{self.__name__}.{name}'"
            raise AttributeError(msg)
        super().__delattr__(name)


def seal_module(name: str, names: Iterable[str]) -> None:
    """Make `names` in the already-imported module `name` read-only.

    Example:
        ```python
        seal_module(__name__, __all__)
        ```
    """
    module = sys.modules[name]
    module.__dict__['__sealed__'] = frozenset(names)
    module.__class__ = SealedModule
