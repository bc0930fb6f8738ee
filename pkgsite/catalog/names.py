"""Classification of function names into plain, namespaced and class-method kinds."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..errors import MalformedNameError


class FunctionKind(str, Enum):
    PLAIN = "function"
    NAMESPACED = "namespace"
    CLASS_METHOD = "class"


@dataclass(frozen=True)
class FunctionName:
    """A classified function name.

    ``owner`` is the namespace (``ns`` for ``ns.fn``) or the class without its
    ``@`` prefix (``Bar`` for ``@Bar/baz``); plain functions have no owner.
    """

    name: str
    kind: FunctionKind
    leaf: str
    owner: Optional[str] = None

    @property
    def initial(self) -> str:
        """Lower-cased character that selects the alphabetical bucket."""
        if self.kind is FunctionKind.CLASS_METHOD:
            return self.name[1].lower()
        return self.name[0].lower()


def classify(name: str) -> FunctionName:
    """Classify ``name``; raise :class:`MalformedNameError` for unusable names."""
    if not name:
        raise MalformedNameError("Function names must not be empty")

    if "." in name:
        namespace, _, function = name.partition(".")
        if not namespace or not function or "/" in function:
            raise MalformedNameError(
                f"Namespaced function '{name}' must have the form 'namespace.function'"
            )
        return FunctionName(name, FunctionKind.NAMESPACED, leaf=function, owner=namespace)

    if name.startswith("@"):
        if "/" not in name:
            raise MalformedNameError(
                f"Class method '{name}' lacks a '/' separating class and method name"
            )
        class_name, _, method = name[1:].partition("/")
        if not class_name or not method or "/" in method:
            raise MalformedNameError(f"Class method '{name}' must have the form '@Class/method'")
        return FunctionName(name, FunctionKind.CLASS_METHOD, leaf=method, owner=class_name)

    return FunctionName(name, FunctionKind.PLAIN, leaf=name)


__all__ = ["FunctionKind", "FunctionName", "classify"]
