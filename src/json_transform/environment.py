"""Variable environment threaded through one evaluation run."""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List

from .types import JSONValue, UnboundVariableError


class Environment:
    """
    Variable bindings for a single apply call.

    User variables live in one flat mapping. Mapping expressions push a
    frame binding ``K``, ``V`` and ``C``; inner frames shadow outer ones
    and are popped when the element has been evaluated.
    """

    def __init__(self):
        self.variables: Dict[str, JSONValue] = {}
        self.frames: List[Dict[str, JSONValue]] = []

    def bind(self, name: str, value: JSONValue) -> None:
        self.variables[name] = value

    def lookup(self, name: str) -> JSONValue:
        """
        Look up a variable.

        Raises:
            UnboundVariableError: If the variable has no binding in scope
        """
        if name[:1].isupper():
            if self.frames and name in self.frames[-1]:
                return self.frames[-1][name]
            raise UnboundVariableError(
                f"Variable ${name} is only bound inside a mapping expression",
                context={"name": name},
            )
        if name not in self.variables:
            raise UnboundVariableError(f"Variable ${name} is not bound",
                                       context={"name": name})
        return self.variables[name]

    @contextmanager
    def frame(self, key: Any, value: JSONValue, count: int) -> Iterator["Environment"]:
        """Bind K, V and C for the duration of one mapping element."""
        self.frames.append({"K": key, "V": value, "C": count})
        try:
            yield self
        finally:
            self.frames.pop()
