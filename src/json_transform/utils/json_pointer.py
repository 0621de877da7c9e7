"""JSON Pointer (RFC 6901) resolution, writing and deletion."""

import re
from typing import Any, List, Sequence, Tuple, Union

from ..types import (
    InvalidPointerError,
    JSONValue,
    PointerIndexError,
    PointerNotFoundError,
)

_ARRAY_INDEX = re.compile(r"0|[1-9][0-9]*")

APPEND_TOKEN = "-"


def escape_segment(segment: str) -> str:
    return segment.replace("~", "~0").replace("/", "~1")


def unescape_segment(segment: str) -> str:
    # the order of the replace statements is important, see RFC 6901 section 4
    return segment.replace("~1", "/").replace("~0", "~")


def join_pointer(segments: Sequence[Union[str, int]]) -> str:
    """Build pointer text from raw (unescaped) segments."""
    return "".join("/" + escape_segment(str(segment)) for segment in segments)


def _array_index(segment: str) -> Union[int, None]:
    if _ARRAY_INDEX.fullmatch(segment):
        return int(segment)
    return None


class JSONPointer:
    """
    A parsed JSON Pointer.

    The empty pointer addresses the whole document. Any other pointer
    must start with ``/``; its segments are unescaped (``~1`` to ``/``,
    then ``~0`` to ``~``) before being matched against object keys or
    array indices.
    """

    def __init__(self, text: str):
        if text and not text.startswith("/"):
            raise InvalidPointerError(
                f"JSON pointer {text!r} invalid: it must be empty or start with '/'",
                context={"pointer": text},
            )
        self.text = text
        self.segments: List[str] = (
            [unescape_segment(token) for token in text[1:].split("/")] if text else []
        )

    @property
    def is_root(self) -> bool:
        return not self.segments

    def __repr__(self) -> str:
        return f"JSONPointer({self.text!r})"

    def resolve(self, document: JSONValue) -> JSONValue:
        """
        Read the value the pointer addresses.

        Raises:
            PointerNotFoundError: If any segment does not resolve
        """
        current = document
        for depth, segment in enumerate(self.segments):
            current = self._step(current, segment, depth)
        return current

    def set(self, document: JSONValue, value: JSONValue) -> JSONValue:
        """
        Write value at the pointer, creating missing intermediate objects.

        Args:
            document: Root value, modified in place
            value: Value to store

        Returns:
            The document root, which is value itself for the root pointer

        Raises:
            PointerIndexError: On an invalid array segment
            PointerNotFoundError: When a scalar has to be traversed
        """
        if self.is_root:
            return value

        parent = document
        for depth, segment in enumerate(self.segments[:-1]):
            parent = self._step_for_write(parent, segment, depth)

        last = self.segments[-1]
        if isinstance(parent, dict):
            parent[last] = value
        elif isinstance(parent, list):
            if last == APPEND_TOKEN:
                parent.append(value)
            else:
                parent[self._write_index(parent, last, len(self.segments) - 1)] = value
        else:
            raise self._not_found(len(self.segments) - 1, "cannot write into a scalar")
        return document

    def locate(self, document: JSONValue) -> Tuple[Union[dict, list], Union[str, int]]:
        """
        Find the container holding the addressed value.

        Returns:
            Tuple of (parent container, key or index)

        Raises:
            InvalidPointerError: For the root pointer, which has no parent
            PointerNotFoundError: Under the same conditions as resolve
        """
        if self.is_root:
            raise InvalidPointerError("The document root has no parent",
                                      context={"pointer": self.text})
        parent = document
        for depth, segment in enumerate(self.segments[:-1]):
            parent = self._step(parent, segment, depth)

        last = self.segments[-1]
        depth = len(self.segments) - 1
        if isinstance(parent, dict):
            if last not in parent:
                raise self._not_found(depth, f"no key {last!r}")
            return parent, last
        if isinstance(parent, list):
            index = _array_index(last)
            if index is None or index >= len(parent):
                raise self._not_found(depth, f"no array index {last!r}")
            return parent, index
        raise self._not_found(depth, "cannot index into a scalar")

    def delete(self, document: JSONValue) -> JSONValue:
        """
        Remove the value the pointer addresses.

        Later array elements shift down by one.

        Raises:
            InvalidPointerError: For the root pointer
            PointerNotFoundError: Under the same conditions as resolve
        """
        if self.is_root:
            raise InvalidPointerError("Cannot delete the document root",
                                      context={"pointer": self.text})
        parent, key = self.locate(document)
        del parent[key]
        return document

    def _step(self, current: Any, segment: str, depth: int) -> Any:
        if isinstance(current, dict):
            if segment not in current:
                raise self._not_found(depth, f"no key {segment!r}")
            return current[segment]
        if isinstance(current, list):
            index = _array_index(segment)
            if index is None or index >= len(current):
                raise self._not_found(depth, f"no array index {segment!r}")
            return current[index]
        raise self._not_found(depth, "cannot index into a scalar")

    def _step_for_write(self, current: Any, segment: str, depth: int) -> Any:
        if isinstance(current, dict):
            child = current.get(segment)
            if child is None:
                child = current[segment] = {}
            return child
        if isinstance(current, list):
            if segment == APPEND_TOKEN:
                child = {}
                current.append(child)
                return child
            index = self._write_index(current, segment, depth)
            if current[index] is None:
                current[index] = {}
            return current[index]
        raise self._not_found(depth, "cannot write through a scalar")

    def _write_index(self, array: List[Any], segment: str, depth: int) -> int:
        index = _array_index(segment)
        if index is None or index >= len(array):
            raise PointerIndexError(
                f"Invalid array index {segment!r} at {self._prefix(depth)!r} in "
                f"pointer {self.text!r}: must be an existing index or '{APPEND_TOKEN}'",
                context={"pointer": self.text, "segment": segment},
            )
        return index

    def _prefix(self, depth: int) -> str:
        return join_pointer(self.segments[:depth + 1])

    def _not_found(self, depth: int, reason: str) -> PointerNotFoundError:
        return PointerNotFoundError(
            f"JSON pointer {self.text!r} not found at {self._prefix(depth)!r}: {reason}",
            context={"pointer": self.text, "segment": self.segments[depth]},
        )
