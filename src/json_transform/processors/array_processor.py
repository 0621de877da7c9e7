"""Processor for ``<@`` mappings over arrays."""

import logging
from typing import Any, Callable, Dict, List, Optional

from ..environment import Environment
from ..models import ArrayMapBody, Expr, MapBody
from ..types import JSONValue, MappingProcessorInterface, MapTypeError
from ..values import describe, render


def collect(body: MapBody, key: Any, value: JSONValue, count: int,
            environment: Environment, evaluate: Callable[[Expr], JSONValue],
            array_out: List[JSONValue], object_out: Dict[str, JSONValue]) -> None:
    """Evaluate a mapping body for one element and collect the result."""
    with environment.frame(key, value, count):
        if isinstance(body, ArrayMapBody):
            array_out.append(evaluate(body.value))
        else:
            out_key = render(evaluate(body.key), "an object key")
            # existing keys keep their position, the last value wins
            object_out[out_key] = evaluate(body.value)


class ArrayMapProcessor(MappingProcessorInterface):
    """
    Processor for array mapping expressions.

    Evaluates the mapping body once per array element, in index order,
    with ``$K`` bound to the zero-based index, ``$V`` to the element and
    ``$C`` to the number of elements.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the array processor.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def process(self, source: JSONValue, body: MapBody, environment: Environment,
                evaluate: Callable[[Expr], JSONValue]) -> JSONValue:
        """
        Map an array into a new array or object.

        Args:
            source: Value the mapping operator was applied to
            body: Mapping description
            environment: Environment receiving the per-element frames
            evaluate: Expression evaluator bound to the current document

        Returns:
            A list for ``[ ]`` bodies, a dict for ``{ }`` bodies

        Raises:
            MapTypeError: If source is not an array
        """
        if not isinstance(source, list):
            raise MapTypeError(
                f"Array mapping '<@' requires an array, got {describe(source)}",
                context={"operator": "<@"},
            )

        self.logger.debug(f"Mapping array with {len(source)} items")

        array_out: List[JSONValue] = []
        object_out: Dict[str, JSONValue] = {}
        count = len(source)
        for index, item in enumerate(source):
            collect(body, index, item, count, environment, evaluate, array_out, object_out)

        return array_out if isinstance(body, ArrayMapBody) else object_out
