"""Processor for ``<%`` mappings over objects."""

import logging
from typing import Callable, Dict, List, Optional

from ..environment import Environment
from ..models import ArrayMapBody, Expr, MapBody
from ..types import JSONValue, MappingProcessorInterface, MapTypeError
from ..values import describe
from .array_processor import collect


class ObjectMapProcessor(MappingProcessorInterface):
    """
    Processor for object mapping expressions.

    Evaluates the mapping body once per key/value pair, in insertion
    order, with ``$K`` bound to the key, ``$V`` to the value and ``$C``
    to the number of pairs.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def process(self, source: JSONValue, body: MapBody, environment: Environment,
                evaluate: Callable[[Expr], JSONValue]) -> JSONValue:
        """
        Map an object into a new array or object.

        Raises:
            MapTypeError: If source is not an object
        """
        if not isinstance(source, dict):
            raise MapTypeError(
                f"Object mapping '<%' requires an object, got {describe(source)}",
                context={"operator": "<%"},
            )

        self.logger.debug(f"Mapping object with {len(source)} keys")

        array_out: List[JSONValue] = []
        object_out: Dict[str, JSONValue] = {}
        count = len(source)
        for key, value in source.items():
            collect(body, key, value, count, environment, evaluate, array_out, object_out)

        return array_out if isinstance(body, ArrayMapBody) else object_out
