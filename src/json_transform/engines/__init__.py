"""Evaluation engines for JSON Transform."""

from .evaluator import Evaluator

__all__ = ["Evaluator"]
