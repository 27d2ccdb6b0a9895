"""
Schema Builder Module

Builds operation schemas from controller operations with:
- Recursive member expansion (generics, inheritance, subtypes)
- Bounded self-reference (one extra level, then cut)
- Default values probed from representative instances
- Synthesized JSON example values
"""

from .defaults import DefaultValueError, DefaultValueProbe
from .examples import ExampleSynthesizer
from .operation_analyzer import OperationAnalysisError, OperationAnalyzer
from .schema_builder import SchemaBuilder

__all__ = [
    "DefaultValueError",
    "DefaultValueProbe",
    "ExampleSynthesizer",
    "OperationAnalysisError",
    "OperationAnalyzer",
    "SchemaBuilder",
]
