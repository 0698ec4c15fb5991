# semantics/records.py
"""Analysis records handed from the analyzer to the code generator.

All records are frozen: they are built once during analysis and only read
afterwards.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

from simgo.internals.report import Span

# Witness type resolved by the generator from the folded value
AUTO = "auto"

# Type of witnesses and constants declared without an annotation
DEFAULT_TYPE = "u64"


@dataclass(frozen=True)
class WitnessValue:
    name: str                        # snake_case; upper-cased when emitted
    type: str                        # SimplicityHL type or AUTO
    value: str                       # Folded literal text
    loc: Optional[Span] = None


@dataclass(frozen=True)
class Constant:
    name: str                        # UPPER_SNAKE
    type: str
    value: str
    loc: Optional[Span] = None


@dataclass(frozen=True)
class Parameter:
    name: str
    type: str


@dataclass(frozen=True)
class Function:
    name: str
    params: Tuple[Parameter, ...]
    return_type: Optional[str]
    body: Tuple[str, ...]            # Body lines, relative indentation only
    loc: Optional[Span] = None


@dataclass(frozen=True)
class AnalysisResult:
    witnesses: Tuple[WitnessValue, ...] = ()
    constants: Tuple[Constant, ...] = ()
    functions: Tuple[Function, ...] = ()
