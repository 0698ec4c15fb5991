# internals/errors.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from simgo.internals.report import Span, Reporter


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Category(str, Enum):
    GENERAL    = "general"
    SYNTAX     = "syntax"
    VALIDATION = "validation"
    TYPE       = "type"
    EVAL       = "evaluation"
    CODEGEN    = "codegen"
    DRIVER     = "driver"
    INTERNAL   = "internal"


@dataclass(frozen=True)
class ErrorMessage:
    code: str
    severity: Severity
    text: str
    category: Category = Category.GENERAL
    doc: str = ""


REGISTRY: Dict[str, ErrorMessage] = {}

class _ErrorCatalog:
    def __init__(self, backing: Dict[str, ErrorMessage]) -> None:
        self._registry = backing

    def __getattr__(self, name: str) -> ErrorMessage:
        try:
            return self._registry[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __getitem__(self, code: str) -> ErrorMessage:
        return self._registry[code]


ERR = _ErrorCatalog(REGISTRY)

def emit(r: Reporter, em: ErrorMessage, span: Optional[Span], **kwargs) -> None:
    text = format_message(em.code, **kwargs)
    if em.severity == Severity.ERROR:
        r.error(em.code, text, span)
    else:
        r.warn(em.code, text, span)

def format_message(code: str, **kwargs) -> str:
    """Render the catalog text for `code` with its format parameters."""
    msg = _get(code)
    try:
        return msg.text.format(**kwargs)
    except KeyError as key_error:
        missing = key_error.args[0]
        raise KeyError(f"missing text key '{missing}' for {code} "
                       f"(needed by: {msg.text!r})") from None

def raise_internal_error(code: str, **kwargs) -> None:
    """Raise a RuntimeError for internal transpiler errors.

    Internal errors (SG0xxx codes) indicate transpiler bugs, not user code
    issues.

    Raises:
        RuntimeError: Always raises with formatted error message
    """
    text = format_message(code, **kwargs)
    raise RuntimeError(f"{code}: {text}")


#
# --- Helpers
#

def _add(msg: ErrorMessage) -> None:
    if msg.code in REGISTRY:
        raise ValueError(f"duplicate error code {REGISTRY[msg.code]} in {msg}")
    REGISTRY[msg.code] = msg

def _get(code: str) -> ErrorMessage:
    try:
        return REGISTRY[code]
    except KeyError:
        raise KeyError(f"unknown error code: {code}") from None

#
# --- Registry population
#

# Internal errors (transpiler bugs) - SG0xxx range
_add(ErrorMessage("SG0001", Severity.ERROR,
    "unknown AST node '{node}'",
    Category.INTERNAL, "A node kind reached a dispatch that does not handle it."))

_add(ErrorMessage("SG0002", Severity.ERROR,
    "unexpected parse tree node '{node}'",
    Category.INTERNAL, "The AST builder met a grammar rule it has no handler for."))

_add(ErrorMessage("SG0003", Severity.ERROR,
    "unresolved witness type '{name}'",
    Category.INTERNAL, "A witness reached code generation without a concrete type."))

# Front end - SG1xxx range
_add(ErrorMessage("SG1001", Severity.ERROR,
    "syntax error: {detail}",
    Category.SYNTAX, "The source is not valid for the supported Go subset."))

_add(ErrorMessage("SG1002", Severity.ERROR,
    "{detail}",
    Category.SYNTAX, "The parse tree has a shape the AST builder cannot represent."))

_add(ErrorMessage("SG1003", Severity.ERROR,
    "unexpected character {char!r}",
    Category.SYNTAX, "The lexer met a character that starts no token."))

# Validation - SG2xxx range
_add(ErrorMessage("SG2001", Severity.ERROR,
    "loops are not supported in Simplicity",
    Category.VALIDATION, "Simplicity programs are loop free; unroll the computation."))

_add(ErrorMessage("SG2002", Severity.ERROR,
    "goroutines are not supported in Simplicity",
    Category.VALIDATION, "Programs are strictly sequential."))

_add(ErrorMessage("SG2003", Severity.ERROR,
    "channels are not supported in Simplicity",
    Category.VALIDATION, "Channel types, sends and receives have no Simplicity equivalent."))

_add(ErrorMessage("SG2004", Severity.ERROR,
    "interfaces are not supported in Simplicity",
    Category.VALIDATION, "Dynamic dispatch has no Simplicity equivalent."))

_add(ErrorMessage("SG2005", Severity.ERROR,
    "slices are not supported, use fixed-size arrays",
    Category.VALIDATION, "Only statically sized arrays ([N]T) are allowed."))

_add(ErrorMessage("SG2006", Severity.ERROR,
    "maps are not supported in Simplicity",
    Category.VALIDATION, "Unbounded collections have no Simplicity equivalent."))

_add(ErrorMessage("SG2100", Severity.ERROR,
    "unsupported Go features detected:\n{details}",
    Category.VALIDATION, "Summary raised when validation found one or more issues."))

# Type mapping - SG3xxx range
_add(ErrorMessage("SG3001", Severity.ERROR,
    "unsupported Go type: {kind}",
    Category.TYPE, "The type expression has no SimplicityHL mapping."))

_add(ErrorMessage("SG3002", Severity.ERROR,
    "array length must be a literal integer",
    Category.TYPE, "Constant names are not evaluated in array lengths."))

_add(ErrorMessage("SG3003", Severity.ERROR,
    "unsupported array length expression: {kind}",
    Category.TYPE, "Array lengths must be decimal integer literals."))

_add(ErrorMessage("SG3004", Severity.ERROR,
    "unsupported bitcoin type: {name}",
    Category.TYPE, "Only bitcoin.Hash, Address, Pubkey, Signature and Amount are known."))

_add(ErrorMessage("SG3005", Severity.ERROR,
    "unsupported qualified type: {name}",
    Category.TYPE, "Qualified type names outside the bitcoin package are not known."))

_add(ErrorMessage("SG3006", Severity.ERROR,
    "unsupported selector expression",
    Category.TYPE, "Only package.Name selectors can name a type."))

_add(ErrorMessage("SG3007", Severity.ERROR,
    "failed to map {what}: {detail}",
    Category.TYPE, "Wraps a mapping error raised while mapping a nested type."))

# Driver - SG4xxx range
_add(ErrorMessage("SG4001", Severity.ERROR,
    "unsupported target: {target}",
    Category.DRIVER, "Known targets are 'simplicityhl' and 'simplicity'."))

_add(ErrorMessage("SG4002", Severity.ERROR,
    "direct Simplicity compilation not yet implemented",
    Category.DRIVER, "Only SimplicityHL output is produced."))

_add(ErrorMessage("SG4003", Severity.ERROR,
    "cannot read {path}: {reason}",
    Category.DRIVER, "The input file could not be read."))

_add(ErrorMessage("SG4004", Severity.ERROR,
    "cannot write {path}: {reason}",
    Category.DRIVER, "The output file could not be written."))

_add(ErrorMessage("SG4005", Severity.ERROR,
    "input file does not exist: {path}",
    Category.DRIVER, "The path given as input does not exist."))

# Warnings
_add(ErrorMessage("SW0001", Severity.WARNING,
    "'{name}' could not be evaluated at compile time; using the default value 'true'",
    Category.EVAL, "The expression is not two foldable literals; the evaluator fell back to 'true'."))

_add(ErrorMessage("SW0002", Severity.WARNING,
    "no entry assertion could be derived; emitting 'assert!(true)'",
    Category.CODEGEN, "No 'result' witness and no function whose parameters match the boolean witnesses."))

_add(ErrorMessage("SW0003", Severity.WARNING,
    "source file does not end with a newline",
    Category.GENERAL, "Purely cosmetic."))

_add(ErrorMessage("SW0004", Severity.WARNING,
    "entry function '{name}' not found; the witness block will be empty",
    Category.GENERAL, "No function with the configured entry name was declared."))
