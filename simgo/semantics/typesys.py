from __future__ import annotations
from enum import Enum
from typing import Dict, List, Mapping
import re

from simgo.semantics.ast import (
    Expr, Ident, ArrayType, StructType, SelectorExpr, BasicLit,
)
from simgo.internals.exceptions import TypeMappingError


class TargetType(Enum):
    """SimplicityHL scalar types with a fixed bit width."""
    BOOL = "bool"
    U1 = "u1"
    U2 = "u2"
    U4 = "u4"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    U128 = "u128"
    U256 = "u256"
    UNIT = "()"

    def __str__(self) -> str:
        return self.value


BIT_WIDTHS: Mapping[str, int] = {
    "bool": 1,
    "u1": 1,
    "u2": 2,
    "u4": 4,
    "u8": 8,
    "u16": 16,
    "u32": 32,
    "u64": 64,
    "u128": 128,
    "u256": 256,
    "()": 0,
}

SIGNATURE_TYPE = "[u8; 64]"

# Go identifier -> SimplicityHL type. The domain aliases cover programs that
# dot-import or redeclare the bitcoin names.
GO_BUILTINS: Mapping[str, str] = {
    "bool": str(TargetType.BOOL),
    "uint8": str(TargetType.U8),
    "uint16": str(TargetType.U16),
    "uint32": str(TargetType.U32),
    "uint64": str(TargetType.U64),
    "byte": str(TargetType.U8),
    "Hash": str(TargetType.U256),
    "Address": str(TargetType.U256),
    "Pubkey": str(TargetType.U256),
    "Signature": SIGNATURE_TYPE,
}

# Types of the `bitcoin` package
BITCOIN_TYPES: Mapping[str, str] = {
    "Hash": str(TargetType.U256),
    "Address": str(TargetType.U256),
    "Pubkey": str(TargetType.U256),
    "Signature": SIGNATURE_TYPE,
    "Amount": str(TargetType.U64),
}

_DECIMAL = re.compile(r"^[0-9]+$")


class TypeMapper:
    """Translates Go type expressions into SimplicityHL type strings.

    Stateless apart from its lookup table; one instance may be shared.
    """

    def __init__(self, builtins: Mapping[str, str] = GO_BUILTINS) -> None:
        self.builtins: Dict[str, str] = dict(builtins)

    def map_type(self, expr: Expr) -> str:
        """Map a type expression, raising TypeMappingError when it has no equivalent."""
        match expr:
            case Ident():
                # Unknown names are user types defined elsewhere
                return self.builtins.get(expr.name, expr.name)
            case ArrayType():
                return self._map_array(expr)
            case StructType():
                return self._map_struct(expr)
            case SelectorExpr():
                return self._map_selector(expr)
            case _:
                raise TypeMappingError("SG3001", expr.loc, kind=type(expr).__name__)

    def _map_array(self, arr: ArrayType) -> str:
        try:
            elem = self.map_type(arr.elt)
        except TypeMappingError as e:
            raise e.wrap("array element type") from e

        if arr.len is None:
            raise TypeMappingError("SG2005", arr.loc)

        try:
            length = self._array_length(arr.len)
        except TypeMappingError as e:
            raise e.wrap("array length") from e
        return f"[{elem}; {length}]"

    def _array_length(self, expr: Expr) -> int:
        match expr:
            case BasicLit(kind="INT") if _DECIMAL.match(expr.value):
                return int(expr.value)
            case Ident():
                # Named constants are not evaluated here
                raise TypeMappingError("SG3002", expr.loc)
            case BasicLit():
                raise TypeMappingError("SG3003", expr.loc, kind=f"{expr.kind} literal {expr.value}")
            case _:
                raise TypeMappingError("SG3003", expr.loc, kind=type(expr).__name__)

    def _map_struct(self, st: StructType) -> str:
        if not st.fields:
            return str(TargetType.UNIT)

        slots: List[str] = []
        for f in st.fields:
            try:
                slot = self.map_type(f.ty)
            except TypeMappingError as e:
                raise e.wrap("struct field type") from e
            # Embedded fields take one slot, grouped names one slot each
            slots.extend([slot] * max(1, len(f.names)))

        if len(slots) == 1:
            return f"({slots[0]},)"
        return f"({', '.join(slots)})"

    def _map_selector(self, sel: SelectorExpr) -> str:
        if not isinstance(sel.x, Ident):
            raise TypeMappingError("SG3006", sel.loc)

        if sel.x.name == "bitcoin":
            try:
                return BITCOIN_TYPES[sel.sel]
            except KeyError:
                raise TypeMappingError("SG3004", sel.loc, name=sel.sel) from None

        raise TypeMappingError("SG3005", sel.loc, name=f"{sel.x.name}.{sel.sel}")

    def bit_width(self, type_str: str) -> int:
        """Bit width of a SimplicityHL type string; 0 when unknown. Never raises."""
        s = type_str.strip()
        if s in BIT_WIDTHS:
            return BIT_WIDTHS[s]

        if s.startswith("[") and s.endswith("]") and ";" in s:
            # Split on the last ';' so nested arrays keep their inner separator
            elem, _, count = s[1:-1].rpartition(";")
            count = count.strip()
            if _DECIMAL.match(count):
                return self.bit_width(elem) * int(count)
            return 0

        if s.startswith("(") and s.endswith(")"):
            return sum(self.bit_width(slot) for slot in _split_tuple(s[1:-1]))

        return 0

    def is_supported(self, expr: Expr) -> bool:
        try:
            self.map_type(expr)
        except TypeMappingError:
            return False
        return True

    def supported_types(self) -> List[str]:
        """Go type names with a builtin mapping, in table order."""
        return list(self.builtins)


def _split_tuple(inner: str) -> List[str]:
    """Split tuple slots on top-level commas; `(T,)` yields one slot."""
    slots: List[str] = []
    depth = 0
    current = ""
    for ch in inner:
        if ch in "[(":
            depth += 1
        elif ch in "])":
            depth -= 1
        if ch == "," and depth == 0:
            slots.append(current)
            current = ""
            continue
        current += ch
    slots.append(current)
    return [slot for slot in slots if slot.strip()]
