"""Tree navigation utilities for traversing Lark parse trees."""
from __future__ import annotations
from typing import List, Optional, Callable
from lark import Tree, Token


def first(children: List[object], pred: Callable) -> Optional[object]:
    """Find first child matching predicate."""
    for ch in children:
        if pred(ch):
            return ch
    return None


def first_name(children: List[object]) -> Optional[Token]:
    """Get first NAME token from children."""
    return first(children, lambda c: isinstance(c, Token) and c.type == "NAME")  # type: ignore[return-value]


def first_tree(children: List[object], data: str) -> Optional[Tree]:
    """Get first Tree child with specific data tag."""
    return first(children, lambda c: isinstance(c, Tree) and c.data == data)  # type: ignore[return-value]


def trees(t: Tree) -> List[Tree]:
    """Tree children of `t`, tokens dropped."""
    return [c for c in t.children if isinstance(c, Tree)]


def tokens(t: Tree) -> List[Token]:
    """Token children of `t`."""
    return [c for c in t.children if isinstance(c, Token)]


def names_of(name_list: Tree) -> List[str]:
    """Identifiers of a `name_list` node, in order."""
    return [str(tok) for tok in name_list.children if isinstance(tok, Token) and tok.type == "NAME"]


def unquote(literal: str) -> str:
    """Strip the delimiters of a Go string literal; escapes are kept as written."""
    if len(literal) >= 2 and literal[0] == literal[-1] and literal[0] in "\"`":
        return literal[1:-1]
    return literal
