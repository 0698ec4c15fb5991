"""Go identifier -> SimplicityHL identifier conversions."""
from __future__ import annotations


def to_snake_case(name: str) -> str:
    """camelCase / PascalCase -> snake_case.

    Every ASCII capital after the first character starts a new word, so
    acronyms split per letter: "TxID" -> "tx_i_d".
    """
    out = []
    for i, ch in enumerate(name):
        if "A" <= ch <= "Z":
            if i > 0:
                out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out)


def to_upper_snake(name: str) -> str:
    """Name used for witness and parameter constants: amountValid -> AMOUNT_VALID."""
    return to_snake_case(name).upper()
