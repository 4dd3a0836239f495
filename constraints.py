# constraints.py
import math
import warnings
from collections import namedtuple


class GraphicalLPError(Exception):
    """Base class for errors raised by the graphical LP solver."""
    pass

class UnknownOperatorWarning(UserWarning):
    """Issued for a row whose operator is not <=, >= or =; the row is skipped."""
    pass

class DegenerateConstraintWarning(UserWarning):
    """Issued for a row with both x and y coefficients zero but a non-zero bound."""
    pass


# Raw row as collected from the input form. Fields may be blank or non-numeric.
RawRow = namedtuple("RawRow", ["a", "b", "op", "d"])

# Canonical half-plane a*x + b*y <= c
HalfPlane = namedtuple("HalfPlane", ["a", "b", "c", "label"])

LE, GE, EQ = "<=", ">=", "="

OPERATOR_ALIASES = {
    "<=": LE, "≤": LE, "=<": LE,
    ">=": GE, "≥": GE, "=>": GE,
    "=": EQ, "==": EQ,
}

OPERATOR_SYMBOLS = {LE: "≤", GE: "≥", EQ: "="}

NON_NEGATIVITY = (
    HalfPlane(-1.0, 0.0, 0.0, "x ≥ 0"),
    HalfPlane(0.0, -1.0, 0.0, "y ≥ 0"),
)


def to_float(value):
    """
    Coerce a raw form value to float.

    Blank, missing and unparseable values (and NaN/inf) count as 0, the same
    way an empty input box does.
    """
    if value is None:
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def parse_operator(op):
    """Map an operator token (ASCII or unicode) to one of LE, GE, EQ, or None if unknown."""
    if not isinstance(op, str):
        return None
    return OPERATOR_ALIASES.get(op.strip())


def format_coefficient(value):
    """Write integral floats without a decimal part (3.0 -> '3')."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def make_label(a, b, op, d):
    return f"{format_coefficient(a)}x + {format_coefficient(b)}y {OPERATOR_SYMBOLS[op]} {format_coefficient(d)}"


def as_raw_row(row):
    """Accept a RawRow, a mapping with keys a/b/op/d or an (a, b, op, d) sequence."""
    if isinstance(row, RawRow):
        return row
    if isinstance(row, dict):
        return RawRow(row.get("a"), row.get("b"), row.get("op", LE), row.get("d"))
    a, b, op, d = row
    return RawRow(a, b, op, d)


def normalize_row(row):
    """
    Convert one raw row to its canonical half-planes.

    Returns an empty tuple for a blank row or an unknown operator, one
    half-plane for <= and >=, and two for = (the mirrored one unlabeled so the line is drawn once).
    """
    row = as_raw_row(row)
    a, b, d = to_float(row.a), to_float(row.b), to_float(row.d)
    if a == 0 and b == 0 and d == 0:
        return ()

    op = parse_operator(row.op)
    if op is None:
        warnings.warn(
            f"Unknown constraint operator {row.op!r} (expected <=, >= or =); row skipped.",
            UnknownOperatorWarning,
        )
        return ()

    if a == 0 and b == 0:
        warnings.warn(
            f"Constraint 0x + 0y {OPERATOR_SYMBOLS[op]} {format_coefficient(d)} has no line; "
            "it only affects feasibility.",
            DegenerateConstraintWarning,
        )

    label = make_label(a, b, op, d)
    if op == LE:
        return (HalfPlane(a, b, d, label),)
    if op == GE:
        return (HalfPlane(-a, -b, -d, label),)
    return (HalfPlane(a, b, d, label), HalfPlane(-a, -b, -d, ""))


def normalize(rows, include_non_negativity=True):
    """
    Build the constraint set for one solve.

    Args:
        rows: iterable of raw rows (see as_raw_row).
        include_non_negativity: prepend x >= 0 and y >= 0.

    Returns:
        tuple of HalfPlane in insertion order.
    """
    constraints = list(NON_NEGATIVITY) if include_non_negativity else []
    for row in rows:
        constraints.extend(normalize_row(row))
    return tuple(constraints)
