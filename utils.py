# utils.py
import numpy as np
import streamlit as st

from constraints import RawRow

NO_SOLUTION_MESSAGE = "No feasible region found (empty or unbounded)."
NO_CONSTRAINTS_MESSAGE = "Please enter at least one valid constraint."


class SolutionStorage:
    """A SolveResult together with the inputs it was computed from."""
    def __init__(self, constraints, objective, maximize, result):
        self.constraints = constraints
        self.objective = objective
        self.maximize = maximize
        self.result = result


def format_number(value, digits=2, grouping=False):
    """
    Format a value with at most `digits` decimals, dropping trailing zeros.

    Args:
        value: The numerical value to format.
        digits: Maximum number of decimals.
        grouping: Use thousands separators (for the objective readout).

    Returns:
        Formatted string, e.g. 3.50 -> '3.5', 2.0 -> '2', 1234.5 -> '1,234.5'.
    """
    try:
        float_value = float(value)
    except (TypeError, ValueError):
        return str(value)
    if not np.isfinite(float_value):
        return str(float_value)

    text = f"{float_value:,.{digits}f}" if grouping else f"{float_value:.{digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


def format_point(point, digits=2):
    return f"({format_number(point[0], digits)}, {format_number(point[1], digits)})"


def format_result(result):
    """Readout for a SolveResult: optimum coordinates and Z, or the no-solution message."""
    if not result.feasible:
        return NO_SOLUTION_MESSAGE
    x, y = result.optimum
    return (f"Optimal: x = {format_number(x)}, y = {format_number(y)}\n"
            f"Z = {format_number(result.objective_value, grouping=True)}")


def create_example_production():
    """Create a small 2D production problem (Maximize)"""
    # Maximize: z = 3x + 2y
    # Subject to:
    #   x + y <= 4
    #   x     <= 3
    #   x, y >= 0
    # Optimal: x=3, y=1, z = 11
    objective = (3.0, 2.0, 0.0)
    rows = [
        RawRow(1.0, 1.0, "<=", 4.0),
        RawRow(1.0, 0.0, "<=", 3.0),
    ]
    return objective, rows, True


def create_example_minimize():
    """Create a 2D diet-style problem with >= constraints (Minimize)"""
    # Minimize: z = 3x + 4y
    # Subject to:
    #   x + y  >= 2
    #   2x + y >= 3
    #   x, y >= 0
    # Optimal: x=2, y=0, z = 6
    objective = (3.0, 4.0, 0.0)
    rows = [
        RawRow(1.0, 1.0, ">=", 2.0),
        RawRow(2.0, 1.0, ">=", 3.0),
    ]
    return objective, rows, False


def rows_to_records(rows):
    """RawRows as a list of dicts (one per table row)."""
    return [{"a": row.a, "b": row.b, "op": row.op, "d": row.d} for row in rows]


def initialize_session_state():
    """Initialize all required session state variables if they don't exist."""
    objective_def, rows_def, maximize_def = create_example_production()

    defaults = {
        'coef_x': objective_def[0],
        'coef_y': objective_def[1],
        'const': objective_def[2],
        'opt_type': "Maximize" if maximize_def else "Minimize",
        'nonneg': True,
        'rows': rows_to_records(rows_def),
        'editor_version': 0,
        'solution': None,
        'has_solved': False,
        'check_with_scipy': False,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def blank_rows(count=1):
    """Fresh empty constraint rows (what Clear leaves behind)."""
    return [{"a": None, "b": None, "op": "<=", "d": None} for _ in range(count)]
