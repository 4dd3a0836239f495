# ui_components.py
import streamlit as st
import pandas as pd
import numpy as np

from constraints import RawRow, LE, GE, EQ, as_raw_row, parse_operator, to_float
from graphical import evaluate
from utils import format_number, format_result, NO_SOLUTION_MESSAGE

OPERATOR_CHOICES = [LE, GE, EQ]
LATEX_OPERATORS = {LE: r"\leq", GE: r"\geq", EQ: "="}


def _format_linear_terms(coeffs, names):
    """LaTeX for sum(coeff * name), skipping zero terms and unit coefficients."""
    terms = []
    for coeff, name in zip(coeffs, names):
        if np.isclose(coeff, 0):
            continue
        if np.isclose(abs(coeff), 1):
            term = f"{'+' if coeff > 0 else '-'}{name}"
        else:
            term = f"{coeff:+.4g}{name}"
        if not terms and coeff > 0: # No leading '+' on the first term
            term = term[1:]
        terms.append(term)
    return ' '.join(terms)


def format_lp_problem(objective, rows, maximize=True, include_non_negativity=True):
    """
    Format the two-variable LP in LaTeX.

    Blank rows are left out; raw fields are coerced the same way normalize does.
    """
    a, b, k = (to_float(v) for v in objective)
    obj_str = _format_linear_terms([a, b], ["x", "y"])
    if not np.isclose(k, 0):
        obj_str = f"{obj_str} {k:+.4g}" if obj_str else f"{k:.4g}"
    if not obj_str:
        obj_str = "0"

    sense = r"\max" if maximize else r"\min"
    latex = r"\begin{align*}"
    latex += f"{sense} \\quad & z = {obj_str} \\\\[1em]"
    latex += r"\text{s.t.} \quad & "

    lines = []
    for row in rows:
        row = as_raw_row(row)
        ra, rb, rd = to_float(row.a), to_float(row.b), to_float(row.d)
        if ra == 0 and rb == 0 and rd == 0:
            continue
        op = parse_operator(row.op)
        if op is None:
            continue # normalize skips it too
        lhs = _format_linear_terms([ra, rb], ["x", "y"]) or "0"
        lines.append(f"\\qquad {lhs} {LATEX_OPERATORS[op]} {rd:.4g}")
    if include_non_negativity:
        lines.append(r"\qquad x, y \geq 0")
    if not lines:
        lines.append(r"\qquad \text{(no constraints)}")

    latex += r" \\ & ".join(lines)
    latex += r"\end{align*}"
    return latex


def rows_from_dataframe(df):
    """Turn the edited constraint table (columns a, b, op, d) into RawRows."""
    rows = []
    for record in df.to_dict("records"):
        op = record.get("op")
        if op is None or (isinstance(op, float) and np.isnan(op)):
            op = LE
        rows.append(RawRow(record.get("a"), record.get("b"), op, record.get("d")))
    return rows


def vertex_dataframe(solution):
    """Corner points with their objective values under the solved objective; the optimum is flagged."""
    result, objective = solution.result, solution.objective
    records = []
    for vertex in result.vertices:
        records.append({
            "x": vertex.x,
            "y": vertex.y,
            "z": evaluate(objective, vertex),
            "optimal": vertex == result.optimum,
        })
    return pd.DataFrame(records, columns=["x", "y", "z", "optimal"])


def display_result(solution, scipy_status=None):
    """Display the optimal vertex and Z, or the no-solution state."""
    st.header("Result")

    if solution is None or solution.result is None:
        st.warning("Solution data not available.")
        return
    result = solution.result

    if not result.feasible:
        message = NO_SOLUTION_MESSAGE
        if scipy_status == "infeasible":
            message = "No feasible region found (the constraints are contradictory)."
        elif scipy_status == "unbounded":
            message = "No optimum: the objective is unbounded over the feasible region."
        st.error(message)
        return

    x, y = result.optimum
    sense = "max" if solution.maximize else "min"
    st.latex(
        f"x^* = {format_number(x)}, \\quad y^* = {format_number(y)}"
        f" \\qquad z_{{{sense}}} = {format_number(result.objective_value, grouping=True)}"
    )
    st.text(format_result(result))

    df = vertex_dataframe(solution)
    st.dataframe(df.style.format({"x": "{:.4f}", "y": "{:.4f}", "z": "{:.4f}"}),
                 hide_index=True, use_container_width=True)

    if scipy_status is not None and scipy_status != "optimal":
        st.warning(f"SciPy reports the problem as {scipy_status}; corner points may not bound the optimum.")
