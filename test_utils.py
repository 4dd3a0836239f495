# test_utils.py

import pytest
import numpy as np
import pandas as pd
import sys
import os

# Add the directory containing utils.py to the Python path
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from constraints import RawRow, UnknownOperatorWarning, normalize
from graphical import Objective, solve
from utils import (
    NO_SOLUTION_MESSAGE,
    SolutionStorage,
    blank_rows,
    create_example_minimize,
    create_example_production,
    format_number,
    format_point,
    format_result,
    rows_to_records,
)
from ui_components import format_lp_problem, rows_from_dataframe, vertex_dataframe


# --- Number formatting ---

@pytest.mark.parametrize("value, expected", [
    (3.0, "3"),
    (3.5, "3.5"),
    (3.456, "3.46"),
    (10.0, "10"),
    (100, "100"),
    (-0.001, "0"),
    (-2.25, "-2.25"),
])
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_format_number_grouping_and_non_numeric():
    assert format_number(1234.5, grouping=True) == "1,234.5"
    assert format_number(1000000, grouping=True) == "1,000,000"
    assert format_number("abc") == "abc"
    assert format_number(np.inf) == "inf"
    assert format_point((3.0, 1.25)) == "(3, 1.25)"


def test_format_result():
    objective, rows, maximize = create_example_production()
    result = solve(normalize(rows), objective, maximize)
    assert format_result(result) == "Optimal: x = 3, y = 1\nZ = 11"

    infeasible = solve(normalize([(1, 1, "<=", -1)]), objective)
    assert format_result(infeasible) == NO_SOLUTION_MESSAGE


# --- Examples ---

def test_examples_solve_to_documented_optimum():
    objective, rows, maximize = create_example_production()
    result = solve(normalize(rows, include_non_negativity=True), objective, maximize)
    assert result.optimum == (3.0, 1.0)
    assert result.objective_value == pytest.approx(11.0)

    objective, rows, maximize = create_example_minimize()
    result = solve(normalize(rows, include_non_negativity=True), objective, maximize)
    assert result.optimum == (2.0, 0.0)
    assert result.objective_value == pytest.approx(6.0)


def test_blank_rows_normalize_to_nothing():
    assert normalize(blank_rows(3), include_non_negativity=False) == ()


# --- UI helpers ---

def test_rows_from_dataframe_round_trip():
    rows = [RawRow(1.0, 1.0, "<=", 4.0), RawRow(2.0, 0.0, "=", 4.0)]
    df = pd.DataFrame(rows_to_records(rows), columns=["a", "b", "op", "d"])
    assert rows_from_dataframe(df) == rows


def test_rows_from_dataframe_blank_cells():
    """New rows in the editor arrive with NaN/None cells; they count as 0 and <=."""
    df = pd.DataFrame([{"a": np.nan, "b": 2.0, "op": None, "d": 6.0},
                       {"a": np.nan, "b": np.nan, "op": None, "d": np.nan}],
                      columns=["a", "b", "op", "d"])
    rows = rows_from_dataframe(df)
    assert rows[0].op == "<="
    constraints = normalize(rows, include_non_negativity=False)
    assert len(constraints) == 1
    assert (constraints[0].a, constraints[0].b, constraints[0].c) == (0.0, 2.0, 6.0)


def test_format_lp_problem():
    latex = format_lp_problem(Objective(3, 2, 0), [(1, 1, "<=", 4), (1, 0, "<=", 3), (0, 0, "<=", 0)],
                              maximize=True, include_non_negativity=True)
    assert latex.startswith(r"\begin{align*}")
    assert r"\max \quad & z = 3x +2y" in latex
    assert r"x +y \leq 4" in latex
    assert r"x \leq 3" in latex
    assert r"x, y \geq 0" in latex
    assert latex.endswith(r"\end{align*}")


def test_format_lp_problem_minimize_with_constant():
    latex = format_lp_problem((-1, 0, 5), [(1, -1, ">=", 2), (2, 0, "=", 4)],
                              maximize=False, include_non_negativity=False)
    assert r"\min \quad & z = -x +5" in latex
    assert r"x -y \geq 2" in latex
    assert r"2x = 4" in latex
    assert r"\geq 0" not in latex


def test_format_lp_problem_skips_unknown_operator():
    """The formulation shows exactly the rows normalize keeps."""
    with pytest.warns(UnknownOperatorWarning):
        constraints = normalize([(1, 1, "<>", 2), (1, 0, "<=", 3)], include_non_negativity=False)
    assert len(constraints) == 1
    latex = format_lp_problem((1, 1, 0), [(1, 1, "<>", 2), (1, 0, "<=", 3)], include_non_negativity=False)
    assert r"x \leq 3" in latex
    assert "2" not in latex.split(r"\text{s.t.}")[-1]


def test_vertex_dataframe():
    objective, rows, maximize = create_example_production()
    result = solve(normalize(rows), objective, maximize)
    df = vertex_dataframe(SolutionStorage(normalize(rows), objective, maximize, result))
    assert list(df.columns) == ["x", "y", "z", "optimal"]
    assert len(df) == 4
    best = df[df["optimal"]]
    assert len(best) == 1
    assert best.iloc[0]["z"] == pytest.approx(11.0)


def test_vertex_dataframe_uses_objective_from_solve_time():
    """Editing the objective after solving must not change the reported z values."""
    objective, rows, maximize = create_example_production()
    constraints = normalize(rows)
    result = solve(constraints, objective, maximize)
    solution = SolutionStorage(constraints, objective, maximize, result)

    # Later edits to the objective widgets do not reach the stored solution
    objective = Objective(1, 1, 100)
    df = vertex_dataframe(solution)
    assert list(df["z"]) == pytest.approx([3 * x + 2 * y for x, y in result.vertices])
    best = df[df["optimal"]].iloc[0]
    assert best["z"] == pytest.approx(result.objective_value)
    assert (best["x"], best["y"]) == tuple(result.optimum)
