# test_plotting.py

import pytest
import sys
import os

import matplotlib
matplotlib.use("Agg") # No display needed
import matplotlib.pyplot as plt

# Add the directory containing plotting.py to the Python path
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from constraints import normalize
from graphical import Objective, Point, solve
from plotting import get_plot_bounds, order_polygon, plot_feasible_region


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


def test_plot_bounds_default_and_padding():
    # Small region: the 5x5 minimum applies, padded by 18%
    assert get_plot_bounds([(0, 0), (1, 1)]) == pytest.approx((0.0, 5.9, 0.0, 5.9))
    # Larger region: padding uses the larger extent on both axes
    assert get_plot_bounds([(0, 0), (10, 2)]) == pytest.approx((0.0, 11.8, 0.0, 6.8))
    assert get_plot_bounds([]) == pytest.approx((0.0, 5.9, 0.0, 5.9))


def test_plot_bounds_extend_to_negative_vertices():
    # x spans -2..5 (7 wide), so the pad is 7 * 0.18 = 1.26 on every side that moves
    assert get_plot_bounds([(-2, 0), (3, 1)]) == pytest.approx((-3.26, 6.26, 0.0, 6.26))
    min_x, max_x, min_y, max_y = get_plot_bounds([(1, -4), (2, 2)])
    assert min_y < -4 and min_x == 0.0
    assert max_y > 5


def test_order_polygon_is_counter_clockwise():
    square = [Point(1, 1), Point(0, 0), Point(0, 1), Point(1, 0)]
    ordered = order_polygon(square)
    assert ordered == [Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)]
    # Fewer than three points are returned unchanged
    assert order_polygon([Point(2, 0), Point(2, 5)]) == [Point(2, 0), Point(2, 5)]


def test_plot_feasible_region_returns_figure():
    constraints = normalize([(1, 1, "<=", 4), (1, 0, "<=", 3)], include_non_negativity=True)
    result = solve(constraints, Objective(3, 2, 0), maximize=True)

    fig, err = plot_feasible_region(constraints, result, maximize=True, title="Test")
    assert err is None
    assert fig is not None

    ax = fig.axes[0]
    assert ax.get_title() == "Test"
    texts = [t.get_text() for t in ax.texts]
    assert "MAX = 11" in texts
    assert "(3, 1)" in texts
    legend_labels = [t.get_text() for t in ax.get_legend().get_texts()]
    assert "1x + 1y ≤ 4" in legend_labels
    assert "x ≥ 0" in legend_labels


def test_unlabeled_half_planes_are_not_drawn():
    constraints = normalize([(2, 0, "=", 4), (0, 1, "<=", 5)], include_non_negativity=True)
    result = solve(constraints, Objective(0, 1, 0), maximize=False)

    fig, err = plot_feasible_region(constraints, result, maximize=False)
    assert err is None
    legend_labels = [t.get_text() for t in fig.axes[0].get_legend().get_texts()]
    assert legend_labels.count("2x + 0y = 4") == 1
    assert "" not in legend_labels
    assert "MIN = 0" in [t.get_text() for t in fig.axes[0].texts]


def test_plot_infeasible_result():
    constraints = normalize([(1, 1, "<=", -1)], include_non_negativity=True)
    result = solve(constraints, Objective(1, 1, 0))

    fig, err = plot_feasible_region(constraints, result)
    assert err is None
    assert "No feasible region" in [t.get_text() for t in fig.axes[0].texts]


def test_plot_shows_region_left_of_the_y_axis():
    rows = [(1, 0, ">=", -2), (1, 0, "<=", 3), (0, 1, ">=", 0), (0, 1, "<=", 1)]
    constraints = normalize(rows, include_non_negativity=False)
    result = solve(constraints, Objective(-1, 0, 0), maximize=True)
    assert result.optimum == (-2.0, 0.0)

    fig, err = plot_feasible_region(constraints, result, maximize=True)
    assert err is None
    ax = fig.axes[0]
    left, right = ax.get_xlim()
    assert left < -2 < 3 < right
    legend_labels = [t.get_text() for t in ax.get_legend().get_texts()]
    assert "1x + 0y ≥ -2" in legend_labels
    assert "MAX = 2" in [t.get_text() for t in ax.texts]
