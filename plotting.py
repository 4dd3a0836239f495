# plotting.py
import math
import warnings

import numpy as np
import matplotlib.pyplot as plt

from utils import format_number

LINE_TOL = 1e-8


def get_plot_bounds(vertices, default_max=5, pad_ratio=0.18):
    """
    Calculate plot bounds from the corner points.
    Returns (min_x, max_x, min_y, max_y). The origin is always in view; a
    lower bound moves below 0 only to take in negative corner points.
    """
    min_x, min_y = 0.0, 0.0
    max_x, max_y = default_max, default_max
    finite = [v for v in vertices if np.isfinite(v[0]) and np.isfinite(v[1])]
    if finite:
        min_x = min(min(v[0] for v in finite), 0.0)
        min_y = min(min(v[1] for v in finite), 0.0)
        max_x = max(max(v[0] for v in finite), default_max)
        max_y = max(max(v[1] for v in finite), default_max)

    pad = max(max_x - min_x, max_y - min_y) * pad_ratio
    if min_x < 0:
        min_x -= pad
    if min_y < 0:
        min_y -= pad
    return min_x, max_x + pad, min_y, max_y + pad


def order_polygon(vertices):
    """Sort corner points counter-clockwise by angle around their centroid."""
    if len(vertices) < 3:
        return list(vertices)
    cx = sum(v[0] for v in vertices) / len(vertices)
    cy = sum(v[1] for v in vertices) / len(vertices)
    return sorted(vertices, key=lambda v: math.atan2(v[1] - cy, v[0] - cx))


def plot_feasible_region(constraints, result, maximize=True, title="Feasible Region"):
    """
    Plot the constraint lines, feasible polygon, corner points and optimum using Matplotlib.
    Args:
        constraints: sequence of HalfPlane; unlabeled ones are not drawn.
        result: SolveResult from graphical.solve.
        maximize: selects the MAX/MIN annotation.
        title: Plot title.
    Returns: Matplotlib figure or None, error message string or None.
    """
    try:
        min_x, max_x, min_y, max_y = get_plot_bounds(result.vertices)
        fig, ax = plt.subplots(figsize=(7, 7))
        x_grid = np.linspace(min_x, max_x, 200)

        # --- Constraint lines ---
        colors = plt.cm.viridis(np.linspace(0, 1, max(len(constraints), 1)))
        for i, h in enumerate(constraints):
            if not h.label:
                continue
            if abs(h.b) < LINE_TOL:
                if abs(h.a) < LINE_TOL:
                    continue # 0x + 0y: no line to draw
                x_line = h.c / h.a
                if min_x - LINE_TOL <= x_line <= max_x:
                    ax.axvline(x=x_line, color=colors[i], linestyle='--', linewidth=1.5, label=h.label, alpha=0.8)
            else:
                ax.plot(x_grid, (h.c - h.a * x_grid) / h.b, color=colors[i], linestyle='--',
                        linewidth=1.5, label=h.label, alpha=0.8)

        # --- Feasible polygon ---
        if len(result.vertices) >= 3:
            polygon = order_polygon(result.vertices)
            ax.fill([v[0] for v in polygon], [v[1] for v in polygon],
                    facecolor=(33 / 255, 150 / 255, 243 / 255, 0.18),
                    edgecolor='#1976d2', linewidth=2, zorder=1)

        # --- Corner points ---
        for x, y in result.vertices:
            ax.scatter(x, y, color='#424242', s=20, zorder=5)
            ax.annotate(f'({format_number(x, 1)}, {format_number(y, 1)})', (x, y),
                        textcoords="offset points", xytext=(6, 6), fontsize=8, color='#424242')

        # --- Optimum ---
        if result.optimum is not None:
            opt_x, opt_y = result.optimum
            ax.scatter(opt_x, opt_y, color='#d32f2f', edgecolors='white', linewidths=2, s=120, zorder=10,
                       label=f'Optimal: ({opt_x:.3g}, {opt_y:.3g})')
            sense = 'MAX' if maximize else 'MIN'
            ax.annotate(f'{sense} = {format_number(result.objective_value, grouping=True)}', (opt_x, opt_y),
                        textcoords="offset points", xytext=(10, 12), fontsize=11,
                        fontweight='bold', color='#d32f2f')
        else:
            ax.text(0.5, 0.5, 'No feasible region', ha='center', va='center',
                    transform=ax.transAxes, fontsize=12, color='#d32f2f', style='italic')

        # --- Plot configuration ---
        ax.set_xlim(min_x, max_x)
        ax.set_ylim(min_y, max_y)
        ax.grid(True, linestyle='--', alpha=0.6, zorder=0)
        ax.axvline(0, color='#dddddd', linewidth=1, zorder=0.5)
        ax.axhline(0, color='#dddddd', linewidth=1, zorder=0.5)
        ax.set_xlabel('x')
        ax.set_ylabel('y')
        ax.set_title(title)

        handles, labels = ax.get_legend_handles_labels()
        if handles:
            by_label = dict(zip(labels, handles))
            ax.legend(by_label.values(), by_label.keys(), loc='upper center', bbox_to_anchor=(0.5, -0.1),
                      fontsize=8, ncol=3, frameon=False)
        plt.subplots_adjust(bottom=0.2)

        return fig, None

    except Exception as e:
        warnings.warn(f"Error creating 2D plot: {e}", UserWarning)
        return None, f"Error creating 2D plot: {str(e)}"
