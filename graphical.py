# graphical.py
import math
from collections import namedtuple

import numpy as np
from scipy.optimize import linprog
from tabulate import tabulate

from constraints import GraphicalLPError, normalize


# Default numeric tolerances
FEASIBILITY_TOL = 1e-8   # slack allowed in a*x + b*y <= c
PARALLEL_TOL = 1e-8      # |det| below this means parallel lines
AXIS_TOL = 1e-8          # |a| or |b| below this means no axis intercept
DEDUP_TOL = 1e-5         # two snapped vertices closer than this on both axes are one
DEDUP_DECIMALS = 4       # snapping resolution

Point = namedtuple("Point", ["x", "y"])

# z = a*x + b*y + k
Objective = namedtuple("Objective", ["a", "b", "k"])

SolveResult = namedtuple("SolveResult", ["vertices", "optimum", "objective_value", "feasible"])


def as_objective(objective):
    if isinstance(objective, Objective):
        return objective
    if isinstance(objective, dict):
        return Objective(float(objective.get("a", 0.0)), float(objective.get("b", 0.0)), float(objective.get("k", 0.0)))
    a, b, *rest = objective
    k = rest[0] if rest else 0.0
    return Objective(float(a), float(b), float(k))


def evaluate(objective, point):
    """Objective value a*x + b*y + k at point."""
    objective = as_objective(objective)
    return objective.a * point[0] + objective.b * point[1] + objective.k


class VertexSolver:
    """
    Corner-point solver for two-variable LPs.

    Candidates are the pairwise intersections of the constraint lines and
    their axis intercepts; infeasible candidates are dropped, the rest are
    snapped and deduplicated and the objective is scanned over them.

    Instances hold only their tolerances, so one solver may be shared freely.
    """

    def __init__(self, feasibility_tol=FEASIBILITY_TOL, parallel_tol=PARALLEL_TOL,
                 axis_tol=AXIS_TOL, dedup_tol=DEDUP_TOL, dedup_decimals=DEDUP_DECIMALS):
        self.feasibility_tol = float(feasibility_tol)
        self.parallel_tol = float(parallel_tol)
        self.axis_tol = float(axis_tol)
        self.dedup_tol = float(dedup_tol)
        self.dedup_decimals = int(dedup_decimals)
        self._validate_tolerances()

    def _validate_tolerances(self):
        """Validate the tolerance settings."""
        errors = []
        for name in ("feasibility_tol", "parallel_tol", "axis_tol", "dedup_tol"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                errors.append(f"{name} must be a finite non-negative number (got {value})")
        if self.dedup_decimals < 0:
            errors.append(f"dedup_decimals must be >= 0 (got {self.dedup_decimals})")
        if errors:
            raise ValueError("; ".join(errors))

    def __repr__(self):
        return (f"VertexSolver(feasibility_tol={self.feasibility_tol}, parallel_tol={self.parallel_tol}, "
                f"axis_tol={self.axis_tol}, dedup_tol={self.dedup_tol}, dedup_decimals={self.dedup_decimals})")

    # --- Geometry ---

    def is_feasible(self, point, constraints):
        """True if point satisfies every half-plane up to feasibility_tol."""
        if not constraints:
            return True
        A = np.array([[h.a, h.b] for h in constraints], dtype=float)
        c = np.array([h.c for h in constraints], dtype=float)
        return bool(np.all(A @ np.asarray(point, dtype=float) <= c + self.feasibility_tol))

    def line_intersection(self, h1, h2):
        """Crossing point of the boundary lines of h1 and h2, or None if parallel."""
        det = h1.a * h2.b - h2.a * h1.b
        if abs(det) < self.parallel_tol:
            return None
        x = (h1.c * h2.b - h2.c * h1.b) / det
        y = (h2.c * h1.a - h1.c * h2.a) / det
        return Point(x, y)

    def axis_intercepts(self, h):
        """Points where the boundary line of h meets the x and y axes."""
        points = []
        if abs(h.a) > self.axis_tol:
            points.append(Point(h.c / h.a, 0.0))
        if abs(h.b) > self.axis_tol:
            points.append(Point(0.0, h.c / h.b))
        return points

    def candidate_points(self, constraints):
        """
        Feasible candidates in generation order: all pairwise intersections
        (i < j, ascending), then the axis intercepts of each half-plane.
        """
        candidates = []
        n = len(constraints)
        for i in range(n):
            for j in range(i + 1, n):
                point = self.line_intersection(constraints[i], constraints[j])
                if point is not None and self.is_feasible(point, constraints):
                    candidates.append(point)

        for h in constraints:
            for point in self.axis_intercepts(h):
                if self.is_feasible(point, constraints):
                    candidates.append(point)
        return candidates

    def snap(self, point):
        """Comparison key: coordinates rounded to dedup_decimals."""
        # + 0.0 turns -0.0 into 0.0
        return (round(point[0], self.dedup_decimals) + 0.0,
                round(point[1], self.dedup_decimals) + 0.0)

    def same_vertex(self, p, q):
        """Equal snapped keys, or closer than dedup_tol on both axes."""
        if self.snap(p) == self.snap(q):
            return True
        return abs(p[0] - q[0]) < self.dedup_tol and abs(p[1] - q[1]) < self.dedup_tol

    def deduplicate(self, points):
        """
        Keep the first point of each group of same_vertex candidates.

        The kept points are reported unrounded; rounding only decides which
        candidates belong together.
        """
        unique = []
        for point in points:
            point = Point(float(point[0]) + 0.0, float(point[1]) + 0.0)
            if not any(self.same_vertex(point, q) for q in unique):
                unique.append(point)
        return tuple(unique)

    def find_vertices(self, constraints):
        """Distinct corner points of the feasible region."""
        return self.deduplicate(self.candidate_points(tuple(constraints)))

    # --- Optimization ---

    def solve(self, constraints, objective, maximize=True):
        """
        Find the corner point optimizing the objective.

        Args:
            constraints: sequence of HalfPlane (see constraints.normalize).
            objective: Objective or (a, b, k) for z = a*x + b*y + k.
            maximize: bool, maximize if True, minimize otherwise.

        Returns:
            SolveResult. feasible is False when no corner point was found,
            which covers both an empty and an unbounded region.
        """
        objective = as_objective(objective)
        vertices = self.find_vertices(constraints)
        if not vertices:
            return SolveResult(vertices=(), optimum=None, objective_value=None, feasible=False)

        best_point, best_value = None, None
        for vertex in vertices:
            z = evaluate(objective, vertex)
            # Strict comparison: first vertex wins ties
            if best_value is None or (maximize and z > best_value) or (not maximize and z < best_value):
                best_point, best_value = vertex, z

        return SolveResult(vertices=vertices, optimum=best_point, objective_value=best_value, feasible=True)


DEFAULT_SOLVER = VertexSolver()


def is_feasible(point, constraints):
    return DEFAULT_SOLVER.is_feasible(point, constraints)


def find_vertices(constraints):
    return DEFAULT_SOLVER.find_vertices(constraints)


def deduplicate(points):
    return DEFAULT_SOLVER.deduplicate(points)


def solve(constraints, objective, maximize=True):
    """Solve with the default tolerances. See VertexSolver.solve."""
    return DEFAULT_SOLVER.solve(constraints, objective, maximize)


def verify_with_scipy(constraints, objective, maximize=True):
    """
    Solve the same half-plane system with scipy.optimize.linprog for verification.

    Unlike solve, this tells an empty region apart from an unbounded objective.

    Returns:
        tuple: (status, point, value) where status is "optimal", "infeasible"
        or "unbounded"; point and value are None unless optimal.
    """
    objective = as_objective(objective)
    sign = -1.0 if maximize else 1.0
    c = sign * np.array([objective.a, objective.b], dtype=float)

    if constraints:
        A_ub = np.array([[h.a, h.b] for h in constraints], dtype=float)
        b_ub = np.array([h.c for h in constraints], dtype=float)
    else:
        A_ub, b_ub = None, None

    bounds = [(None, None)] * 2
    result = linprog(c, A_ub=A_ub, b_ub=b_ub, bounds=bounds, method='highs')
    if not result.success and result.status not in (2, 3):
        # Presolve may only report "infeasible or unbounded"; solve again without it
        result = linprog(c, A_ub=A_ub, b_ub=b_ub, bounds=bounds, method='highs',
                         options={"presolve": False})

    if result.success:
        point = Point(float(result.x[0]), float(result.x[1]))
        return "optimal", point, sign * float(result.fun) + objective.k
    statuses = {2: "infeasible", 3: "unbounded"}
    if result.status in statuses:
        return statuses[result.status], None, None
    raise GraphicalLPError(f"SciPy linprog failed: {result.message} (Status: {result.status})")


def vertex_rows(result, objective):
    """[(index, x, y, z, is_optimum)] for every vertex of a SolveResult."""
    rows = []
    for i, vertex in enumerate(result.vertices):
        rows.append((i + 1, vertex.x, vertex.y, evaluate(objective, vertex), vertex == result.optimum))
    return rows


def vertex_table(result, objective):
    """Plain-text table of the corner points and their objective values."""
    if not result.feasible:
        return "No feasible vertices."
    rows = [[i, x, y, z, "*" if best else ""] for i, x, y, z, best in vertex_rows(result, objective)]
    return tabulate(rows, headers=["#", "x", "y", "z", "opt"], floatfmt=".4f")


# Example Usage
if __name__ == "__main__":
    """
    Example problem:

        Maximize:    z = 3x + 2y

        Subject to:
            x + y ≤ 4
            x     ≤ 3
            x, y ≥ 0
    """

    constraint_set = normalize([(1, 1, "<=", 4), (1, 0, "<=", 3)], include_non_negativity=True)
    objective = Objective(3, 2, 0)
    result = solve(constraint_set, objective, maximize=True)
    print(vertex_table(result, objective))
    print(f"Optimal vertex: {result.optimum}")
    print(f"Optimal value: {result.objective_value}")
    status, point, value = verify_with_scipy(constraint_set, objective, maximize=True)
    print(f"SciPy: {status} {point} {value}")
