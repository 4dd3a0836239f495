# app.py
import streamlit as st
import pandas as pd

# Import from our modules
from constraints import normalize
from graphical import Objective, solve, verify_with_scipy
from utils import (
    NO_CONSTRAINTS_MESSAGE,
    SolutionStorage,
    blank_rows,
    create_example_minimize,
    create_example_production,
    initialize_session_state,
    rows_to_records,
)
from ui_components import (
    OPERATOR_CHOICES, display_result, format_lp_problem, rows_from_dataframe
)
from plotting import plot_feasible_region


# --- Callbacks (run before the next script pass, so widget keys may be set) ---
def reset_results():
    st.session_state.solution = None
    st.session_state.has_solved = False
    # Force a fresh data editor so it picks up the new rows
    st.session_state.editor_version += 1


def load_example_into_state(example_factory):
    """Updates session state with an example objective and constraint rows."""
    objective, rows, maximize = example_factory()
    st.session_state.coef_x, st.session_state.coef_y, st.session_state.const = objective
    st.session_state.opt_type = "Maximize" if maximize else "Minimize"
    st.session_state.nonneg = True
    st.session_state.rows = rows_to_records(rows)
    reset_results()
    st.toast("Example loaded!")


def clear_all():
    """Reset objective, constraint rows and output; one empty row stays."""
    st.session_state.coef_x = 0.0
    st.session_state.coef_y = 0.0
    st.session_state.const = 0.0
    st.session_state.opt_type = "Minimize"
    st.session_state.rows = blank_rows()
    reset_results()


# --- Main Application Logic ---
def main():
    st.set_page_config(layout="wide")
    initialize_session_state()

    st.title("Graphical Linear Programming Solver")
    st.write("Solve two-variable LP problems by enumerating the corner points of the feasible region.")

    # --- Sidebar for Input ---
    with st.sidebar:
        st.header("Problem Definition")

        st.write("Load Examples:")
        col_ex1, col_ex2 = st.columns(2)
        col_ex1.button("Maximize Example", key="load_max_example", use_container_width=True,
                       on_click=load_example_into_state, args=(create_example_production,))
        col_ex2.button("Minimize Example", key="load_min_example", use_container_width=True,
                       on_click=load_example_into_state, args=(create_example_minimize,))

        st.markdown("---")
        st.subheader("Objective: z = a·x + b·y + k")
        st.selectbox("Optimization", ["Maximize", "Minimize"], key="opt_type")
        col1, col2, col3 = st.columns(3)
        col1.number_input("a (x)", key="coef_x")
        col2.number_input("b (y)", key="coef_y")
        col3.number_input("k", key="const")

        st.header("Solver Options")
        st.checkbox("x ≥ 0, y ≥ 0", key="nonneg")
        st.checkbox("Cross-check with SciPy", key="check_with_scipy",
                    help="Tells an empty region apart from an unbounded objective when no corner point is found.")

    maximize = st.session_state.opt_type == "Maximize"
    objective = Objective(st.session_state.coef_x, st.session_state.coef_y, st.session_state.const)

    # --- Constraint rows ---
    st.header("Constraints: a·x + b·y (op) d")
    edited = st.data_editor(
        pd.DataFrame(st.session_state.rows, columns=["a", "b", "op", "d"]),
        key=f"rows_editor_{st.session_state.editor_version}",
        num_rows="dynamic",
        use_container_width=True,
        column_config={
            "a": st.column_config.NumberColumn("a (x)"),
            "b": st.column_config.NumberColumn("b (y)"),
            "op": st.column_config.SelectboxColumn("op", options=OPERATOR_CHOICES, default=OPERATOR_CHOICES[0]),
            "d": st.column_config.NumberColumn("d"),
        },
    )
    rows = rows_from_dataframe(edited)

    # --- Display Problem ---
    st.header("Problem Formulation")
    st.latex(format_lp_problem(objective, rows, maximize, st.session_state.nonneg))

    col_solve, col_clear = st.columns([1, 1])
    solve_pressed = col_solve.button("Solve", key="solve_button")
    col_clear.button("Clear", key="clear_button", on_click=clear_all)

    if solve_pressed:
        st.session_state.solution = None
        st.session_state.has_solved = False
        constraints = normalize(rows, include_non_negativity=st.session_state.nonneg)

        # At least non-negativity plus one real constraint is usually needed
        if len(constraints) < 2:
            st.warning(NO_CONSTRAINTS_MESSAGE)
            st.stop()

        result = solve(constraints, objective, maximize=maximize)
        st.session_state.solution = SolutionStorage(constraints, objective, maximize, result)
        st.session_state.has_solved = True

    # --- Display Results (if solved) ---
    # Shown for the inputs stored at solve time, not the current widgets
    solution = st.session_state.solution
    if st.session_state.has_solved and solution is not None:
        result = solution.result
        scipy_status = None
        if st.session_state.check_with_scipy:
            try:
                scipy_status, _, _ = verify_with_scipy(solution.constraints, solution.objective,
                                                       maximize=solution.maximize)
            except Exception as e:
                st.warning(f"SciPy cross-check failed: {e}")

        display_result(solution, scipy_status=scipy_status)

        st.header("Visualization")
        if result.feasible:
            fig, err_msg = plot_feasible_region(solution.constraints, result, maximize=solution.maximize,
                                                title="Feasible Region & Optimal Vertex")
            if fig:
                st.pyplot(fig)
            elif err_msg:
                st.warning(f"Could not generate 2D plot: {err_msg}")
        else:
            st.info("Nothing to draw: no corner points were found.")


if __name__ == "__main__":
    main()
