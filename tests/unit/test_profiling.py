"""Unit tests for the profiler."""

import threading

import numpy as np

from ddebif.core.problem import DelayEquilibriumProblem
from ddebif.core.profiling import Profiler, profile
from ddebif.linearization import jacobian, jad


def make_problem() -> DelayEquilibriumProblem:
    return DelayEquilibriumProblem.from_function(lambda x, xd, p: p - x - xd[0], lambda d, p: d, [0.0], [1.0], 1.0)


def test_profiler_inactive(capsys) -> None:
    Profiler.stop()
    assert not Profiler.is_active()
    Profiler.print_summary()
    assert "Profiler is inactive." in capsys.readouterr().out


def test_profiler_records_nested_calls(capsys) -> None:
    prob = make_problem()
    Profiler.start()
    try:
        jacobian(prob, np.array([0.0]), 1.0)
        jad(prob, np.array([0.0]), 1.0)
        root = Profiler.root_profile()
        assert root.nested_profiles["jacobian"].ncalls == 1
        assert root.nested_profiles["jad"].ncalls == 1
        assert root.nested_profiles["jad"].nested_profiles["jacobian"].ncalls == 1
        assert root.flattened_data()["jacobian"].ncalls == 2
        Profiler.print_summary(nested=False)
        out = capsys.readouterr().out
        assert "Profiler results:" in out
        assert "jacobian" in out
    finally:
        Profiler.stop()


def test_profile_passes_exceptions() -> None:
    @profile
    def fails():
        raise RuntimeError("boom")

    Profiler.start()
    try:
        try:
            fails()
        except RuntimeError:
            pass
        assert Profiler.current_profile().name == ""
        assert Profiler.root_profile().nested_profiles[fails.__qualname__].ncalls == 1
    finally:
        Profiler.stop()


def test_summaries_leave_thread_trees_unchanged() -> None:
    prob = make_problem()
    Profiler.start()
    try:
        jacobian(prob, np.array([0.0]), 1.0)
        worker = threading.Thread(target=jacobian, args=(prob, np.array([0.0]), 1.0))
        worker.start()
        worker.join()
        counts = [Profiler.root_profile().nested_profiles["jacobian"].ncalls for _ in range(3)]
        assert counts == [2, 2, 2]
        # this thread's own tree still only holds its own call
        root = Profiler.current_profile()
        assert root.nested_profiles["jacobian"].ncalls == 1
    finally:
        Profiler.stop()
