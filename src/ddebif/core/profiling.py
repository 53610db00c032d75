"""Profiling of the linearization calls issued by a continuation engine."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from functools import wraps


class MethodProfile:
    """
    Accumulated execution time of one profiled function.

    Serves as a node in the tree of nested calls, e.g. `jad` nests `jacobian`.
    """

    def __init__(self, name: str) -> None:
        """
        Initialize the MethodProfile.

        Parameters
        ----------
        name
            The qualified name of the function.
        """
        self.name: str = name
        # summed execution time in seconds
        self.execution_time: float = 0.0
        self.ncalls: int = 0
        # profiles of the functions called from within this one
        self.nested_profiles: dict[str, MethodProfile] = {}

    def flattened_data(self) -> dict[str, MethodProfile]:
        """
        Drop the nesting and merge the profiles of equally named functions.

        Returns
        -------
        dict[str, MethodProfile]
            A dictionary mapping function names to merged profiles.
        """
        data: dict[str, MethodProfile] = {}
        if self.execution_time > 0:
            data[self.name] = self
        for p in self.nested_profiles.values():
            for name, ps in p.flattened_data().items():
                if name not in data:
                    data[name] = MethodProfile(name)
                data[name].execution_time += ps.execution_time
                data[name].ncalls += ps.ncalls
        return data

    def print_stats(self, total_time: float, indentation: int = 0, nested: bool = True, last: bool = False) -> None:
        """
        Print the stats of this profile and its children recursively.

        Parameters
        ----------
        total_time
            The reference time for the relative column.
        indentation
            The current depth in the tree view.
        nested
            Whether to show a tree view or a flattened list.
        last
            Whether this is the last child of its parent.
        """
        if self.execution_time > 0:
            T_tot = self.execution_time
            T_rel = T_tot / total_time if total_time > 0 else 0.0
            if nested:
                corn = "└" if last else "├"
                name = ("│ " * indentation) + (corn + "─" if indentation > 0 else "") + self.name
            else:
                name = self.name
            print(f"{name:<70} {T_tot:10.3f}s {T_rel:11.2%} {self.ncalls:8d}")
            if nested:
                indentation += 1
                total_time = T_tot
        if nested or self.name == "":
            if nested:
                profiles = list(self.nested_profiles.values())
            else:
                profiles = list(self.flattened_data().values())
            profiles = sorted(profiles, key=lambda item: item.execution_time, reverse=True)
            for i, p in enumerate(profiles):
                p.print_stats(total_time, indentation, nested, last=i == len(profiles) - 1)


class Profiler:
    """
    Static class for accessing/controlling the profiling of the code.

    Every thread records into its own tree, so that an engine evaluating
    several points concurrently does not interleave the call stacks.
    """

    __start_time: float | None = None
    __local = threading.local()
    __roots: dict[int, MethodProfile] = {}
    __lock = threading.Lock()

    @staticmethod
    def start() -> None:
        """(Re)start the Profiler and discard all previous measurements."""
        with Profiler.__lock:
            Profiler.__roots = {}
        Profiler.__local = threading.local()
        Profiler.__start_time = time.perf_counter()

    @staticmethod
    def stop() -> None:
        """Deactivate the Profiler."""
        Profiler.__start_time = None

    @staticmethod
    def is_active() -> bool:
        """Check if the Profiler is active/running."""
        return Profiler.__start_time is not None

    @staticmethod
    def current_profile() -> MethodProfile:
        """Return the profile of the innermost running function of this thread."""
        local = Profiler.__local
        if not hasattr(local, "current"):
            root = MethodProfile("")
            with Profiler.__lock:
                Profiler.__roots[threading.get_ident()] = root
            local.current = root
        return local.current

    @staticmethod
    def set_current_profile(profile: MethodProfile) -> None:
        """Make the given profile the innermost one of this thread."""
        Profiler.__local.current = profile

    @staticmethod
    def root_profile() -> MethodProfile:
        """Merge the trees of all threads into a single root profile."""
        merged = MethodProfile("")
        with Profiler.__lock:
            roots = list(Profiler.__roots.values())
        for root in roots:
            # merge into copies, the live trees keep recording
            _merge_into(merged, root)
        return merged

    @staticmethod
    def print_summary(nested: bool = True) -> None:
        """
        Print a summary on the execution times of the decorated functions.

        Parameters
        ----------
        nested
            Whether to show a nested tree view or a flattened list.
        """
        if Profiler.__start_time is None:
            print("Profiler is inactive.")
            return
        total_time = time.perf_counter() - Profiler.__start_time
        print("Profiler results:")
        print("{:<70} {:>11} {:>11} {:>8}".format("method name", "total", "relative", "#calls"))
        print("-" * 103)
        Profiler.root_profile().print_stats(total_time, nested=nested)


def _merge_into(target: MethodProfile, other: MethodProfile) -> None:
    target.execution_time += other.execution_time
    target.ncalls += other.ncalls
    for name, p in other.nested_profiles.items():
        if name not in target.nested_profiles:
            target.nested_profiles[name] = MethodProfile(name)
        _merge_into(target.nested_profiles[name], p)


def profile(method: Callable) -> Callable:
    """
    Decorate a function to trigger profiling of its execution time.

    Parameters
    ----------
    method
        The function to profile.

    Returns
    -------
    Callable
        The wrapped function.
    """

    @wraps(method)
    def do_profile(*args, **kw):
        # if profiling is turned off: do nothing but execute the method
        if not Profiler.is_active():
            return method(*args, **kw)
        name = method.__qualname__
        parent_profile = Profiler.current_profile()
        if name not in parent_profile.nested_profiles:
            parent_profile.nested_profiles[name] = MethodProfile(name)
        current_profile = parent_profile.nested_profiles[name]
        Profiler.set_current_profile(current_profile)
        ts = time.perf_counter()
        try:
            return method(*args, **kw)
        finally:
            current_profile.execution_time += time.perf_counter() - ts
            current_profile.ncalls += 1
            # we're out of the method, reset current profile to parent
            Profiler.set_current_profile(parent_profile)

    return do_profile
