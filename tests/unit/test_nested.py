# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for nested invocation from inside a running test.

Covers ad-hoc subtests (T.run) and groups run from a test body
(T.run_serially / T.run_in_parallel).
"""

from __future__ import annotations

import threading

from testgroup import RunMode, RunSettings, T


class Counter:
    """Subgroup whose two tests add to a shared total."""

    def __init__(self):
        self._lock = threading.Lock()
        self.count = 0

    def _add(self, n: int) -> None:
        with self._lock:
            self.count += n

    def add_one(self, t: T) -> None:
        self._add(1)

    def add_two(self, t: T) -> None:
        self._add(2)


class ThingsYouCanDoWithT:
    """Group exercising the capability context from inside tests."""

    def __init__(self):
        self.seen_names = []
        self.nested_counts = {}

    def asserts(self, t: T) -> None:
        t.equal(2, 1 + 1)
        t.length("one", 3)
        t.require.is_not_none(self)

    def reads_scope_state(self, t: T) -> None:
        if t.failed:
            t.log("How did the test already fail?")
        t.false(t.skipped)

    def runs_subtests(self, t: T) -> None:
        for number in (1, 3, 7, 42):
            t.run(str(number), lambda t, number=number: t.greater(number, 0))

    def runs_subgroup_serially(self, t: T) -> None:
        counter = Counter()
        t.run_serially(counter)
        self.nested_counts["serial"] = counter.count
        t.equal(3, counter.count)

    def runs_subgroup_in_parallel(self, t: T) -> None:
        counter = Counter()
        t.run_in_parallel(counter)
        self.nested_counts["parallel"] = counter.count
        t.equal(3, counter.count)


class NameRecorder:
    def __init__(self, names):
        self._names = names
        self._lock = threading.Lock()

    def inner(self, t: T) -> None:
        with self._lock:
            self._names.append(t.name)


class Outer:
    def __init__(self, names):
        self._names = names

    def serial(self, t: T) -> None:
        t.run_serially(NameRecorder(self._names))

    def parallel(self, t: T) -> None:
        t.run_in_parallel(NameRecorder(self._names))


def test_things_you_can_do_with_t(group_run):
    group = ThingsYouCanDoWithT()

    root = group_run(group, name="TestThings")

    assert not root.failed
    assert group.nested_counts == {"serial": 3, "parallel": 3}


def test_nested_group_sums_in_both_modes_when_outer_is_parallel(group_run):
    group = ThingsYouCanDoWithT()

    root = group_run(group, RunMode.PARALLEL, name="TestThings")

    assert not root.failed
    assert group.nested_counts == {"serial": 3, "parallel": 3}


def test_ad_hoc_subtests_are_named_children(group_run, scope_lookup):
    root = group_run(ThingsYouCanDoWithT(), name="TestThings")

    subtests = scope_lookup(root, "TestThings/runs_subtests")
    assert [child.base_name for child in subtests.children] == ["1", "3", "7", "42"]


def test_failing_ad_hoc_subtest_fails_the_test_and_returns_false():
    from testgroup import main

    results = []

    def body(t: T) -> None:
        results.append(t.run("bad", lambda t: t.equal(1, 2)))
        results.append(t.run("good", lambda t: t.equal(1, 1)))

    root = main("TestAdHoc", body)

    assert results == [False, True]
    assert root.failed
    assert root.children[0].failed
    assert not root.children[1].failed


def test_nested_names_compose_hierarchically(group_run):
    names = []

    group_run(Outer(names), name="TestOuter")

    assert sorted(names) == ["TestOuter/parallel/_/inner", "TestOuter/serial/inner"]


def test_nested_runs_inherit_settings(group_run):
    names = []
    settings = RunSettings(parallel_parent_name="p")

    group_run(Outer(names), name="TestOuter", settings=settings)

    assert "TestOuter/parallel/p/inner" in names


def test_misconfigured_nested_group_fails_only_its_test(group_run, scope_lookup):
    class Host:
        def nests_broken_group(self, t: T) -> None:
            t.run_serially(object())

        def still_runs(self, t: T) -> None:
            t.log("ran")

    root = group_run(Host(), name="TestHost")

    assert root.failed
    assert scope_lookup(root, "TestHost/nests_broken_group").failed
    assert not scope_lookup(root, "TestHost/still_runs").failed
    assert "no tests found for object" in scope_lookup(root, "TestHost/nests_broken_group").messages[0]
