from __future__ import annotations

import pytest

from pubseq.output.console import MockConsole
from pubseq.publish.errors import PublishError
from pubseq.publish.model import PublishMode, PublishResult, PublishState
from pubseq.publish.sequencer import PublishSequencer

from ._fakes import FakeRegistry, make_plan, manifest_of, rejected


def test_publishes_in_plan_order() -> None:
    registry = FakeRegistry()
    plan = make_plan("wasm-opt-sys", "wasm-opt-cxx-sys", "wasm-opt")

    results = PublishSequencer(registry).run(plan, PublishMode.REAL)

    assert registry.manifests == [manifest_of(p.name) for p in plan]
    assert registry.modes == {PublishMode.REAL}
    assert [r.state for r in results] == [PublishState.SUCCEEDED] * 3


def test_failure_skips_the_rest() -> None:
    reason = rejected()
    registry = FakeRegistry(failures={manifest_of("B"): reason})

    results = PublishSequencer(registry).run(make_plan("A", "B", "C"), PublishMode.REAL)

    assert results == [
        PublishResult.succeeded("A"),
        PublishResult.failed("B", reason),
        PublishResult.skipped("C"),
    ]
    assert registry.manifests == [manifest_of("A"), manifest_of("B")]


@pytest.mark.parametrize("k", [0, 1, 2, 3])
def test_failure_at_k(k: int) -> None:
    names = ("p0", "p1", "p2", "p3")
    registry = FakeRegistry(failures={manifest_of(names[k]): rejected()})

    results = PublishSequencer(registry).run(make_plan(*names), PublishMode.REAL)

    assert [r.package for r in results] == list(names)
    assert all(r.state is PublishState.SUCCEEDED for r in results[:k])
    assert results[k].state is PublishState.FAILED
    assert all(r.state is PublishState.SKIPPED for r in results[k + 1 :])
    assert len(registry.calls) == k + 1
    assert all(r.state is not PublishState.PENDING for r in results)


def test_results_are_frozen() -> None:
    results = PublishSequencer(FakeRegistry()).run(make_plan("A"), PublishMode.REAL)
    before = list(results)
    with pytest.raises(AttributeError):
        results[0].state = PublishState.FAILED  # type: ignore[misc]
    assert results == before


def test_only_first_failure_is_attempted() -> None:
    registry = FakeRegistry(
        failures={
            manifest_of("A"): PublishError(kind="network", message="timed out"),
            manifest_of("B"): rejected(),
        }
    )
    results = PublishSequencer(registry).run(make_plan("A", "B"), PublishMode.REAL)

    assert results[0].reason is not None and results[0].reason.kind == "network"
    assert results[1].state is PublishState.SKIPPED
    assert len(registry.calls) == 1


def test_console_reports_attempts_and_skips() -> None:
    console = MockConsole()
    registry = FakeRegistry(failures={manifest_of("B"): rejected()})

    PublishSequencer(registry, console=console).run(make_plan("A", "B", "C"), PublishMode.REAL)

    assert console.find("publish A (real)")
    assert console.find("OK A: published")
    assert console.find("error: B: crate version")
    assert console.find("skip C")
