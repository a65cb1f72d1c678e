"""Unit tests for the rebuild-coalescing build coordinator."""

import asyncio

import pytest

from vitae.contexts.building import BuildCoordinator, BuildState


class RecordingPipeline:
    """Pipeline stand-in that records runs and overlap; the first run blocks on a gate."""

    def __init__(self, fail_runs=()):
        self.gate = asyncio.Event()
        self.runs = 0
        self.active = 0
        self.max_active = 0
        self.fail_runs = set(fail_runs)

    async def __call__(self):
        self.runs += 1
        run = self.runs
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            if run == 1:
                await self.gate.wait()
            else:
                await asyncio.sleep(0)
            if run in self.fail_runs:
                raise RuntimeError(f"run {run} failed")
        finally:
            self.active -= 1


async def _settle(coordinator):
    await asyncio.wait_for(coordinator.wait_until_idle(), timeout=5)


@pytest.mark.unit
def test_starts_idle():
    async def scenario():
        coordinator = BuildCoordinator(RecordingPipeline(), debounce_s=0.01)
        assert coordinator.state is BuildState.IDLE
        await _settle(coordinator)
        return coordinator

    coordinator = asyncio.run(scenario())
    assert coordinator.runs_started == 0


@pytest.mark.unit
def test_trigger_while_idle_runs_pipeline():
    async def scenario():
        pipeline = RecordingPipeline()
        pipeline.gate.set()
        coordinator = BuildCoordinator(pipeline, debounce_s=0.01)

        assert coordinator.trigger() is True
        assert coordinator.state is BuildState.RUNNING
        await _settle(coordinator)
        return pipeline, coordinator

    pipeline, coordinator = asyncio.run(scenario())
    assert pipeline.runs == 1
    assert coordinator.state is BuildState.IDLE
    assert coordinator.build_in_flight is False
    assert coordinator.pending_build is False


@pytest.mark.unit
@pytest.mark.parametrize("extra_triggers, expected_runs", [(0, 1), (1, 2), (5, 2), (50, 2)])
def test_triggers_during_run_coalesce_into_one_follow_up(extra_triggers, expected_runs):
    async def scenario():
        pipeline = RecordingPipeline()
        coordinator = BuildCoordinator(pipeline, debounce_s=0.01)

        assert coordinator.trigger() is True
        await asyncio.sleep(0)
        results = [coordinator.trigger() for _ in range(extra_triggers)]
        if extra_triggers:
            assert coordinator.state is BuildState.RUNNING_WITH_PENDING

        pipeline.gate.set()
        await _settle(coordinator)
        return pipeline, coordinator, results

    pipeline, coordinator, results = asyncio.run(scenario())
    assert results == [False] * extra_triggers
    assert pipeline.runs == expected_runs
    assert coordinator.runs_started == expected_runs
    assert pipeline.max_active == 1


@pytest.mark.unit
def test_follow_up_waits_for_debounce():
    async def scenario():
        pipeline = RecordingPipeline()
        coordinator = BuildCoordinator(pipeline, debounce_s=0.2)

        coordinator.trigger()
        await asyncio.sleep(0)
        coordinator.trigger()
        pipeline.gate.set()

        await asyncio.sleep(0.05)
        runs_before_debounce = pipeline.runs
        state_before_debounce = coordinator.state
        await _settle(coordinator)
        return pipeline, runs_before_debounce, state_before_debounce

    pipeline, runs_before_debounce, state_before_debounce = asyncio.run(scenario())
    assert runs_before_debounce == 1
    assert state_before_debounce is BuildState.IDLE
    assert pipeline.runs == 2


@pytest.mark.unit
def test_run_started_in_debounce_gap_shares_scheduled_follow_up():
    async def scenario():
        pipeline = RecordingPipeline()
        coordinator = BuildCoordinator(pipeline, debounce_s=0.2)

        # Run 1 with a pending trigger schedules a follow-up
        coordinator.trigger()
        await asyncio.sleep(0)
        coordinator.trigger()
        pipeline.gate.set()
        while coordinator.build_in_flight:
            await asyncio.sleep(0)
        scheduled = coordinator._follow_up
        assert scheduled is not None

        # Run 2 starts inside the debounce gap and gets its own pending trigger
        assert coordinator.trigger() is True
        assert coordinator.trigger() is False
        while coordinator.build_in_flight:
            await asyncio.sleep(0)
        assert coordinator._follow_up is scheduled

        await _settle(coordinator)
        runs_at_idle = pipeline.runs
        follow_up_at_idle = coordinator._follow_up
        await asyncio.sleep(0.3)
        return pipeline, runs_at_idle, follow_up_at_idle

    pipeline, runs_at_idle, follow_up_at_idle = asyncio.run(scenario())
    assert follow_up_at_idle is None
    assert runs_at_idle == 3
    assert pipeline.runs == 3


@pytest.mark.unit
def test_cancel_follow_up_after_gap_run():
    async def scenario():
        pipeline = RecordingPipeline()
        coordinator = BuildCoordinator(pipeline, debounce_s=10)

        coordinator.trigger()
        await asyncio.sleep(0)
        coordinator.trigger()
        pipeline.gate.set()
        while coordinator.build_in_flight:
            await asyncio.sleep(0)

        coordinator.trigger()
        coordinator.trigger()
        while coordinator.build_in_flight:
            await asyncio.sleep(0)

        coordinator.cancel_follow_up()
        await _settle(coordinator)
        return pipeline

    assert asyncio.run(scenario()).runs == 2


@pytest.mark.unit
def test_sequential_idle_triggers_each_run():
    async def scenario():
        pipeline = RecordingPipeline()
        pipeline.gate.set()
        coordinator = BuildCoordinator(pipeline, debounce_s=0.01)

        for _ in range(3):
            assert coordinator.trigger() is True
            await _settle(coordinator)
        return pipeline

    assert asyncio.run(scenario()).runs == 3


@pytest.mark.unit
def test_failure_resets_state_and_is_recorded():
    async def scenario():
        pipeline = RecordingPipeline(fail_runs={1})
        pipeline.gate.set()
        coordinator = BuildCoordinator(pipeline, debounce_s=0.01)

        coordinator.trigger()
        await _settle(coordinator)
        failed_state = (coordinator.state, coordinator.runs_failed, coordinator.last_error)

        assert coordinator.trigger() is True
        await _settle(coordinator)
        return pipeline, coordinator, failed_state

    pipeline, coordinator, (state, runs_failed, last_error) = asyncio.run(scenario())
    assert state is BuildState.IDLE
    assert runs_failed == 1
    assert isinstance(last_error, RuntimeError)
    assert pipeline.runs == 2
    assert coordinator.runs_failed == 1


@pytest.mark.unit
def test_failed_run_still_runs_pending_follow_up():
    async def scenario():
        pipeline = RecordingPipeline(fail_runs={1})
        coordinator = BuildCoordinator(pipeline, debounce_s=0.01)

        coordinator.trigger()
        await asyncio.sleep(0)
        coordinator.trigger()
        coordinator.trigger()
        pipeline.gate.set()
        await _settle(coordinator)
        return pipeline, coordinator

    pipeline, coordinator = asyncio.run(scenario())
    assert pipeline.runs == 2
    assert coordinator.runs_failed == 1


@pytest.mark.unit
def test_failure_is_not_retried():
    async def scenario():
        pipeline = RecordingPipeline(fail_runs={1})
        pipeline.gate.set()
        coordinator = BuildCoordinator(pipeline, debounce_s=0.01)

        coordinator.trigger()
        await _settle(coordinator)
        await asyncio.sleep(0.05)
        return pipeline

    assert asyncio.run(scenario()).runs == 1


@pytest.mark.unit
def test_cancel_follow_up():
    async def scenario():
        pipeline = RecordingPipeline()
        coordinator = BuildCoordinator(pipeline, debounce_s=10)

        coordinator.trigger()
        await asyncio.sleep(0)
        coordinator.trigger()
        pipeline.gate.set()
        while coordinator.build_in_flight:
            await asyncio.sleep(0)

        coordinator.cancel_follow_up()
        await _settle(coordinator)
        return pipeline

    assert asyncio.run(scenario()).runs == 1


@pytest.mark.unit
def test_trigger_requires_running_loop():
    coordinator = BuildCoordinator(RecordingPipeline())

    with pytest.raises(RuntimeError):
        coordinator.trigger()
