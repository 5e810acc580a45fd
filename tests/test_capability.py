"""Tests for the detached capability check on leaving the permission step."""

import asyncio


def permission_controller(probe):
    """Controller sitting on the screen recording step."""
    from dayflow_onboarding.wizard.capability import AppState
    from dayflow_onboarding.wizard.controller import WizardController
    from dayflow_onboarding.wizard.store import MemoryStore, PersistedState

    store = MemoryStore(PersistedState(step_id=5, schema_version=1, started=True))
    controller = WizardController(store=store, probe=probe, app_state=AppState())
    controller.resolve()
    return controller, store


class TestCapabilityCheck:
    """Test the fire-and-forget capability check."""

    def test_confirm_failure_does_not_affect_transition(self):
        """A failing confirm() is swallowed; the wizard still moves on."""
        from dayflow_onboarding.wizard.capability import StaticCapabilityProbe

        probe = StaticCapabilityProbe(
            preflight_result=True,
            confirm_error=RuntimeError("capture service unavailable")
        )
        controller, store = permission_controller(probe)

        step = controller.advance()

        assert step.name == "completion"
        assert store.load().step_id == 6
        controller.capability_task.join(timeout=5)
        assert probe.confirm_calls == 1
        assert controller.app_state.recording is False

    def test_confirm_success_sets_recording_flag(self):
        from dayflow_onboarding.wizard.capability import StaticCapabilityProbe

        probe = StaticCapabilityProbe(preflight_result=True)
        controller, _ = permission_controller(probe)

        controller.advance()
        controller.capability_task.join(timeout=5)

        assert controller.app_state.recording is True

    def test_failed_preflight_spawns_nothing(self):
        from dayflow_onboarding.wizard.capability import StaticCapabilityProbe

        probe = StaticCapabilityProbe(preflight_result=False)
        controller, _ = permission_controller(probe)

        assert controller.advance().name == "completion"
        assert controller.capability_task is None
        assert probe.confirm_calls == 0

    def test_preflight_error_is_swallowed(self):
        from dayflow_onboarding.wizard.capability import StaticCapabilityProbe

        class ExplodingProbe(StaticCapabilityProbe):
            def preflight(self):
                raise OSError("no display")

        controller, store = permission_controller(ExplodingProbe())

        assert controller.advance().name == "completion"
        assert controller.capability_task is None
        assert store.load().step_id == 6

    def test_transition_does_not_wait_for_confirm(self):
        """The step is persisted while confirm() is still pending."""
        from dayflow_onboarding.wizard.capability import StaticCapabilityProbe

        probe = StaticCapabilityProbe(preflight_result=True, delay=0.5)
        controller, store = permission_controller(probe)

        controller.advance()

        assert store.load().step_id == 6
        assert controller.app_state.recording is False
        controller.capability_task.join(timeout=5)
        assert controller.app_state.recording is True

    def test_other_steps_do_not_probe(self):
        from dayflow_onboarding.wizard.capability import StaticCapabilityProbe
        from dayflow_onboarding.wizard.controller import WizardController
        from dayflow_onboarding.wizard.store import MemoryStore, PersistedState

        probe = StaticCapabilityProbe(preflight_result=True)
        store = MemoryStore(PersistedState(step_id=4, schema_version=1, started=True))
        controller = WizardController(store=store, probe=probe)
        controller.resolve()

        controller.advance()

        assert controller.capability_task is None
        assert probe.confirm_calls == 0

    def test_runs_on_running_event_loop(self):
        """Inside an event loop the check is scheduled as a task."""
        from dayflow_onboarding.wizard.capability import StaticCapabilityProbe

        probe = StaticCapabilityProbe(preflight_result=True)

        async def scenario():
            controller, _ = permission_controller(probe)
            controller.advance()
            task = controller.capability_task
            assert isinstance(task, asyncio.Task)
            await task
            return controller.app_state.recording

        assert asyncio.run(scenario()) is True


class TestStaticProbe:
    """Test the static probe."""

    def test_denied_probe_raises_unavailable(self):
        import pytest
        from dayflow_onboarding.wizard.capability import StaticCapabilityProbe
        from dayflow_onboarding.wizard.exceptions import CapabilityUnavailableError

        probe = StaticCapabilityProbe(preflight_result=False)
        with pytest.raises(CapabilityUnavailableError) as exc_info:
            asyncio.run(probe.confirm())
        assert "System Settings" in str(exc_info.value)
