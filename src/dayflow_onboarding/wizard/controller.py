"""
Dayflow Onboarding Wizard Controller

Manages step resolution, schema migration, conditional advance and the
persistence write that follows every transition.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union, TYPE_CHECKING

from dayflow_onboarding.wizard.capability import (
    AppState, CapabilityProbe, StaticCapabilityProbe, spawn_capability_check
)
from dayflow_onboarding.wizard.exceptions import InvalidTransitionError
from dayflow_onboarding.wizard.logging_config import get_logger
from dayflow_onboarding.wizard.migration import (
    CURRENT_SCHEMA_VERSION, MIGRATIONS, migrate, validate_tables
)
from dayflow_onboarding.wizard.notifier import Notifier, NullNotifier
from dayflow_onboarding.wizard.steps import (
    CAPABILITY_STEP, DEFAULT_SEQUENCE, PROVIDER_SELECTION_STEP, Step, StepSequence
)
from dayflow_onboarding.wizard.store import PersistedState, StateStore

if TYPE_CHECKING:
    from dayflow_onboarding.wizard.ui import Renderer


logger = get_logger("controller")

# Selecting this provider skips the provider setup step
FAST_PATH_PROVIDER = "dayflow"


@dataclass
class SelectionState:
    """Choices made during this wizard session."""
    provider: Optional[str] = None


class WizardController:
    """Drives the onboarding step state machine."""

    def __init__(
        self,
        store: StateStore,
        sequence: StepSequence = DEFAULT_SEQUENCE,
        migrations: Mapping[int, Mapping[int, int]] = MIGRATIONS,
        schema_version: int = CURRENT_SCHEMA_VERSION,
        renderer: Optional["Renderer"] = None,
        notifier: Optional[Notifier] = None,
        probe: Optional[CapabilityProbe] = None,
        app_state: Optional[AppState] = None,
        fast_path_provider: str = FAST_PATH_PROVIDER,
        branch_step: str = PROVIDER_SELECTION_STEP,
        capability_step: str = CAPABILITY_STEP,
    ):
        validate_tables(migrations, schema_version, len(sequence))
        self.store = store
        self.sequence = sequence
        self.migrations = migrations
        self.schema_version = schema_version
        self.renderer = renderer
        self.notifier = notifier or NullNotifier()
        self.probe = probe or StaticCapabilityProbe()
        self.app_state = app_state or AppState()
        self.fast_path_provider = fast_path_provider
        self.branch_step = branch_step
        self.capability_step = capability_step
        self.selection = SelectionState()
        self.capability_task = None
        self._current: Optional[Step] = None

    def resolve(self, mark_started: bool = True) -> Step:
        """Re-read persisted state and return the step to show.

        A record written under an older schema is migrated and written back,
        step id and schema version together, before anything else reads it.
        A step id that still does not resolve falls back to the first step.

        Args:
            mark_started: Record the first entry into the wizard
        """
        state = self.store.load()

        if state.schema_version < self.schema_version:
            migrated = migrate(
                state.schema_version, state.step_id,
                self.migrations, self.schema_version
            )
            logger.info(
                "Migrated onboarding step %d (schema %d) to %d (schema %d)",
                state.step_id, state.schema_version, migrated, self.schema_version
            )
            state = state.evolve(step_id=migrated, schema_version=self.schema_version)
            self.store.save(state)

        step = self.sequence.get(state.step_id)
        if step is None:
            logger.warning(
                "Stored onboarding step %r is not in the current sequence, "
                "starting from '%s'", state.step_id, self.sequence.first.name
            )
            step = self.sequence.first

        if not state.completed:
            self.selection.provider = state.selected_provider

        if mark_started and not state.started and step == self.sequence.first:
            self.store.save(state.evolve(started=True))
            self._notify("onboarding_started")

        self._current = step
        return step

    def enter(self) -> Step:
        """Resolve the current step and render it."""
        step = self.resolve()
        self._render(step)
        return step

    @property
    def current(self) -> Step:
        """The step resolved on the last entry or transition."""
        if self._current is None:
            return self.resolve()
        return self._current

    @property
    def completed(self) -> bool:
        return self.store.load().completed

    def advance(self) -> Step:
        """Move forward one step, or two when the fast-path provider was chosen.

        On the terminal step this completes onboarding instead.
        """
        current = self.current
        if self.sequence.is_terminal(current):
            return self.complete()

        target = self.sequence.successor(current)
        if (
            current.name == self.branch_step
            and self.selection.provider == self.fast_path_provider
            and not self.sequence.is_terminal(target)
        ):
            logger.debug("Fast path: skipping '%s'", target.name)
            target = self.sequence.successor(target)

        self._transition(target)
        self._notify("onboarding_step_completed", step=current.name)

        if current.name == self.capability_step:
            self.capability_task = spawn_capability_check(self.probe, self.app_state)

        return target

    def go_back(self, target: Union[Step, str]) -> Step:
        """Jump to any earlier step."""
        current = self.current
        if isinstance(target, str):
            target = self.sequence.by_name(target)
        if target not in self.sequence:
            raise InvalidTransitionError(
                f"'{target.name}' is not part of this wizard",
                step=target.name
            )
        if target.id >= current.id:
            raise InvalidTransitionError(
                f"Cannot go back from '{current.name}' to '{target.name}'",
                step=current.name,
                details="Back targets must come earlier in the sequence"
            )

        self._transition(target)
        return target

    def back(self) -> Step:
        """Follow the current step's Back action."""
        current = self.current
        if current.back_target is None:
            raise InvalidTransitionError(
                f"'{current.name}' has no Back action",
                step=current.name
            )
        return self.go_back(current.back_target)

    def select_provider(self, provider: str):
        """Record the provider choice for the next advance."""
        self.selection.provider = provider
        state = self.store.load()
        self.store.save(state.evolve(selected_provider=provider))
        self._notify("llm_provider_selected", provider=provider)

    def complete(self) -> Step:
        """Finish onboarding from the terminal step.

        Marks onboarding complete and resets the saved step to the first one,
        so a later run of the wizard starts from the beginning.
        """
        current = self.current
        if not self.sequence.is_terminal(current):
            raise InvalidTransitionError(
                f"Cannot complete onboarding from '{current.name}'",
                step=current.name
            )

        first = self.sequence.first
        state = self.store.load()
        self.store.save(state.evolve(
            step_id=first.id,
            schema_version=max(state.schema_version, self.schema_version),
            completed=True
        ))
        self._current = first
        self.selection = SelectionState()
        self._notify("onboarding_completed")
        return first

    def _transition(self, target: Step):
        state: PersistedState = self.store.load()
        self.store.save(state.evolve(
            step_id=target.id,
            schema_version=max(state.schema_version, self.schema_version)
        ))
        self._current = target
        self._render(target)
        self._notify("onboarding_step_entered", step=target.name)

    def _render(self, step: Step):
        if self.renderer is not None:
            self.renderer.render(step)

    def _notify(self, event: str, **properties: Any):
        try:
            self.notifier.notify(event, **properties)
        except Exception as e:
            logger.debug("Notifier failed on %s: %s", event, e)
