"""
Onboarding Step Sequence

The ordered list of wizard stages and the pure successor function over it.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence

from dayflow_onboarding.wizard.exceptions import (
    InvalidTransitionError, StepDefinitionError
)


@dataclass(frozen=True)
class Step:
    """One wizard stage. ``id`` is its position in the current sequence."""
    id: int
    name: str
    title: str = ""
    back_target: Optional[str] = None


# Step definitions, in order. Position is the persisted id.
STEP_DEFINITIONS = [
    {
        "name": "welcome",
        "title": "Welcome",
    },
    {
        "name": "how_it_works",
        "title": "How Dayflow Works",
        "back_target": "welcome",
    },
    {
        "name": "llm_selection",
        "title": "Choose an AI Provider",
        "back_target": "how_it_works",
    },
    {
        "name": "llm_setup",
        "title": "Provider Setup",
        "back_target": "llm_selection",
    },
    {
        "name": "categories",
        "title": "Customize Categories",
    },
    {
        "name": "screen_recording",
        "title": "Screen Recording Permission",
        "back_target": "categories",
    },
    {
        "name": "completion",
        "title": "All Set",
    },
]

# Names the controller attaches behaviour to
PROVIDER_SELECTION_STEP = "llm_selection"
CAPABILITY_STEP = "screen_recording"

PROVIDERS = {
    "gemini": {
        "name": "Gemini",
        "description": "Google Gemini with your own API key",
    },
    "ollama": {
        "name": "Local model",
        "description": "Ollama or LM Studio running on this machine",
    },
    "dayflow": {
        "name": "Dayflow Pro",
        "description": "Hosted by Dayflow, nothing to configure",
    },
}


class StepSequence:
    """Immutable, totally ordered sequence of steps."""

    def __init__(self, steps: Sequence[Step]):
        self._steps = tuple(steps)
        self._by_name: Dict[str, Step] = {}
        self._validate()

    def _validate(self):
        if not self._steps:
            raise StepDefinitionError("A step sequence needs at least one step")
        for position, step in enumerate(self._steps):
            if step.id != position:
                raise StepDefinitionError(
                    f"Step '{step.name}' has id {step.id}, expected {position}",
                    details="Step ids must be contiguous and start at 0"
                )
            if step.name in self._by_name:
                raise StepDefinitionError(f"Duplicate step name '{step.name}'")
            self._by_name[step.name] = step
        for step in self._steps:
            if step.back_target is None:
                continue
            target = self._by_name.get(step.back_target)
            if target is None or target.id >= step.id:
                raise StepDefinitionError(
                    f"Step '{step.name}' goes back to '{step.back_target}', "
                    "which is not an earlier step"
                )

    @classmethod
    def from_definitions(cls, definitions: List[dict]) -> "StepSequence":
        """Build a sequence from a list of step definition dicts."""
        return cls([
            Step(
                id=position,
                name=definition["name"],
                title=definition.get("title", ""),
                back_target=definition.get("back_target"),
            )
            for position, definition in enumerate(definitions)
        ])

    @property
    def first(self) -> Step:
        return self._steps[0]

    @property
    def terminal(self) -> Step:
        return self._steps[-1]

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self._steps)

    def __contains__(self, step: object) -> bool:
        return isinstance(step, Step) and self.get(step.id) == step

    def get(self, step_id: int) -> Optional[Step]:
        """Look up a step by id. Returns None for ids outside the sequence."""
        if isinstance(step_id, bool) or not isinstance(step_id, int):
            return None
        if 0 <= step_id < len(self._steps):
            return self._steps[step_id]
        return None

    def by_name(self, name: str) -> Step:
        """Look up a step by name."""
        try:
            return self._by_name[name]
        except KeyError:
            raise StepDefinitionError(f"Unknown step '{name}'") from None

    def is_terminal(self, step: Step) -> bool:
        return step.id == self.terminal.id

    def successor(self, step: Step) -> Step:
        """Return the step after ``step``.

        Callers must check ``is_terminal`` first; the terminal step has no
        successor.
        """
        if self.is_terminal(step):
            raise InvalidTransitionError(
                f"'{step.name}' is the last step and has no successor",
                step=step.name
            )
        return self._steps[step.id + 1]


DEFAULT_SEQUENCE = StepSequence.from_definitions(STEP_DEFINITIONS)
