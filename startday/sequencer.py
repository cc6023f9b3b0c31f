"""Step Sequencer: owns the revealed steps and walks the definition list."""

import time
from typing import Callable, Sequence

from startday.config import get_config
from startday.graph import build_graph, initial_state, pending_step, route_after_settle
from startday.state import CycleState, RevealedStep, SequenceState, StepDefinition
from startday.steps import INSTRUCTION_SEQUENCE


class StepSequencer:
    """Walks an ordered list of step definitions, one confirmation at a time.

    The full confirm cycle runs through the compiled graph (confirm). The page
    uses begin_confirm / settle / advance instead so it can draw the completed
    bubble while the settle delay runs.
    """

    def __init__(
        self,
        definitions: Sequence[StepDefinition] | None = None,
        settle_seconds: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        config = get_config()
        if definitions is None:
            definitions = INSTRUCTION_SEQUENCE
        if settle_seconds is None:
            settle_seconds = config.get("settle_delay_ms", 700) / 1000

        self.definitions: tuple[StepDefinition, ...] = tuple(definitions)
        self.settle_seconds = settle_seconds
        self.reset_prompt = config.get("reset_prompt", "Reset your flow?")
        self._graph, self._node_fns = build_graph(self.definitions, settle_seconds, sleep)
        self._state: CycleState = {"steps": [], "finished": False}
        self.initialize()

    # --- Accessors ---

    @property
    def state(self) -> SequenceState:
        return {"steps": self.steps, "finished": self._state["finished"]}

    @property
    def steps(self) -> list[RevealedStep]:
        """Every revealed step in reveal order (a copy)."""
        return [dict(step) for step in self._state["steps"]]

    @property
    def current_step(self) -> RevealedStep | None:
        """The step to render: the tail of the history."""
        if not self._state["steps"]:
            return None
        return dict(self._state["steps"][-1])

    @property
    def pending_step(self) -> RevealedStep | None:
        step = pending_step(self._state)
        return dict(step) if step else None

    @property
    def finished(self) -> bool:
        return self._state["finished"]

    def titles(self) -> list[str]:
        """Titles revealed so far, the history the suggester expects."""
        return [step["title"] for step in self._state["steps"]]

    def progress(self) -> tuple[int, int]:
        """Return (revealed, total)."""
        return len(self._state["steps"]), len(self.definitions)

    # --- Operations ---

    def initialize(self) -> None:
        """Start over with a single pending step from the first definition."""
        self._state = {**initial_state(self.definitions)}

    def confirm(self, identifier: str) -> bool:
        """Run one full confirm cycle, settle delay included.

        Returns False (and changes nothing) when the identifier is not the
        pending step or the sequence is already finished.
        """
        result = self._graph.invoke(
            {
                "steps": self._state["steps"],
                "finished": self._state["finished"],
                "target": identifier,
            }
        )
        if result.get("outcome") != "completed":
            return False
        self._state = {"steps": result["steps"], "finished": result["finished"]}
        return True

    def reset(self, ask: Callable[[str], bool]) -> bool:
        """Ask the host to confirm, then start over. Returns whether it reset."""
        if not ask(self.reset_prompt):
            return False
        self.initialize()
        return True

    # --- Step-execution helpers for the page ---

    def run_single_step(self, node_name: str, target: str | None = None) -> CycleState:
        """Run a single graph node against the current state and keep the result."""
        node_fn = self._node_fns[node_name]
        state: CycleState = {**self._state}
        if target is not None:
            state["target"] = target
        updates = node_fn(state)
        self._state = {**state, **updates}
        return self._state

    def begin_confirm(self, identifier: str) -> bool:
        """Mark the pending step completed without waiting or advancing.

        A mismatched identifier leaves the state untouched, including a
        confirmation that is still waiting to settle.
        """
        step = pending_step(self._state)
        if step is None or step["id"] != identifier:
            return False
        state = self.run_single_step("complete", target=identifier)
        return state.get("outcome") == "completed"

    def settle(self) -> None:
        """Wait the settle delay after a begin_confirm."""
        if self._state.get("outcome") == "completed":
            self.run_single_step("settle")

    def advance(self) -> str | None:
        """Reveal the next step or finish, after a begin_confirm.

        Returns "reveal", "finish", or None when there is nothing to advance.
        """
        if self._state.get("outcome") != "completed":
            return None
        route = route_after_settle(self._state, self.definitions)
        self.run_single_step(route)
        self._state = {"steps": self._state["steps"], "finished": self._state["finished"]}
        return route
