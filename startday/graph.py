"""LangGraph StateGraph for one confirm cycle of the step sequence.

    complete --(ignored)--> END
        |
    settle --> reveal --> END
          \\-> finish --> END
"""

import time
import uuid
from typing import Callable, Sequence

from langgraph.graph import END, StateGraph

from startday.state import CycleState, RevealedStep, SequenceState, StepDefinition


def new_step_id(prefix: str = "step") -> str:
    """Return a fresh step identifier, e.g. 'step-3f2a9c01b7de'."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def reveal_step(definition: StepDefinition, prefix: str = "step") -> RevealedStep:
    """Build a pending RevealedStep from a definition without touching the definition."""
    return {
        "id": new_step_id(prefix),
        "title": definition["title"],
        "description": definition.get("description"),
        "status": "pending",
    }


def initial_state(definitions: Sequence[StepDefinition]) -> SequenceState:
    """One pending step built from the first definition, or nothing at all."""
    if not definitions:
        return {"steps": [], "finished": False}
    return {"steps": [reveal_step(definitions[0], prefix="init")], "finished": False}


def pending_step(state: SequenceState) -> RevealedStep | None:
    """Return the step awaiting confirmation, if any."""
    if state["finished"] or not state["steps"]:
        return None
    last = state["steps"][-1]
    if last["status"] != "pending":
        return None
    return last


def _mark_completed(state: CycleState) -> dict:
    """Complete the pending step when the confirmed identifier matches it."""
    pending = pending_step(state)
    if pending is None or pending["id"] != state.get("target"):
        return {"outcome": "ignored"}

    steps = [
        {**step, "status": "completed"} if step["id"] == pending["id"] else step
        for step in state["steps"]
    ]
    return {"steps": steps, "outcome": "completed"}


def _route_after_complete(state: CycleState) -> str:
    if state.get("outcome") == "completed":
        return "settle"
    return "end"


def route_after_settle(state: SequenceState, definitions: Sequence[StepDefinition]) -> str:
    """Conditional edge after the settle delay: next definition or the end of the list."""
    if len(state["steps"]) < len(definitions):
        return "reveal"
    return "finish"


def build_graph(
    definitions: Sequence[StepDefinition],
    settle_seconds: float,
    sleep: Callable[[float], None] = time.sleep,
):
    """Compile the confirm-cycle graph for a definition list.

    Returns (compiled_graph, node_fns). node_fns maps node names to the plain
    node callables so the page can run the cycle one node at a time.
    """
    definitions = tuple(definitions)

    def _settle(state: CycleState) -> dict:
        sleep(settle_seconds)
        return {"outcome": state["outcome"]}

    def _reveal_next(state: CycleState) -> dict:
        next_definition = definitions[len(state["steps"])]
        return {"steps": state["steps"] + [reveal_step(next_definition)]}

    def _finish(state: CycleState) -> dict:
        return {"finished": True}

    def _route(state: CycleState) -> str:
        return route_after_settle(state, definitions)

    # --- Build the graph ---

    workflow = StateGraph(CycleState)

    workflow.add_node("complete", _mark_completed)
    workflow.add_node("settle", _settle)
    workflow.add_node("reveal", _reveal_next)
    workflow.add_node("finish", _finish)

    workflow.set_entry_point("complete")

    workflow.add_conditional_edges(
        "complete",
        _route_after_complete,
        {
            "settle": "settle",
            "end": END,
        },
    )
    workflow.add_conditional_edges(
        "settle",
        _route,
        {
            "reveal": "reveal",
            "finish": "finish",
        },
    )

    workflow.add_edge("reveal", END)
    workflow.add_edge("finish", END)

    node_fns = {
        "complete": _mark_completed,
        "settle": _settle,
        "reveal": _reveal_next,
        "finish": _finish,
    }
    return workflow.compile(), node_fns
