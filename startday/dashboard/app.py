"""DXA - Start The Day: Streamlit page that walks through the morning checklist."""

import sys
import time
from pathlib import Path

# Add project root to path so 'startday' package is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

import streamlit as st
import streamlit.components.v1 as components

from startday.config import get_config
from startday.presenter import (
    KEYFRAMES_CSS,
    bubble_css,
    bubble_key,
    bubble_label,
    close_window_script,
    exit_control_css,
    exit_css,
    exit_transition,
    focus_script,
    header_html,
    next_phase,
    overlay_html,
    phase_for,
)
from startday.sequencer import StepSequencer

config = get_config()

st.set_page_config(page_title=config["page_title"], layout="wide")
st.markdown(KEYFRAMES_CSS, unsafe_allow_html=True)


def _sequencer() -> StepSequencer:
    """One sequencer per browser session."""
    if "sequencer" not in st.session_state:
        st.session_state["sequencer"] = StepSequencer()
        st.session_state["phase"] = phase_for(st.session_state["sequencer"].state)
    return st.session_state["sequencer"]


def _apply(event: str) -> None:
    st.session_state["phase"] = next_phase(st.session_state["phase"], event)


# ---------------------------------------------------------------------------
# Reset: a modal instead of a blocking prompt
# ---------------------------------------------------------------------------


@st.dialog("Reset")
def _confirm_reset(sequencer: StepSequencer) -> None:
    st.write(sequencer.reset_prompt)
    yes_col, no_col = st.columns(2)
    if yes_col.button("Yes", type="primary", key="reset_yes", use_container_width=True):
        if sequencer.reset(lambda _prompt: True):
            _apply("reset")
        st.rerun()
    if no_col.button("Cancel", key="reset_no", use_container_width=True):
        st.rerun()


def _render_header(sequencer: StepSequencer) -> None:
    title_col, reset_col = st.columns([6, 1], vertical_alignment="center")
    with title_col:
        st.markdown(
            header_html(config["logo_url"], config["header_title"], config["header_subtitle"]),
            unsafe_allow_html=True,
        )
    with reset_col:
        if st.button("↻", key="reset", help="Reset Flow"):
            _confirm_reset(sequencer)

    revealed, total = sequencer.progress()
    if total:
        st.caption(f"Step {revealed} of {total}")


# ---------------------------------------------------------------------------
# Step bubble
# ---------------------------------------------------------------------------


def _play_confirm_cycle(sequencer: StepSequencer, slot, exit_slot) -> None:
    """Show the completed bubble through the settle delay, then move on."""
    done = sequencer.current_step
    done_key = bubble_key(done, suffix="done")
    with slot.container():
        st.markdown(
            bubble_css(done, config["background_url"], st.session_state["phase"], key=done_key),
            unsafe_allow_html=True,
        )
        st.button(bubble_label(done), key=done_key, disabled=True)

    sequencer.settle()
    route = sequencer.advance()
    if route is None:
        # Nothing was waiting to settle; resync the phase with the sequence.
        resynced = phase_for(sequencer.state)
        if resynced != st.session_state["phase"]:
            st.session_state["phase"] = resynced
            st.rerun()
        return
    finishing = route == "finish"

    transition = exit_transition(finishing, config.get("exit_transition_ms", 100))
    if transition["duration_ms"]:
        exit_slot.markdown(exit_css(done_key, transition), unsafe_allow_html=True)
        time.sleep(transition["duration_ms"] / 1000)

    _apply("finished" if finishing else "revealed")
    st.rerun()


def _render_step(sequencer: StepSequencer) -> None:
    step = sequencer.current_step
    if step is None:
        return

    slot = st.empty()
    exit_slot = st.empty()

    phase = st.session_state["phase"]

    # A rerun that interrupted the settle delay lands here still transitioning.
    if phase == "transitioning":
        _play_confirm_cycle(sequencer, slot, exit_slot)
        return

    with slot.container():
        st.markdown(bubble_css(step, config["background_url"], phase), unsafe_allow_html=True)
        clicked = st.button(bubble_label(step), key=bubble_key(step))
    components.html(focus_script(step), height=0)

    if clicked and sequencer.begin_confirm(step["id"]):
        _apply("confirmed")
        _play_confirm_cycle(sequencer, slot, exit_slot)


# ---------------------------------------------------------------------------
# Completion overlay
# ---------------------------------------------------------------------------


def _render_overlay() -> None:
    st.markdown(
        overlay_html(config["background_url"], config["thank_you_message"]),
        unsafe_allow_html=True,
    )
    st.markdown(exit_control_css("exit"), unsafe_allow_html=True)
    if st.button("✕", key="exit", help="Close"):
        components.html(close_window_script(config["close_refused_notice"]), height=0)


# ---------------------------------------------------------------------------
# Page logic, driven by the presenter phase
# ---------------------------------------------------------------------------

sequencer = _sequencer()
phase = st.session_state["phase"]

if phase == "showing_overlay":
    _render_overlay()
else:
    _render_header(sequencer)
    _render_step(sequencer)
