"""Presenter: page phases, declared transitions, and the markup for a step.

The page is an explicit state machine over three phases. Each phase declares
the animation played when it is entered:

    showing_step --confirmed--> transitioning --revealed--> showing_step
                                              \\-finished--> showing_overlay
    any phase --reset--> showing_step

Everything here returns strings; dashboard/app.py hands them to Streamlit.
"""

import html
import json
import re
from typing import Literal

from startday.state import RevealedStep, SequenceState

Phase = Literal["showing_step", "transitioning", "showing_overlay"]
Event = Literal["confirmed", "revealed", "finished", "reset"]

_TRANSITIONS: dict[tuple[str, str], str] = {
    ("showing_step", "confirmed"): "transitioning",
    ("transitioning", "revealed"): "showing_step",
    ("transitioning", "finished"): "showing_overlay",
    ("showing_step", "reset"): "showing_step",
    ("transitioning", "reset"): "showing_step",
    ("showing_overlay", "reset"): "showing_step",
}

# Animation played on entering each phase.
ENTRY_TRANSITIONS: dict[str, dict] = {
    "showing_step": {
        "animation": "startday-step-enter",
        "duration_ms": 450,
        "easing": "cubic-bezier(0.34, 1.3, 0.64, 1)",
        "iterations": "1",
    },
    "transitioning": {
        "animation": "startday-pulse",
        "duration_ms": 2000,
        "easing": "ease-in-out",
        "iterations": "infinite",
    },
    "showing_overlay": {
        "animation": "startday-reveal",
        "duration_ms": 1200,
        "easing": "cubic-bezier(0.22, 1, 0.36, 1)",
        "iterations": "1",
    },
}

HINT_TEXT = "Click to Complete"

_MARKDOWN_SPECIAL_RE = re.compile(r"([\\`*_{}\[\]()#+\-.!|~<>$])")


def next_phase(phase: Phase, event: Event) -> Phase:
    """Return the phase after `event`. Pairs with no transition keep the phase."""
    return _TRANSITIONS.get((phase, event), phase)


def phase_for(state: SequenceState) -> Phase:
    """Derive the phase a freshly loaded page should be in."""
    if state["finished"]:
        return "showing_overlay"
    if state["steps"] and state["steps"][-1]["status"] == "completed":
        return "transitioning"
    return "showing_step"


def exit_transition(finishing: bool, duration_ms: int = 100) -> dict:
    """Exit animation for the bubble being replaced.

    When the sequence is finishing the bubble just disappears, so the
    overlay's own reveal is the only thing moving.
    """
    if finishing:
        return {
            "animation": "startday-fade-out",
            "duration_ms": 0,
            "easing": "linear",
            "iterations": "1",
        }
    return {
        "animation": "startday-blur-out",
        "duration_ms": duration_ms,
        "easing": "ease-in",
        "iterations": "1",
    }


def animation_css(transition: dict, delay_ms: int = 0) -> str:
    """Render a transition dict as a CSS animation declaration."""
    return (
        f"animation: {transition['animation']} {transition['duration_ms']}ms "
        f"{transition['easing']} {delay_ms}ms {transition['iterations']} both;"
    )


# --- Step bubble ---


def bubble_key(step: RevealedStep, suffix: str = "") -> str:
    """Widget key for a step's bubble; Streamlit exposes it as the st-key-<key> class."""
    key = f"bubble-{step['id']}"
    return f"{key}-{suffix}" if suffix else key


def escape_markdown(text: str) -> str:
    return _MARKDOWN_SPECIAL_RE.sub(r"\\\1", text)


def bubble_label(step: RevealedStep) -> str:
    """Button label: bold title, and the description while the step is pending."""
    label = f"**{escape_markdown(step['title'])}**"
    if step["status"] == "pending" and step.get("description"):
        label += f" {escape_markdown(step['description'])}"
    return label


def accessible_label(step: RevealedStep) -> str:
    """Screen-reader summary of the bubble: title, description, action."""
    parts = [f"Step: {step['title']}."]
    if step.get("description"):
        parts.append(step["description"])
    if step["status"] == "pending":
        parts.append("Press Enter or Space to mark this step complete.")
    else:
        parts.append("Completed.")
    return " ".join(parts)


def _css_url(url: str) -> str:
    return 'url("' + url.replace('"', "%22") + '")'


def bubble_css(
    step: RevealedStep,
    background_url: str,
    phase: Phase,
    key: str | None = None,
) -> str:
    """Style block for one bubble, scoped to its widget key.

    The phase picks the treatment: showing_step plays its entry animation on
    the flat bubble, transitioning fills it and plays the pulse. There is no
    bubble while the overlay is shown.
    """
    if phase not in ("showing_step", "transitioning"):
        raise ValueError(f"No bubble is drawn in phase '{phase}'.")

    key = key or bubble_key(step)
    scope = f".st-key-{key}"
    entry = animation_css(ENTRY_TRANSITIONS[phase])
    rules = [
        f"{scope} {{ display: flex; justify-content: center; }}",
        f"{scope} button {{"
        " position: relative; width: 20rem; height: 20rem; border-radius: 50%;"
        " border: 4px solid #e5e7eb; padding: 2rem; white-space: normal;"
        " transition: all 700ms ease-in-out; }",
        f"{scope} button p {{ font-size: 1rem; color: #64748b; line-height: 1.6; }}",
        f"{scope} button strong {{ display: block; font-size: 1.875rem; color: #1e293b;"
        " letter-spacing: -0.025em; line-height: 1.15; margin-bottom: 1rem; }",
    ]

    if phase == "showing_step":
        rules.extend(
            [
                f"{scope} {{ {entry} }}",
                f"{scope} button {{ background: #f3f4f6; cursor: pointer;"
                " animation: startday-bubble-in 450ms ease-out both; }",
                f"{scope} button:hover {{ background: #ffffff; border-color: #93c5fd;"
                " transform: scale(1.05); box-shadow: 0 20px 25px -5px rgba(0,0,0,0.1); }",
                f"{scope} button::after {{ content: \"{HINT_TEXT}\"; position: absolute;"
                " bottom: 3rem; left: 0; right: 0; font-size: 0.75rem; font-weight: 700;"
                " letter-spacing: 0.2em; text-transform: uppercase; color: #cbd5e1;"
                " opacity: 0; transition: opacity 300ms; }",
                f"{scope} button:hover::after, {scope} button:focus-visible::after"
                " { opacity: 1; }",
            ]
        )
    else:
        rules.extend(
            [
                f"{scope} button, {scope} button:disabled {{"
                f" background-image: {_css_url(background_url)};"
                " background-size: cover; background-position: center;"
                " box-shadow: inset 0 0 0 999px rgba(0,0,0,0.3), 0 0 40px rgba(0,0,0,0.2);"
                f" border-color: transparent; opacity: 1; cursor: default; {entry} }}",
                f"{scope} button strong {{ color: #ffffff;"
                " text-shadow: 0 4px 6px rgba(0,0,0,0.3); }",
            ]
        )

    return "<style>\n" + "\n".join(rules) + "\n</style>"


def exit_css(key: str, transition: dict) -> str:
    """Style block that plays an exit transition on the keyed bubble."""
    return f"<style>\n.st-key-{key} {{ {animation_css(transition)} }}\n</style>"


def focus_script(step: RevealedStep, key: str | None = None) -> str:
    """Script that labels the bubble and moves keyboard focus onto it.

    Runs inside a components iframe, so it reaches into the parent document
    and retries until Streamlit has mounted the button.
    """
    key = key or bubble_key(step)
    selector = json.dumps(f".st-key-{key} button")
    label = json.dumps(accessible_label(step)).replace("</", "<\\/")
    return f"""
<script>
(function () {{
  const doc = window.parent.document;
  let tries = 0;
  function focusBubble() {{
    const button = doc.querySelector({selector});
    if (!button) {{
      if (tries++ < 20) setTimeout(focusBubble, 50);
      return;
    }}
    button.setAttribute("aria-label", {label});
    button.focus();
  }}
  focusBubble();
}})();
</script>
"""


# --- Page chrome ---


def header_html(logo_url: str, title: str, subtitle: str) -> str:
    return (
        "<div class='startday-header'>"
        f"<img src='{html.escape(logo_url, quote=True)}' alt='DXA Logo' />"
        f"<h1>{html.escape(title)} <span>{html.escape(subtitle)}</span></h1>"
        "</div>"
    )


# --- Completion overlay ---


def overlay_html(background_url: str, message: str) -> str:
    """Full-screen circular reveal with the thank-you message."""
    reveal = animation_css(ENTRY_TRANSITIONS["showing_overlay"])
    return f"""
<style>
.startday-overlay {{
  position: fixed; inset: 0; z-index: 999990;
  display: flex; align-items: center; justify-content: center;
  background-image: {_css_url(background_url)};
  background-size: cover; background-position: center;
  box-shadow: inset 0 0 0 100vmax rgba(0,0,0,0.3);
  {reveal}
}}
.startday-overlay h1 {{
  color: #ffffff; font-size: 4.5rem; font-weight: 700; letter-spacing: 0.025em;
  text-shadow: 0 25px 50px rgba(0,0,0,0.25);
  animation: startday-message-in 1000ms ease-out 600ms both;
}}
</style>
<div class="startday-overlay" role="dialog" aria-label="{html.escape(message, quote=True)}">
  <h1>{html.escape(message)}</h1>
</div>
"""


def exit_control_css(key: str) -> str:
    """Pin the overlay's exit button to the bottom centre, above the overlay."""
    scope = f".st-key-{key}"
    return f"""
<style>
{scope} {{
  position: fixed; bottom: 0.25rem; left: 50%; transform: translateX(-50%);
  z-index: 999999; width: auto;
  animation: startday-exit-in 500ms ease-out 1500ms both;
}}
{scope} button {{
  border-radius: 9999px; border: 2px solid rgba(255,255,255,0.5);
  background: transparent; color: #ffffff; padding: 1rem 1.25rem; font-size: 1.5rem;
}}
{scope} button:hover {{ background: rgba(255,255,255,0.2); color: #ffffff; }}
</style>
"""


def close_window_script(notice: str) -> str:
    """Try to close the tab; when the browser refuses, tell the user with a blocking alert."""
    message = json.dumps(notice).replace("</", "<\\/")
    return f"""
<script>
(function () {{
  const host = window.top;
  try {{
    host.close();
  }} catch (e) {{
    console.log("Window close prevented by browser", e);
  }}
  setTimeout(function () {{
    let closed = false;
    try {{
      closed = host.closed;
    }} catch (e) {{
      closed = false;
    }}
    if (!closed) {{
      window.alert({message});
    }}
  }}, 300);
}})();
</script>
"""


KEYFRAMES_CSS = """
<style>
@keyframes startday-step-enter {
  from { opacity: 0; transform: translateY(50px); }
  to { opacity: 1; transform: translateY(0); }
}
@keyframes startday-bubble-in {
  from { opacity: 0; transform: scale(0.8); filter: blur(10px); }
  to { opacity: 1; transform: scale(1); filter: blur(0); }
}
@keyframes startday-pulse {
  0%, 100% { transform: scale(1); }
  50% { transform: scale(1.05); }
}
@keyframes startday-blur-out {
  from { opacity: 1; transform: scale(1); filter: blur(0); }
  to { opacity: 0; transform: scale(1.1); filter: blur(20px); }
}
@keyframes startday-fade-out {
  from { opacity: 1; }
  to { opacity: 0; }
}
@keyframes startday-reveal {
  from { clip-path: circle(160px at center); }
  to { clip-path: circle(150% at center); }
}
@keyframes startday-message-in {
  from { opacity: 0; transform: scale(0.9); }
  to { opacity: 1; transform: scale(1); }
}
@keyframes startday-exit-in {
  from { opacity: 0; transform: translate(-50%, 30px); }
  to { opacity: 1; transform: translate(-50%, 0); }
}
.startday-header { display: flex; align-items: center; gap: 1.5rem; }
.startday-header img { width: 9rem; height: 9rem; object-fit: contain; }
.startday-header h1 {
  font-size: 3rem; font-weight: 700; letter-spacing: -0.05em;
  text-transform: uppercase; color: #1e293b; margin: 0;
}
.startday-header h1 span { color: #64748b; }
</style>
"""
