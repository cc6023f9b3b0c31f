"""Next-Step Suggester: asks Gemini what should follow the steps done so far.

Required output schema:
{
  "nextStepTitle": "string",
  "description": "string"
}

Not used by the fixed morning sequence. Every failure collapses to
FALLBACK_STEP; nothing is raised to the caller.
"""

import json
import os
import sys

from langchain_google_genai import ChatGoogleGenerativeAI

from startday.config import get_config
from startday.utils.parsing import response_text, strip_fences

FALLBACK_STEP = {
    "title": "Continue...",
    "description": "Move on to the next logical task.",
}

REQUIRED_FIELDS = ("nextStepTitle", "description")

RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "nextStepTitle": {"type": "string"},
        "description": {"type": "string"},
    },
    "required": list(REQUIRED_FIELDS),
}

PROMPT_TEMPLATE = """\
You are a workflow assistant. The user is following a sequence of instructions.
Context/Goal: "{context}".
Current History: {history}.

Generate the single next logical step.
- The title must be an action verb, very concise (max 5 words).
- The description should be one short sentence explaining the 'how' or 'why'.
"""


def _build_prompt(history: list[str], context: str) -> str:
    return PROMPT_TEMPLATE.format(context=context, history=" -> ".join(history))


def _build_llm(config: dict) -> ChatGoogleGenerativeAI:
    kwargs = {
        "model": config.get("suggester_model", "gemini-2.5-flash"),
        "temperature": config.get("suggester_temperature", 0.7),
        "response_mime_type": "application/json",
        "response_schema": RESPONSE_SCHEMA,
    }
    # GOOGLE_API_KEY is picked up by the client itself; API_KEY is the older name.
    if not os.environ.get("GOOGLE_API_KEY") and os.environ.get("API_KEY"):
        kwargs["google_api_key"] = os.environ["API_KEY"]
    return ChatGoogleGenerativeAI(**kwargs)


def _validate_response(data: dict) -> None:
    """Validate that the model response matches the two-field schema."""
    if not isinstance(data, dict):
        raise ValueError(f"Suggester response must be a JSON object, got {type(data).__name__}.")
    for field in REQUIRED_FIELDS:
        if field not in data:
            raise ValueError(f"Suggester response missing '{field}' field.")
        if not isinstance(data[field], str):
            raise ValueError(f"Suggester field '{field}' must be a string.")
    if not data["nextStepTitle"].strip():
        raise ValueError("Suggester response has an empty 'nextStepTitle'.")


def suggest_next_step(history: list[str], context: str | None = None) -> dict:
    """Ask the configured Gemini model for the step that should follow `history`.

    Args:
        history: Titles of the steps so far, oldest first.
        context: Free-text goal. None uses the configured default context.

    Returns:
        {"title": ..., "description": ...}, or a copy of FALLBACK_STEP when the
        call fails for any reason. A single attempt is made.
    """
    config = get_config()
    if context is None:
        context = config.get("default_context", "General daily routine")

    messages = [{"role": "user", "content": _build_prompt(history, context)}]

    try:
        llm = _build_llm(config)
        response = llm.invoke(messages)
        text = response_text(response)
        if not text.strip():
            raise ValueError("No response from model.")
        data = json.loads(strip_fences(text))
        _validate_response(data)
    except Exception as exc:
        print(f"[StartDay] Error generating step: {exc!r}", file=sys.stderr)
        return dict(FALLBACK_STEP)

    return {"title": data["nextStepTitle"], "description": data["description"]}
