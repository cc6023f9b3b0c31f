"""Page and suggester settings: `.env` for secrets, `config.yaml` for everything else."""

from pathlib import Path

import yaml
from dotenv import load_dotenv

# GOOGLE_API_KEY (or API_KEY) lives in the .env next to pyproject.toml
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

CONFIG_PATH = Path(__file__).resolve().parent / "config.yaml"

REQUIRED_KEYS = (
    "settle_delay_ms",
    "page_title",
    "background_url",
    "reset_prompt",
    "thank_you_message",
    "close_refused_notice",
)


def load_config(path: Path) -> dict:
    """Read a settings file and check the page can be drawn from it.

    Raises ValueError if the file is not a mapping, lacks a required key,
    or has a negative settle delay.
    """
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a YAML mapping.")

    missing = [key for key in REQUIRED_KEYS if key not in data]
    if missing:
        raise ValueError(f"{path} missing required keys: {', '.join(missing)}")

    delay = data["settle_delay_ms"]
    if not isinstance(delay, (int, float)) or delay < 0:
        raise ValueError(f"settle_delay_ms must be a non-negative number, got {delay!r}.")
    return data


_config = load_config(CONFIG_PATH)


def get_config() -> dict:
    """Return the settings loaded at import."""
    return _config
