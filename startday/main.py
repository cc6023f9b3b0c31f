"""Entry point: serves the checklist page with Streamlit."""

import sys
from pathlib import Path

from streamlit.web import cli as stcli

APP_PATH = Path(__file__).resolve().parent / "dashboard" / "app.py"


def main() -> None:
    """Launch `streamlit run` on the checklist page, passing through extra arguments."""
    sys.argv = ["streamlit", "run", str(APP_PATH), *sys.argv[1:]]
    sys.exit(stcli.main())


if __name__ == "__main__":
    main()
