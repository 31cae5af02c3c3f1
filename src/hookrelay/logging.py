"""Logging setup for hookrelay.

In a terminal, log lines go through Rich and the ``[GITHUB]``, ``[TRELLO]``, etc.
component prefixes are colored. Elsewhere logs stay plain so they parse cleanly.

Rich markup is disabled: messages carry header values, query parameters and
payload text, and any of those can contain square brackets.
"""

from __future__ import annotations

import logging
import os
import sys

from rich.console import Console
from rich.highlighter import RegexHighlighter
from rich.logging import RichHandler
from rich.theme import Theme

COMPONENTS = ("GITHUB", "TRELLO", "DISCORD", "REGISTER", "SANDBOX", "API")

RELAY_THEME = Theme({
    "logging.level.debug": "blue",
    "logging.level.info": "green",
    "logging.level.warning": "yellow",
    "logging.level.error": "red bold",
    "logging.level.critical": "red bold reverse",
    "relay.github": "magenta bold",
    "relay.trello": "cyan bold",
    "relay.discord": "blue bold",
    "relay.register": "yellow bold",
    "relay.sandbox": "white dim",
    "relay.api": "green bold",
})


class ComponentHighlighter(RegexHighlighter):
    """Styles component prefixes with the matching ``relay.*`` theme entry."""

    base_style = "relay."
    highlights = [rf"(?P<{name.lower()}>\[{name}\])" for name in COMPONENTS]


def should_use_rich() -> bool:
    """Rich output when HOOKRELAY_RICH_LOGS says so, else when stdout is a TTY."""
    env_value = os.environ.get("HOOKRELAY_RICH_LOGS", "").lower()

    if env_value in ("1", "true", "yes"):
        return True
    if env_value in ("0", "false", "no"):
        return False

    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def configure_logging(level: int | str = logging.INFO, force_rich: bool | None = None) -> None:
    """Install a single root handler.

    Args:
        level: Logging level, as a number or a name such as "DEBUG"
        force_rich: Override auto-detection. None = auto-detect.
    """
    use_rich = force_rich if force_rich is not None else should_use_rich()

    root = logging.getLogger()
    root.handlers.clear()

    if use_rich:
        handler: logging.Handler = RichHandler(
            console=Console(theme=RELAY_THEME, force_terminal=True),
            show_path=False,
            rich_tracebacks=True,
            markup=False,
            highlighter=ComponentHighlighter(),
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
        )

    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)

    for noisy in ("httpx", "httpcore", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
