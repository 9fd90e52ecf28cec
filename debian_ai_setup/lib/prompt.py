from __future__ import annotations

import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class Prompter:
    """Interactive stdin prompts; input_fn is swappable for tests."""

    def __init__(self, input_fn: Optional[Callable[[str], str]] = None) -> None:
        self.input_fn = input_fn or input

    def confirm(self, question: str) -> bool:
        try:
            reply = self.input_fn(f"{question} (y/N) ")
        except EOFError:
            reply = ""
        accepted = reply.strip()[:1] in {"y", "Y"}
        logger.info("Confirmation %r -> %s", question, "yes" if accepted else "no")
        return accepted

    def ask(self, question: str) -> str:
        try:
            return self.input_fn(f"{question}: ").strip()
        except EOFError:
            return ""
