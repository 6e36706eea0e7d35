from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional

from hylo_intgen.errors import IntGenError

class C:
    """ANSI color/style escape codes."""
    RESET = "\x1b[0m"
    BOLD  = "\x1b[1m"
    DIM   = "\x1b[2m"
    RED   = "\x1b[31m"
    CYAN  = "\x1b[36m"

@dataclass
class Diagnostic:
    kind: str
    code: str
    message: str
    subject: Optional[str] = None  # kind name or path the diagnostic is about


class Reporter:
    def __init__(self, tool: str = "hylo-intgen") -> None:
        self.tool = tool
        self.items: List[Diagnostic] = []

    def error(self, code: str, msg: str, subject: Optional[str] = None):
        self.items.append(Diagnostic("error", code, msg, subject))

    def exception(self, exc: IntGenError, subject: Optional[str] = None):
        self.error(exc.code, exc.text, subject)

    @property
    def has_errors(self) -> bool:
        return any(d.kind == "error" for d in self.items)

    def format(self, use_color: bool = True) -> str:
        out: List[str] = []
        for d in self.items:
            loc = f"{self.tool}: {d.subject}" if d.subject else self.tool

            # Ensure message ends with period
            message = d.message if d.message.endswith('.') else f"{d.message}."

            if use_color:
                kind = f"{C.BOLD}{C.RED}{d.kind}{C.RESET}"
                out.append(f"{C.CYAN}{loc}{C.RESET}: {kind} [{C.DIM}{d.code}{C.RESET}]: {message}")
            else:
                out.append(f"{loc}: {d.kind} [{d.code}]: {message}")
        return "\n".join(out)

    def print(self, stream=None, use_color: Optional[bool] = None) -> None:
        """Print diagnostics to `stream` (default: sys.stderr).

        Color is auto-enabled for TTY unless NO_COLOR or TERM=dumb.
        """
        import os, sys
        stream = stream or sys.stderr

        if use_color is None:
            is_tty = getattr(stream, "isatty", lambda: False)()
            no_color = os.getenv("NO_COLOR") is not None
            dumb = os.getenv("TERM") == "dumb"
            use_color = bool(is_tty and not no_color and not dumb)

        if self.items:
            print(self.format(use_color=use_color), file=stream)
