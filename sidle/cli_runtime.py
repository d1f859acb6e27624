"""Runtime data structures and CLI helpers shared between Click wiring and the runner."""

from __future__ import annotations

from typing import List, Optional, Protocol

from rich.console import Console
from rich.markup import escape


def _color_text(text: str, style: Optional[str]) -> str:
    """Wrap *text* in ``[style]...[/]`` markup unless *style* is empty."""
    if style:
        return f"[{style}]{text}[/]"
    return text


def format_kv(
    label: str,
    value: object,
    *,
    label_style: Optional[str] = "dim",
    value_style: Optional[str] = "bright_white",
    sep: str = "=",
) -> str:
    """Format a label/value pair as a single Rich markup string."""
    label_text = escape(str(label))
    value_text = escape(str(value))
    return f"{_color_text(label_text, label_style)}{sep}{_color_text(value_text, value_style)}"


class CLIAppError(RuntimeError):
    """Raised when the CLI cannot complete its work."""

    def __init__(self, message: str, *, code: int = 1, rich_message: Optional[str] = None) -> None:
        super().__init__(message)
        self.code = code
        self.rich_message = rich_message or message


class ReporterProtocol(Protocol):
    quiet: bool
    verbose: bool

    def banner(self, text: str) -> None: ...

    def line(self, text: str) -> None: ...

    def verbose_line(self, text: str) -> None: ...

    def error(self, text: str) -> None: ...


class CliOutputManager:
    """Rich-backed console presentation for a render run."""

    def __init__(
        self,
        *,
        quiet: bool,
        verbose: bool,
        no_color: bool,
        console: Console | None = None,
        error_console: Console | None = None,
    ) -> None:
        self.quiet = quiet
        self.verbose = verbose and not quiet
        self.no_color = no_color
        self.console = console or Console(no_color=no_color, highlight=False)
        self.error_console = error_console or Console(stderr=True, no_color=no_color, highlight=False)

    def banner(self, text: str) -> None:
        if self.quiet:
            return
        self.console.print(f"[bold bright_cyan]{escape(text)}[/]")

    def line(self, text: str) -> None:
        if self.quiet:
            return
        self.console.print(text)

    def verbose_line(self, text: str) -> None:
        if not self.verbose:
            return
        self.console.print(f"[dim]{text}[/]")

    def error(self, text: str) -> None:
        self.error_console.print(f"[red]{text}[/]")


class NullCliOutputManager:
    """Reporter that records lines instead of printing them."""

    def __init__(self, *, quiet: bool = False, verbose: bool = False) -> None:
        self.quiet = quiet
        self.verbose = verbose
        self.lines: List[str] = []
        self.errors: List[str] = []

    def banner(self, text: str) -> None:
        self.lines.append(text)

    def line(self, text: str) -> None:
        self.lines.append(text)

    def verbose_line(self, text: str) -> None:
        if self.verbose:
            self.lines.append(text)

    def error(self, text: str) -> None:
        self.errors.append(text)


__all__ = [
    "CLIAppError",
    "CliOutputManager",
    "NullCliOutputManager",
    "ReporterProtocol",
    "format_kv",
]
