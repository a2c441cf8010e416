"""Observer pattern for lint reporting."""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from .message import Message
from .models import Level, LintResult

LEVEL_STYLES = {
    Level.ERROR: "red",
    Level.WARNING: "yellow",
}


class LintObserver(ABC):
    """Abstract base class for lint observers."""

    @abstractmethod
    async def on_message_linted(
        self, source: str, message: Message, result: LintResult
    ) -> None:
        """Called after a single commit message has been validated."""
        pass

    @abstractmethod
    async def on_lint_completed(self, total: int, failed: int) -> None:
        """Called once every message has been validated."""
        pass


class ConsoleLogObserver(LintObserver):
    """Observer that reports violations to the console."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console or Console()
        self.verbose = verbose

    async def on_message_linted(
        self, source: str, message: Message, result: LintResult
    ) -> None:
        if not result.violations:
            if self.verbose:
                self.console.print(f"[green]✔ {escape(source)}: {escape(message.subject or '')}[/green]")
            return

        self.console.print(f"[bold]{escape(source)}[/bold]: {escape(message.subject or '')}")
        for violation in result.violations:
            style = LEVEL_STYLES.get(violation.level, "white")
            self.console.print(
                f"  [{style}]{violation.level.value}[/{style}] "
                f"{escape(violation.message)} [dim]({violation.rule})[/dim]"
            )

    async def on_lint_completed(self, total: int, failed: int) -> None:
        if failed:
            self.console.print(f"[red]{failed} of {total} commit message(s) failed linting[/red]")
        elif self.verbose:
            self.console.print(f"[green]All {total} commit message(s) passed[/green]")


class FileLogObserver(LintObserver):
    """Observer that logs lint results to a file."""

    def __init__(self, log_file: str):
        self.log_file = Path(log_file)
        # Ensure the parent directory exists
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    async def _log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.log_file.open("a") as f:
            f.write(f"{timestamp} - {message}\n")

    async def on_message_linted(
        self, source: str, message: Message, result: LintResult
    ) -> None:
        status = "Failed" if result.has_errors else "Passed"
        await self._log(f"{status} {source}: {message.subject}")
        for violation in result.violations:
            await self._log(
                f"  {violation.level.value} [{violation.rule}] {violation.message}"
            )

    async def on_lint_completed(self, total: int, failed: int) -> None:
        await self._log(f"Linted {total} commit message(s), {failed} failed")
