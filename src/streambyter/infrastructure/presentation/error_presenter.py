"""User-facing rendering of exceptions."""

import traceback

from rich.markup import escape

from ...domain.exceptions import ConfigurationError, InvalidPatternError


class ErrorPresenter:
    """Formats exceptions as rich markup for the console."""

    @staticmethod
    def present(error: BaseException, verbose: bool = False) -> str:
        """
        Render an error.

        Args:
            error: Exception to render
            verbose: Include the traceback

        Returns:
            Rich markup string
        """
        if isinstance(error, KeyboardInterrupt):
            return "[yellow]Interrupted by user[/yellow]"

        if isinstance(error, InvalidPatternError):
            message = f"[red]Invalid pattern:[/red] {escape(error.reason)}\n  pattern: {escape(error.pattern)}"
        elif isinstance(error, ConfigurationError):
            message = f"[red]Configuration error:[/red] {escape(str(error))}"
        elif isinstance(error, FileNotFoundError):
            message = f"[red]File not found:[/red] {escape(str(error.filename))}"
        elif isinstance(error, PermissionError):
            message = f"[red]Permission denied:[/red] {escape(str(error.filename))}"
        elif isinstance(error, IsADirectoryError):
            message = f"[red]Is a directory:[/red] {escape(str(error.filename))}"
        elif isinstance(error, OSError):
            message = f"[red]I/O error:[/red] {escape(str(error))}"
        else:
            message = f"[red]Error:[/red] {type(error).__name__}: {escape(str(error))}"

        if verbose:
            details = "".join(traceback.format_exception(type(error), error, error.__traceback__))
            message += f"\n\n[dim]{escape(details)}[/dim]"

        return message
