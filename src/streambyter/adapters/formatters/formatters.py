"""Output formatters for search reports."""

from abc import ABC, abstractmethod
from io import StringIO
from typing import Any, Dict
import json

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...application.commands import SearchReport
from ...domain.models import MatchMode, MatchResult


class OutputFormatter(ABC):
    """Base class for report formatters."""

    def __init__(self, use_color: bool = True, verbose: bool = False, matched_only: bool = False):
        self.use_color = use_color
        self.verbose = verbose
        self.matched_only = matched_only

    @abstractmethod
    def format_report(self, report: SearchReport) -> str:
        pass

    def _visible(self, report: SearchReport):
        return report.matched if self.matched_only else report.results


class JSONFormatter(OutputFormatter):
    """Formats a report as a JSON document."""

    def format_report(self, report: SearchReport) -> str:
        data = {
            "pattern": report.pattern,
            "mode": report.mode.value,
            "started_at": report.started_at.isoformat(),
            "duration_seconds": round(report.duration_seconds, 3),
            "files_searched": report.files_searched,
            "files_matched": len(report.matched),
            "results": [self._result_dict(r) for r in self._visible(report)],
        }
        return json.dumps(data, indent=2)

    @staticmethod
    def _result_dict(result: MatchResult) -> Dict[str, Any]:
        return {
            "path": str(result.path) if result.path is not None else None,
            "result": result.result,
        }


class ConsoleFormatter(OutputFormatter):
    """Formats a report as a rich table."""

    def format_report(self, report: SearchReport) -> str:
        table = Table(title=f"Pattern: {escape(report.pattern)}", show_lines=False)
        table.add_column("File", overflow="fold")
        if report.mode == MatchMode.GROUPS:
            table.add_column("Groups")
        else:
            table.add_column("Match")

        for result in self._visible(report):
            table.add_row(escape(str(result.path)), self._cell(report.mode, result))

        buffer = StringIO()
        console = Console(file=buffer, force_terminal=self.use_color, no_color=not self.use_color, width=120)
        console.print(table)
        console.print(
            f"{len(report.matched)} of {report.files_searched} files matched"
            + (f" in {report.duration_seconds:.2f}s" if self.verbose else "")
        )
        return buffer.getvalue()

    @staticmethod
    def _cell(mode: MatchMode, result: MatchResult) -> str:
        if mode == MatchMode.GROUPS:
            if not result.result:
                return "[dim]-[/dim]"
            return escape(", ".join(f"{k}={v}" for k, v in result.result.items()))
        return "[green]yes[/green]" if result.result else "[dim]no[/dim]"


class FormatterFactory:
    """Creates formatters by name."""

    FORMATTERS = {
        "console": ConsoleFormatter,
        "json": JSONFormatter,
    }

    @classmethod
    def create(cls, output_format: str, **kwargs) -> OutputFormatter:
        formatter_cls = cls.FORMATTERS.get(output_format)
        if formatter_cls is None:
            raise ValueError(
                f"Unknown output format '{output_format}', expected one of {sorted(cls.FORMATTERS)}"
            )
        return formatter_cls(**kwargs)
