"""CLI command implementations."""

import asyncio
from typing import Any, Dict, List, Optional
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ...infrastructure.di.container import DIContainer
from ...infrastructure.config.config_loader import ConfigLoader
from ...infrastructure.presentation.error_presenter import ErrorPresenter
from ...application.commands import SearchFilesCommand
from ...domain.models import MatchMode, ReadOptions
from ..formatters import FormatterFactory

EXIT_OK = 0
EXIT_MATCHED = 0
EXIT_NO_MATCH = 1
EXIT_ERROR = 2


def search_command(
    pattern: str,
    targets: List[str],
    groups: bool,
    chunk_size: Optional[int],
    max_concurrency: Optional[int],
    output_format: Optional[str],
    matched_only: bool,
    config_path: Optional[str],
    verbose: bool,
    console: Console,
) -> int:
    """
    Execute search command.

    Args:
        pattern: Regular expression
        targets: Files, directories or glob patterns
        groups: Report named capture groups instead of match/no match
        chunk_size: Bytes per read
        max_concurrency: Concurrent file limit
        output_format: Output format
        matched_only: Only list files that matched
        config_path: Config file path
        verbose: Verbose output
        console: Rich console

    Returns:
        Process exit code
    """
    try:
        container = DIContainer.create(config_path)
    except Exception as e:
        console.print(ErrorPresenter.present(e, verbose=verbose))
        return EXIT_ERROR

    config = container.config

    # Use config values if not specified
    read_options = container.read_options
    if chunk_size is not None:
        read_options = ReadOptions(
            chunk_size=chunk_size,
            encoding=read_options.encoding,
            errors=read_options.errors,
        )
    if max_concurrency is None:
        max_concurrency = config.fan_out.max_concurrency
    if output_format is None:
        output_format = config.output.default_format
    verbose = verbose or config.output.verbose

    command = SearchFilesCommand(
        pattern=pattern,
        targets=targets,
        mode=MatchMode.GROUPS if groups else MatchMode.BOOLEAN,
        read_options=read_options,
        max_concurrency=max_concurrency,
    )

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Searching...", total=None)

        try:
            report = asyncio.run(container.search_handler.handle(command))
            progress.update(task, description="[green]Search complete!")

        except KeyboardInterrupt:
            progress.update(task, description="[yellow]Search cancelled")
            console.print(ErrorPresenter.present(KeyboardInterrupt(), verbose=verbose))
            return EXIT_ERROR

        except Exception as e:
            progress.update(task, description="[red]Search failed!")
            console.print(ErrorPresenter.present(e, verbose=verbose))
            return EXIT_ERROR

    formatter = FormatterFactory.create(
        output_format,
        use_color=config.output.color,
        verbose=verbose,
        matched_only=matched_only,
    )
    console.file.write(formatter.format_report(report))
    console.file.write("\n")

    return EXIT_MATCHED if report.matched else EXIT_NO_MATCH


def config_command(
    init: bool,
    path: Optional[str],
    show: bool,
    console: Console,
) -> int:
    """
    Execute config command.

    Without flags, lists where configuration is read from and which
    ``STREAMBYTER_*`` overrides are active.

    Args:
        init: Create default config
        path: Config file path
        show: Show the effective configuration
        console: Rich console

    Returns:
        Process exit code
    """
    console.print(Panel.fit(
        "[bold]streambyter Configuration[/bold]",
        border_style="blue"
    ))

    try:
        if init:
            config_path = ConfigLoader.create_default_config(path)
            console.print(f"\n[green]Configuration file created: {escape(str(config_path))}[/green]")
        elif show:
            console.print("\n[bold]Effective configuration:[/bold]")
            console.print(ConfigLoader.load(path).to_yaml(), markup=False, highlight=False)
        else:
            console.print(_config_sources_table(ConfigLoader.get_config_info()))
    except Exception as e:
        console.print(ErrorPresenter.present(e))
        return EXIT_ERROR

    return EXIT_OK


def _config_sources_table(config_info: Dict[str, Any]) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Source")
    table.add_column("Status")

    existing = config_info["existing_configs"]
    # Only the first existing file is read
    loaded = existing[0] if existing else None
    for default_path in config_info["default_paths"]:
        if default_path == loaded:
            status = "[green]loaded[/green]"
        elif default_path in existing:
            status = "[dim]ignored[/dim]"
        else:
            status = "[dim]not found[/dim]"
        table.add_row(escape(default_path), status)

    for env_var in config_info["env_overrides"]:
        table.add_row(env_var, "[yellow]override[/yellow]")

    return table
