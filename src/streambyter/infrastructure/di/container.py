"""Dependency injection container for streambyter."""

from dataclasses import dataclass
from typing import Optional

from ..config.config_loader import ConfigLoader
from ..config.config_models import StreambyterConfig
from ..discovery import PathFinder
from ..logging import StreambyterLogger
from ...domain.models import ReadOptions
from ...application.commands import SearchFilesHandler


@dataclass
class DIContainer:
    """
    Dependency injection container for streambyter.

    Assembles the CLI-facing components from configuration. The library
    operations in ``streambyter.api`` do not need it.
    """

    config: StreambyterConfig
    logger: StreambyterLogger
    path_finder: PathFinder
    read_options: ReadOptions
    search_handler: SearchFilesHandler

    @classmethod
    def create(cls, config_path: Optional[str] = None) -> "DIContainer":
        """
        Create and wire all dependencies.

        Args:
            config_path: Optional path to configuration file

        Returns:
            DIContainer with all dependencies wired
        """
        config = ConfigLoader.load(config_path)
        return cls.from_config(config)

    @classmethod
    def from_config(cls, config: StreambyterConfig) -> "DIContainer":
        logger = StreambyterLogger.get_instance()
        logger.configure(config.logging)

        path_finder = PathFinder(config.discovery.default_exclusions)
        read_options = ReadOptions.from_config(config.reader)
        search_handler = SearchFilesHandler(path_finder)

        return cls(
            config=config,
            logger=logger,
            path_finder=path_finder,
            read_options=read_options,
            search_handler=search_handler,
        )

    def __repr__(self) -> str:
        """String representation."""
        return f"<DIContainer: chunk_size={self.read_options.chunk_size}>"
