"""Configuration data models using Pydantic."""

import codecs
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, ConfigDict


class ReaderConfig(BaseModel):
    """Stream reading configuration."""
    chunk_size: int = Field(
        default=512,
        ge=1,
        le=16 * 1024 * 1024,
        description="Bytes requested per read when opening a path"
    )
    encoding: str = Field(
        default="utf-8",
        description="Text encoding used to decode chunks"
    )
    errors: str = Field(
        default="replace",
        description="Decoding error handler (strict, replace, ignore)"
    )

    @field_validator('encoding')
    @classmethod
    def validate_encoding(cls, v):
        """Ensure the codec exists."""
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"unknown encoding: {v}")
        return v

    @field_validator('errors')
    @classmethod
    def validate_errors(cls, v):
        """Ensure error handler is valid."""
        valid_handlers = ["strict", "replace", "ignore"]
        v = v.lower()
        if v not in valid_handlers:
            raise ValueError(f"errors must be one of {valid_handlers}")
        return v


class FanOutConfig(BaseModel):
    """Multi-target matching configuration."""
    max_concurrency: Optional[int] = Field(
        default=None,
        ge=1,
        description="Maximum concurrent matches (unbounded when unset)"
    )


class DiscoveryConfig(BaseModel):
    """Target discovery configuration."""
    default_exclusions: List[str] = Field(
        default_factory=lambda: [
            "*/.git/*",
            "*/__pycache__/*",
            "*/node_modules/*",
        ],
        description="Glob patterns excluded when expanding targets"
    )


class OutputConfig(BaseModel):
    """Output configuration."""
    default_format: str = Field(
        default="console",
        description="Default output format (console, json)"
    )
    color: bool = Field(
        default=True,
        description="Enable colored console output"
    )
    verbose: bool = Field(
        default=False,
        description="Enable verbose output"
    )

    @field_validator('default_format')
    @classmethod
    def validate_format(cls, v):
        """Ensure format is valid."""
        valid_formats = ["console", "json"]
        if v not in valid_formats:
            raise ValueError(f"format must be one of {valid_formats}")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    file: Optional[str] = Field(
        default=None,
        description="Log file path (no file logging when unset)"
    )
    console: bool = Field(
        default=True,
        description="Enable console logging"
    )

    @field_validator('level')
    @classmethod
    def validate_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}")
        return v


class StreambyterConfig(BaseModel):
    """Complete streambyter configuration."""
    model_config = ConfigDict(
        extra="forbid",  # Forbid extra fields
        validate_assignment=True  # Validate on assignment
    )

    reader: ReaderConfig = Field(default_factory=ReaderConfig)
    fan_out: FanOutConfig = Field(default_factory=FanOutConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def to_yaml(self) -> str:
        """Convert configuration to YAML string."""
        import yaml
        return yaml.dump(self.model_dump(), default_flow_style=False, sort_keys=False)
