"""Configuration management for albumprep."""

import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

from albumprep.config.paths import default_config_path
from albumprep.platform.logging import logger

NORMALIZER_EXECUTABLE_DEFAULT = "bs1770gain"
NORMALIZER_FLAGS_DEFAULT: tuple[str, ...] = ("--replaygain", "-irt")
DECODE_BLOCK_FRAMES_DEFAULT = 65536


class ConfigError(Exception):
    """Raised when the configuration file cannot be read or is invalid."""


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion.

    Args:
        default: Default value for the field.

    Returns:
        Field with proper metadata for path handling.
    """
    return field(default=default, metadata={"path": True})


@dataclass
class Config:
    """Application configuration."""

    # Log file path
    log_file: Path | None = _path_field()

    # External loudness normalizer
    normalizer_executable: str = NORMALIZER_EXECUTABLE_DEFAULT
    normalizer_flags: list[str] = field(default_factory=lambda: list(NORMALIZER_FLAGS_DEFAULT))

    # Frames decoded per read while metering loudness
    decode_block_frames: int = DECODE_BLOCK_FRAMES_DEFAULT

    # Singleton instance
    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects using field metadata."""

        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value).expanduser() if value.strip() else None)

    @classmethod
    def from_mapping(cls, document: dict[str, Any], *, source: Path | None = None) -> "Config":
        """Build a configuration from a parsed TOML document."""

        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in document.items():
            if key not in known:
                logger.warning("Ignoring unknown configuration key %r in %s", key, source)
                continue
            values[key] = value

        executable = values.get("normalizer_executable", NORMALIZER_EXECUTABLE_DEFAULT)
        if not isinstance(executable, str) or not executable.strip():
            raise ConfigError("normalizer_executable must be a non-empty string")

        flags = values.get("normalizer_flags", list(NORMALIZER_FLAGS_DEFAULT))
        if not isinstance(flags, list) or not all(isinstance(flag, str) for flag in flags):
            raise ConfigError("normalizer_flags must be a list of strings")

        block_frames = values.get("decode_block_frames", DECODE_BLOCK_FRAMES_DEFAULT)
        if not isinstance(block_frames, int) or isinstance(block_frames, bool) or block_frames <= 0:
            raise ConfigError("decode_block_frames must be a positive integer")

        log_file = values.get("log_file")
        if log_file is not None and not isinstance(log_file, str):
            raise ConfigError("log_file must be a string path")

        return cls(
            log_file=log_file,
            normalizer_executable=executable.strip(),
            normalizer_flags=list(flags),
            decode_block_frames=block_frames,
        )

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """Load configuration from file.

        A missing file yields the defaults. The result is cached until
        :meth:`reset` is called.

        Args:
            path: Explicit configuration file; defaults to the portable location.

        Returns:
            Config: Loaded configuration object.
        """
        config_file = path if path is not None else default_config_path()

        # If config is already loaded from the same file, return cached instance
        if cls._instance is not None and cls._loaded_from == config_file:
            return cls._instance

        if config_file.exists():
            try:
                with open(config_file, "rb") as f:
                    document = tomllib.load(f)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigError(f"Invalid TOML in configuration file: {config_file}") from exc
            except OSError as exc:
                raise ConfigError(f"Failed to read configuration file: {config_file}") from exc

            instance = cls.from_mapping(document, source=config_file)
            logger.debug("Configuration loaded from %s", config_file)
        else:
            instance = cls()
            logger.debug("No configuration file at %s; using defaults", config_file)

        cls._instance = instance
        cls._loaded_from = config_file
        return instance

    @classmethod
    def reset(cls) -> None:
        """Forget the cached configuration."""

        cls._instance = None
        cls._loaded_from = None


__all__ = [
    "Config",
    "ConfigError",
    "DECODE_BLOCK_FRAMES_DEFAULT",
    "NORMALIZER_EXECUTABLE_DEFAULT",
    "NORMALIZER_FLAGS_DEFAULT",
]
