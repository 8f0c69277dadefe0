"""JSON and YAML documents for :class:`Config`.

Parsing goes through pydantic validation, so unknown fields, unknown strategy
types and type mismatches fail with :class:`ConfigParseError` instead of
falling back to defaults. Problems reading or writing files raise
:class:`ConfigFileError`.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

import yaml
from pydantic import ValidationError

from .config.root import Config
from .exceptions import ConfigFileError, ConfigParseError
from .logger import get_logger

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

logger: BoundLogger = get_logger(__name__)

type DocumentFormat = Literal["json", "yaml"]

SUFFIX_FORMATS: dict[str, DocumentFormat] = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}


def to_document(config: Config) -> dict[str, Any]:
    """Plain, JSON-compatible representation of ``config``."""
    return config.model_dump(mode="json")


def to_json(config: Config) -> str:
    return config.model_dump_json(indent=2)


def to_yaml(config: Config) -> str:
    return yaml.safe_dump(to_document(config), sort_keys=False)


def from_document(document: Any, cls: type[Config] = Config) -> Config:
    """Validate an already decoded document.

    Raises
    ------
    ConfigParseError
        If the document does not describe a valid ``cls``.
    """
    try:
        return cls.model_validate(document)
    except ValidationError as e:
        logger.error("Invalid configuration document", model=cls.__name__, errors=e.error_count())
        raise ConfigParseError(f"Invalid {cls.__name__} document: {e}") from e


def from_json(source: str | bytes, cls: type[Config] = Config) -> Config:
    try:
        return cls.model_validate_json(source)
    except ValidationError as e:
        logger.error("Invalid JSON configuration", model=cls.__name__, errors=e.error_count())
        raise ConfigParseError(f"Invalid {cls.__name__} JSON document: {e}") from e


def from_yaml(source: str | bytes, cls: type[Config] = Config) -> Config:
    try:
        document = yaml.safe_load(source)
    except yaml.YAMLError as e:
        logger.error("Malformed YAML configuration", exc_info=e)
        raise ConfigParseError(f"Malformed YAML document: {e}") from e
    return from_document(document, cls)


def _format_for(path: Path) -> DocumentFormat:
    document_format = SUFFIX_FORMATS.get(path.suffix.lower())
    if document_format is None:
        raise ConfigFileError(f"Unsupported configuration file suffix {path.suffix!r} for {path}")
    return document_format


def load(path: str | Path, cls: type[Config] = Config) -> Config:
    """Read a configuration file, choosing JSON or YAML by suffix.

    Parameters
    ----------
    path : str | Path
        File ending in ``.json``, ``.yaml`` or ``.yml``.
    cls : type[Config]
        Model to validate into, e.g. :class:`NodeFileConfig`.

    Returns
    -------
    Config
        A validated instance of ``cls``.

    Raises
    ------
    ConfigFileError
        If the file is missing, unreadable or has an unsupported suffix.
    ConfigParseError
        If the content is not a valid document.
    """
    path = Path(path)
    document_format = _format_for(path)

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Failed to read configuration file", path=str(path), exc_info=e)
        raise ConfigFileError(f"Cannot read configuration file {path}: {e}") from e
    except UnicodeDecodeError as e:
        logger.error("Configuration file is not valid UTF-8", path=str(path), exc_info=e)
        raise ConfigParseError(f"Configuration file {path} is not valid UTF-8") from e

    config = from_json(text, cls) if document_format == "json" else from_yaml(text, cls)
    logger.info(
        "Configuration loaded",
        path=str(path),
        format=document_format,
        topology=config.servers.kind if config.servers is not None else None,
    )
    return config


def save(config: Config, path: str | Path) -> None:
    """Write ``config`` to ``path``, choosing JSON or YAML by suffix.

    Raises
    ------
    ConfigFileError
        If the file cannot be written or has an unsupported suffix.
    """
    path = Path(path)
    document_format = _format_for(path)
    text = to_json(config) if document_format == "json" else to_yaml(config)

    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        logger.error("Failed to write configuration file", path=str(path), exc_info=e)
        raise ConfigFileError(f"Cannot write configuration file {path}: {e}") from e

    logger.info("Configuration saved", path=str(path), format=document_format)
