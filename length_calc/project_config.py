"""
JSON-based project configuration for length_calc.

Configuration is read from a .lengthcalc.json file, searched in:
1. Explicit config file path
2. The model document's directory
3. The current working directory
4. The user's home directory

Example .lengthcalc.json:
{
    "units": {
        "display_unit": "millimeters"
    },
    "export": {
        "sheet_title": "Lengths",
        "default_filename": "length_report.xlsx",
        "autofit_columns": true,
        "header_fill": "D3D3D3"
    },
    "logging": {
        "level": "INFO",
        "json_file": null
    }
}
"""

import json
import logging
from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from length_calc.logging_config import setup_logging
from length_calc.units import DisplayUnit

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".lengthcalc.json"


@dataclass
class UnitsConfig:
    """Project length display unit."""
    display_unit: str = DisplayUnit.FEET.value

    def get_length_unit(self) -> DisplayUnit:
        """Configured unit as a DisplayUnit.

        Raises:
            ValueError: If `display_unit` is not a known unit identifier
        """
        if not isinstance(self.display_unit, str):
            raise ValueError(f"display_unit must be a string, got {self.display_unit!r}")
        return DisplayUnit(self.display_unit.strip().lower())


@dataclass
class ExportConfig:
    """Spreadsheet export settings."""
    sheet_title: str = "Lengths"
    default_filename: str = "length_report.xlsx"
    autofit_columns: bool = True
    header_fill: str = "D3D3D3"  # LightGray


@dataclass
class LoggingConfig:
    level: str = "INFO"
    json_file: Optional[str] = None


@dataclass
class ProjectConfig:
    """Complete project configuration."""
    units: UnitsConfig = field(default_factory=UnitsConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def save(self, path: Union[str, Path]) -> None:
        """Save configuration to JSON file."""
        path = Path(path)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(self.to_json())
        logger.info("Configuration saved to %s", path)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProjectConfig':
        """Create configuration from dictionary.

        Unknown sections and keys are ignored, so a partial file only
        overrides what it names.

        Raises:
            ValueError: If `data` is not a JSON object
        """
        if not isinstance(data, dict):
            raise ValueError(f"Configuration must be a JSON object, got {type(data).__name__}")
        config = cls()

        for section in fields(config):
            values = data.get(section.name)
            if not isinstance(values, dict):
                continue
            target = getattr(config, section.name)
            for key, value in values.items():
                if hasattr(target, key):
                    setattr(target, key, value)

        return config

    @classmethod
    def from_json(cls, json_str: str) -> 'ProjectConfig':
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'ProjectConfig':
        """Load configuration from JSON file.

        Args:
            path: Input file path

        Returns:
            ProjectConfig instance

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If file is not valid UTF-8 JSON or not a JSON object
        """
        path = Path(path)
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        config = cls.from_dict(data)
        logger.info("Configuration loaded from %s", path)
        return config


def find_config_file(
    document_path: Optional[Union[str, Path]] = None,
    explicit_config: Optional[Union[str, Path]] = None,
) -> Optional[Path]:
    """Find configuration file using search hierarchy.

    Args:
        document_path: Path to the model document being measured
        explicit_config: Explicitly specified config path

    Returns:
        Path to config file if found, None otherwise
    """
    if explicit_config:
        explicit = Path(explicit_config)
        if explicit.exists():
            return explicit
        logger.warning("Explicit config not found: %s", explicit)

    if document_path:
        doc_config = Path(document_path).parent / CONFIG_FILENAME
        if doc_config.exists():
            return doc_config

    cwd_config = Path.cwd() / CONFIG_FILENAME
    if cwd_config.exists():
        return cwd_config

    home_config = Path.home() / CONFIG_FILENAME
    if home_config.exists():
        return home_config

    return None


def load_config(
    document_path: Optional[Union[str, Path]] = None,
    explicit_config: Optional[Union[str, Path]] = None,
) -> ProjectConfig:
    """Load configuration, falling back to defaults if none is found or readable."""
    config_path = find_config_file(document_path, explicit_config)

    if config_path:
        try:
            return ProjectConfig.load(config_path)
        except (ValueError, OSError) as e:
            logger.error("Failed to load config %s: %s", config_path, e)

    return ProjectConfig()


def create_sample_config(path: Union[str, Path] = CONFIG_FILENAME) -> Path:
    """Write a sample configuration file with comments.

    Args:
        path: Output file path (default: .lengthcalc.json)

    Returns:
        Path of the written file
    """
    sample = {
        "_comment": "Length calculator configuration",
        "_version": "1.0",
        "units": {
            "_comment": "millimeters, centimeters, meters, feet or inches",
            "display_unit": DisplayUnit.FEET.value,
        },
        "export": {
            "_comment": "Spreadsheet export settings",
            "sheet_title": "Lengths",
            "default_filename": "length_report.xlsx",
            "autofit_columns": True,
            "header_fill": "D3D3D3",
        },
        "logging": {
            "level": "INFO",
            "json_file": None,
        },
    }

    path = Path(path)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(sample, f, indent=2, ensure_ascii=False)

    logger.info("Sample configuration created: %s", path)
    return path


def apply_logging_config(config: ProjectConfig, verbose: bool = False) -> logging.Logger:
    """Set up package logging from the ``logging`` section.

    Args:
        config: Loaded project configuration
        verbose: Force DEBUG level regardless of the configured level

    Returns:
        The configured package logger
    """
    level = "DEBUG" if verbose else config.logging.level
    return setup_logging(level=level, json_file=config.logging.json_file)
