"""
Configuration for fastaseek front-ends.

Settings are plain dataclass fields that can be overridden from a YAML
file, e.g.::

    index_suffix: .fai
    auto_index: true
    write_index: false
    line_width: 80
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

import yaml

from fastaseek.core.result import Result, Ok, Err

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FastaSeekConfig:
    """
    Attributes:
        index_suffix: Suffix appended to a FASTA path to locate its index
        auto_index: Build an index when none exists next to the FASTA file
        write_index: Persist automatically built indexes
        line_width: Residues per line when writing FASTA output (0 = no wrapping)
    """
    index_suffix: str = ".fai"
    auto_index: bool = True
    write_index: bool = True
    line_width: int = 60


def default_index_path(data_path: Path | str, suffix: str = ".fai") -> Path:
    """Index path next to the FASTA file: ``genome.fa`` -> ``genome.fa.fai``."""
    data_path = Path(data_path)
    return data_path.with_name(data_path.name + suffix)


def config_from_dict(values: dict[str, Any]) -> Result[FastaSeekConfig, str]:
    """Apply overrides from a mapping to the default configuration."""
    known = {f.name for f in fields(FastaSeekConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        return Err(f"Unknown configuration keys: {', '.join(unknown)}")

    config = FastaSeekConfig()
    for key, value in values.items():
        default = getattr(config, key)
        if isinstance(default, bool) != isinstance(value, bool) or not isinstance(value, type(default)):
            return Err(f"Invalid value for '{key}': {value!r}")
    if values.get("line_width", 0) < 0:
        return Err(f"line_width must be >= 0, got {values['line_width']}")
    return Ok(replace(config, **values))


def load_config(config_path: Optional[Path | str]) -> Result[FastaSeekConfig, str]:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to YAML config, or None for defaults

    Returns:
        Result containing the merged configuration
    """
    if config_path is None:
        return Ok(FastaSeekConfig())

    try:
        with open(config_path) as f:
            values = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        return Err(f"Failed to load config: {e}")

    if not isinstance(values, dict):
        return Err(f"Config must be a mapping, got {type(values).__name__}")

    logger.debug(f"Loaded config overrides from {config_path}: {values}")
    return config_from_dict(values)
