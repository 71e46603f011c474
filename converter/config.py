# -*- coding: utf-8 -*-

import logging
import os
from dataclasses import dataclass, fields
from typing import Optional

import yaml

from .errors import ConfigError
from .json_schema import JSON_SCHEMA_VERSIONS
from .transform import MERGE_MODES

DEFAULT_CONFIG_FILE = "profile2schema.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    output_dir: Optional[str] = None
    json_schema_draft: str = "draft-07"
    merge_mode: str = "permissive"
    share_types_across_names: bool = True
    validate_output: bool = True
    write_yaml: bool = False
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.json_schema_draft not in JSON_SCHEMA_VERSIONS:
            raise ConfigError(f"json_schema_draft must be one of {', '.join(JSON_SCHEMA_VERSIONS)}")
        if self.merge_mode not in MERGE_MODES:
            raise ConfigError(f"merge_mode must be one of {', '.join(MERGE_MODES)}")
        if str(self.log_level).upper() not in LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        self.log_level = str(self.log_level).upper()
        for key in ('share_types_across_names', 'validate_output', 'write_yaml'):
            if not isinstance(getattr(self, key), bool):
                raise ConfigError(f"{key} must be true or false")

    @property
    def log_level_number(self):
        return logging.getLevelName(self.log_level)


def load_config(path=None):
    """
    Loads the YAML configuration

    Args:
        path (str): configuration file; when None, ./profile2schema.yaml is
            used if it exists

    Returns:
        Config: file values over defaults
    """
    if path is None:
        if not os.path.exists(DEFAULT_CONFIG_FILE):
            return Config()
        path = DEFAULT_CONFIG_FILE

    try:
        with open(path, 'r', encoding='utf-8') as f:
            values = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Cannot read configuration '{path}': {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in '{path}': {e}") from e

    if not isinstance(values, dict):
        raise ConfigError(f"Configuration '{path}' must be a mapping")

    known = {f.name for f in fields(Config)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    return Config(**values)
