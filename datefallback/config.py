#!/usr/bin/env python3
"""
Configuration loading for the date fallback runtime.

Implements cascading configuration:
1. Built-in defaults
2. Global config (~/.config/datefallback/config.yaml)
3. Project config (.datefallback.yaml) - committed to repo
4. Local overrides (.datefallback.local.yaml) - gitignored
5. DATEFALLBACK_DISABLE environment variable (comma-separated provider names)

Config files are YAML; files ending in .json are parsed as JSON.
"""
import copy
import json
import os
import sys
from pathlib import Path
from typing import Optional

import yaml


DISABLE_ENV_VAR = "DATEFALLBACK_DISABLE"

GLOBAL_CONFIG_FILE = Path.home() / ".config" / "datefallback" / "config.yaml"
PROJECT_CONFIG_NAME = ".datefallback.yaml"
LOCAL_CONFIG_NAME = ".datefallback.local.yaml"

DEFAULT_CONFIG = {
    "locale": "en-US",
    "timezone": None,
    "logging": {
        "level": "error",
        "destinations": ["file"],
    },
    "monitoring": {
        "enabled": True,
        "echo": False,
    },
    "probing": {
        "parallel": False,
    },
    "providers": {
        "disabled": [],
        "priorities": {},
    },
    "shim": {
        "enabled": True,
        "global_name": "Cldr",
        "operations": ["load", "get"],
    },
}


def load_yaml_or_json(path: Path) -> dict:
    """
    Load a config file.

    Args:
        path: Path to config file (.yaml/.yml or .json)

    Returns:
        Parsed config dictionary (empty dict if missing or unparseable)
    """
    if not path.exists():
        return {}

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        print(f"⚠️ Could not read {path}: {e}", file=sys.stderr)
        return {}

    try:
        if path.suffix == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        print(f"⚠️ Parse error in {path}: {e}", file=sys.stderr)
        return {}

    if data is None:
        return {}
    if not isinstance(data, dict):
        print(f"⚠️ Config {path} must be a mapping, got {type(data).__name__}", file=sys.stderr)
        return {}
    return data


def deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge override into base dictionary.

    Recursively merges nested dictionaries. Non-dict values are replaced.

    Args:
        base: Base dictionary (modified in place)
        override: Dictionary with values to merge

    Returns:
        Merged dictionary (same as base)
    """
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def parse_name_list(raw: Optional[str]) -> list[str]:
    """Split "a, b,,c" into ["a", "b", "c"]."""
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


class FallbackConfig:
    """
    Configuration manager for the date fallback runtime.

    Loads and merges configuration from defaults, global, project and local
    sources, then validates it section by section. Invalid sections fall
    back to their defaults and the problem is recorded in
    ``validation_errors`` (fail-safe, never raises).
    """

    SECTION_SCHEMA = {
        'locale': {'type': str},
        'timezone': {'type': (str, type(None))},
        'logging': {'type': dict},
        'monitoring': {'type': dict},
        'probing': {'type': dict},
        'providers': {'type': dict},
        'shim': {'type': dict},
    }

    LOG_LEVELS = {'debug', 'info', 'warning', 'error'}

    def __init__(self, project_dir: Optional[str] = None,
                 global_file: Optional[Path] = None,
                 environ: Optional[dict] = None):
        """
        Initialize config.

        Args:
            project_dir: Directory holding project/local config (default: cwd)
            global_file: Override for the global config path
            environ: Environment mapping (default: os.environ)
        """
        self.project_dir = project_dir or os.getcwd()
        self.global_file = Path(global_file) if global_file else GLOBAL_CONFIG_FILE
        self.environ = os.environ if environ is None else environ
        self.validation_errors: list[str] = []
        self.sources: list[str] = []
        self._config = self._validate(self._load_cascade())

    @classmethod
    def from_dict(cls, overrides: dict, environ: Optional[dict] = None) -> "FallbackConfig":
        """Build a config from defaults plus overrides, without reading files."""
        instance = cls.__new__(cls)
        instance.project_dir = os.getcwd()
        instance.global_file = None
        instance.environ = {} if environ is None else environ
        instance.validation_errors = []
        instance.sources = ["<dict>"]
        merged = deep_merge(copy.deepcopy(DEFAULT_CONFIG), copy.deepcopy(overrides or {}))
        instance._config = instance._validate(instance._apply_environment(merged))
        return instance

    def _load_cascade(self) -> dict:
        config = copy.deepcopy(DEFAULT_CONFIG)

        # 1. Global defaults
        if self.global_file.exists():
            global_config = load_yaml_or_json(self.global_file)
            if global_config:
                deep_merge(config, global_config)
                self.sources.append(str(self.global_file))

        # 2. Project config (versioned)
        project_file = Path(self.project_dir) / PROJECT_CONFIG_NAME
        if project_file.exists():
            project_config = load_yaml_or_json(project_file)
            if project_config:
                if project_config.get('inherit', True):
                    deep_merge(config, project_config)
                else:
                    # No inheritance: project replaces global, defaults still fill gaps
                    config = deep_merge(copy.deepcopy(DEFAULT_CONFIG), project_config)
                self.sources.append(str(project_file))

        # 3. Local overrides (gitignored)
        local_file = Path(self.project_dir) / LOCAL_CONFIG_NAME
        if local_file.exists():
            local_config = load_yaml_or_json(local_file)
            if local_config:
                deep_merge(config, local_config)
                self.sources.append(str(local_file))

        config.pop('inherit', None)
        return self._apply_environment(config)

    def _apply_environment(self, config: dict) -> dict:
        disabled_from_env = parse_name_list(self.environ.get(DISABLE_ENV_VAR))
        if disabled_from_env:
            providers = config.setdefault('providers', {})
            if not isinstance(providers, dict):
                return config
            existing = providers.get('disabled') or []
            if isinstance(existing, list):
                providers['disabled'] = existing + [n for n in disabled_from_env if n not in existing]
        return config

    def _validate(self, config: dict) -> dict:
        for section, rules in self.SECTION_SCHEMA.items():
            if section not in config:
                config[section] = copy.deepcopy(DEFAULT_CONFIG[section])
                continue
            try:
                if not isinstance(config[section], rules['type']):
                    raise ValueError(f"Config field '{section}' has invalid type "
                                     f"{type(config[section]).__name__}")
                validator = getattr(self, f"_validate_{section}", None)
                if validator:
                    validator(config[section])
            except ValueError as e:
                print(f"⚠️ Config validation error: {e}", file=sys.stderr)
                self.validation_errors.append(str(e))
                config[section] = copy.deepcopy(DEFAULT_CONFIG[section])
        return config

    def _validate_logging(self, section: dict) -> None:
        level = section.get('level', 'error')
        if not isinstance(level, str) or level.lower() not in self.LOG_LEVELS:
            allowed = ', '.join(sorted(self.LOG_LEVELS))
            raise ValueError(f"Config field 'logging.level' must be one of: {allowed}")
        destinations = section.get('destinations', [])
        if not isinstance(destinations, (list, str)):
            raise ValueError("Config field 'logging.destinations' must be a list")
        max_bytes = section.get('max_bytes', 0)
        if isinstance(max_bytes, bool) or not isinstance(max_bytes, int) or max_bytes < 0:
            raise ValueError("Config field 'logging.max_bytes' must be a non-negative integer")

    def _validate_providers(self, section: dict) -> None:
        disabled = section.get('disabled', [])
        if not isinstance(disabled, list) or not all(isinstance(n, str) for n in disabled):
            raise ValueError("Config field 'providers.disabled' must be a list of names")
        priorities = section.get('priorities', {})
        if not isinstance(priorities, dict):
            raise ValueError("Config field 'providers.priorities' must be a mapping")
        for name, value in priorities.items():
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Priority for provider '{name}' must be an integer")

    def _validate_shim(self, section: dict) -> None:
        name = section.get('global_name', 'Cldr')
        if not isinstance(name, str) or not name:
            raise ValueError("Config field 'shim.global_name' must be a non-empty string")
        operations = section.get('operations', [])
        if not isinstance(operations, list) or not all(isinstance(o, str) for o in operations):
            raise ValueError("Config field 'shim.operations' must be a list of names")

    # Accessors

    def get_raw_config(self) -> dict:
        return copy.deepcopy(self._config)

    def get_locale(self) -> str:
        return self._config['locale']

    def get_timezone(self) -> Optional[str]:
        return self._config['timezone']

    def get_logging_config(self) -> dict:
        return dict(self._config['logging'])

    def is_monitoring_enabled(self) -> bool:
        return bool(self._config['monitoring'].get('enabled', True))

    def echo_events(self) -> bool:
        return bool(self._config['monitoring'].get('echo', False))

    def is_parallel_probing(self) -> bool:
        return bool(self._config['probing'].get('parallel', False))

    def get_disabled_providers(self) -> list[str]:
        return list(self._config['providers'].get('disabled', []))

    def get_priorities(self) -> dict[str, int]:
        return dict(self._config['providers'].get('priorities', {}))

    def is_shim_enabled(self) -> bool:
        return bool(self._config['shim'].get('enabled', True))

    def get_shim_global_name(self) -> str:
        return self._config['shim'].get('global_name', 'Cldr')

    def get_shim_operations(self) -> list[str]:
        return list(self._config['shim'].get('operations', ['load', 'get']))

    def get_validation_errors(self) -> list[str]:
        """Return any validation errors encountered while loading config."""
        return list(self.validation_errors)
