"""
Metadata system - Layered entity/select definitions with typed settings.

Metadata is a nested mapping addressed by key paths, e.g.::

    entityDefs:
      Account:
        fields:
          name: {type: varchar}
          status: {type: enum, options: [New, Active, Closed]}
        links:
          contacts: {type: hasMany, entity: Contact, orderBy: name, order: desc}
    selectDefs:
      Account:
        orderItemConverterClassNameMap:
          status: myapp.order:StatusConverter
    relata:
      max_text_attribute_length: 5000
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import MISSING, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union, get_args, get_origin, get_type_hints

from .faults import ConfigInvalidFault, MetadataInvalidFault

logger = logging.getLogger("relata.metadata")

__all__ = ["Metadata", "MetadataLoader", "Settings", "DEFAULT_METADATA"]


PathLike = Union[str, Sequence[str]]


# Built-in layer, lowest precedence.
DEFAULT_METADATA: Dict[str, Any] = {
    "app": {
        "select": {
            "orderItemConverterClassNameMap": {
                "enum": "relata.order:EnumItemConverter",
            },
        },
    },
}


@dataclass
class Settings:
    """Library settings read from the ``relata`` metadata section."""

    max_text_attribute_length: Optional[int] = None
    default_order: str = "ASC"


class Metadata:
    """
    Read-only view over nested metadata.

    ``get`` accepts either a dot-separated path or a sequence of keys; use
    the sequence form when a key itself contains dots.
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = data or {}

    def get(self, path: PathLike, default: Any = None) -> Any:
        """Get value by path, or ``default`` when any segment is missing."""
        parts = path.split(".") if isinstance(path, str) else list(path)
        current: Any = self._data

        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default

        return current

    def has(self, path: PathLike) -> bool:
        sentinel = object()
        return self.get(path, sentinel) is not sentinel

    def get_settings(self) -> Settings:
        """Instantiate and validate the ``relata`` settings section."""
        data = self.get("relata", {}) or {}
        if not isinstance(data, dict):
            raise ConfigInvalidFault("relata", "settings section must be a mapping")

        hints = get_type_hints(Settings)
        kwargs = {}
        for field_info in fields(Settings):
            name = field_info.name
            if name in data:
                value = data[name]
                if not _check_type(value, hints[name]):
                    raise ConfigInvalidFault(
                        f"relata.{name}",
                        f"expected {hints[name]}, got {type(value).__name__}",
                    )
                kwargs[name] = value
            elif field_info.default is not MISSING:
                kwargs[name] = field_info.default
        return Settings(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return self._data

    def __contains__(self, key: str) -> bool:
        return key in self._data


def _check_type(value: Any, expected_type: Any) -> bool:
    """Basic type checking."""
    import types
    origin = get_origin(expected_type)
    if origin is types.UnionType or origin is Union:
        if value is None:
            return True
        args = [a for a in get_args(expected_type) if a is not type(None)]
        return any(_check_type(value, a) for a in args)

    if origin:
        return isinstance(value, origin)

    if expected_type is int and isinstance(value, bool):
        return False

    try:
        return isinstance(value, expected_type)
    except TypeError:
        return True


class MetadataLoader:
    """
    Loads and merges metadata from multiple sources with precedence:
    overrides > environment variables > .env file > metadata files > defaults
    """

    def __init__(self, env_prefix: str = "RELATA_"):
        self.env_prefix = env_prefix
        self.data: Dict[str, Any] = {}
        self._merge_dict(self.data, json.loads(json.dumps(DEFAULT_METADATA)))

    @classmethod
    def load(
        cls,
        paths: Optional[list[str]] = None,
        env_prefix: str = "RELATA_",
        env_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> Metadata:
        """
        Load metadata from multiple sources with proper merge strategy.

        Merge order (later overrides earlier):
        1. Built-in defaults
        2. Metadata files (JSON or YAML, glob patterns supported)
        3. .env file
        4. Environment variables (RELATA_* prefix, into the relata section)
        5. Manual overrides

        Args:
            paths: List of metadata file paths or glob patterns
            env_prefix: Prefix for environment variables
            env_file: Path to .env file
            overrides: Manual overrides (highest precedence)

        Returns:
            Merged Metadata
        """
        loader = cls(env_prefix=env_prefix)

        for pattern in paths or []:
            loader._load_from_files(pattern)

        if env_file:
            loader._load_env_file(env_file)

        loader._load_from_env()

        if overrides:
            loader._merge_dict(loader.data, overrides)

        return Metadata(loader.data)

    def _load_from_files(self, pattern: str):
        """Load metadata from JSON or YAML files."""
        from glob import glob

        matches = sorted(glob(pattern))
        if not matches:
            logger.debug("No metadata files match %s", pattern)

        for path_str in matches:
            path = Path(path_str)
            if path.suffix == ".json":
                self._load_json_file(path)
            elif path.suffix in (".yaml", ".yml"):
                self._load_yaml_file(path)
            else:
                logger.debug("Skipping metadata file with unknown suffix: %s", path)

    def _load_json_file(self, path: Path):
        """Load metadata from JSON file."""
        with open(path) as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise MetadataInvalidFault(str(path), f"invalid JSON: {e}") from e
        self._merge_file_data(path, data)

    def _load_yaml_file(self, path: Path):
        """Load metadata from YAML file."""
        import yaml
        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise MetadataInvalidFault(str(path), f"invalid YAML: {e}") from e
        self._merge_file_data(path, data)

    def _merge_file_data(self, path: Path, data: Any):
        if data is None:
            return
        if not isinstance(data, dict):
            raise MetadataInvalidFault(str(path), "top level must be a mapping")
        logger.debug("Loaded metadata layer from %s", path)
        self._merge_dict(self.data, data)

    def _load_env_file(self, path: str):
        """Load metadata values from a .env file."""
        from dotenv import dotenv_values

        env_path = Path(path)
        if not env_path.exists():
            return

        for key, value in dotenv_values(env_path).items():
            if value is not None and key.startswith(self.env_prefix):
                self._set_nested(key, value)

    def _load_from_env(self):
        """Load metadata values from environment variables."""
        for key, value in os.environ.items():
            if key.startswith(self.env_prefix):
                self._set_nested(key, value)

    def _set_nested(self, key: str, value: str):
        """Convert RELATA_MAX_TEXT_ATTRIBUTE_LENGTH to relata.max_text_attribute_length."""
        key = key[len(self.env_prefix):]

        # Double underscore separates nesting levels
        parts = key.lower().split("__")

        if not isinstance(self.data.get("relata"), dict):
            self.data["relata"] = {}
        current = self.data["relata"]
        for part in parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]

        current[parts[-1]] = self._parse_value(value)

    def _parse_value(self, value: str) -> Any:
        """Parse string value to appropriate type."""
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        if value.startswith(("{", "[")):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass

        return value

    def _merge_dict(self, target: dict, source: dict):
        """Deep merge source into target."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._merge_dict(target[key], value)
            else:
                target[key] = value
