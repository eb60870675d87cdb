from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import yaml

from .models import DEFAULT_LOGGING_TYPE, DEFAULT_NAMESPACE_NAME
from .writer import DEFAULT_OUTPUT_FILES


class ConfigHelper:
    """
    A helper to find, load, and validate the explorer configuration file.

    It starts from a given path and traverses up the directory tree until it finds
    the configuration file, then loads it and validates the values it knows about.
    The connection string is never read from this file.
    """
    CONFIG_FILENAME = "servicebus_explorer.yaml"

    def __init__(self, start_path: str | Path | None = None, config_file_name: str | None = None):
        """
        Initializes the helper and triggers the discovery and validation process.

        Args:
            start_path: The path to start searching from. Defaults to the current working directory.
            config_file_name: The name of the config file to find. Defaults to "servicebus_explorer.yaml".

        Raises:
            FileNotFoundError: If the config file or the configured output directory is not found.
            ValueError: If the configuration file is malformed.
        """
        if start_path is None:
            start_path = Path.cwd()
        self.start_path = Path(start_path).resolve()

        if config_file_name is None:
            config_file_name = self.CONFIG_FILENAME
        self.config_filename = config_file_name

        self.project_root: Path | None = None
        self.config_path: Path | None = None
        self.config: Dict[str, Any] = {}
        self.output_dir: Path | None = None

        self._find_and_load()
        self._validate()

        print(f"[CONFIG] ✅ Configuration loaded successfully from: {self.config_path}")

    def _find_and_load(self):
        """Traverse up to find and load the configuration file."""
        current_dir = self.start_path.parent if self.start_path.is_file() else self.start_path

        while True:
            config_file = current_dir / self.config_filename
            if config_file.is_file():
                self.project_root = current_dir
                self.config_path = config_file
                break
            if current_dir == current_dir.parent:  # filesystem root
                break
            current_dir = current_dir.parent

        if not self.project_root or not self.config_path:
            raise FileNotFoundError(
                f"Could not find '{self.config_filename}' in any parent directory of {self.start_path}."
            )

        try:
            with open(self.config_path, 'r') as f:
                self.config = yaml.safe_load(f)
            if self.config is None:
                self.config = {}
            if not isinstance(self.config, dict):
                raise ValueError("Config file is not a valid dictionary.")
        except (yaml.YAMLError, ValueError) as e:
            raise ValueError(f"Error parsing '{self.config_path}': {e}")

    def _validate(self):
        """Validate the values present in the config."""
        for key in ("namespace_name", "logging_type"):
            value = self.config.get(key)
            if value is not None and (not isinstance(value, str) or not value.strip()):
                raise ValueError(f"'{key}' must be a non-empty string.")

        output_files = self.config.get("output_files")
        if output_files is not None:
            if (not isinstance(output_files, list) or not output_files
                    or not all(isinstance(name, str) and name.strip() for name in output_files)):
                raise ValueError("'output_files' must be a non-empty list of file names.")

        indent = self.config.get("indent")
        if indent is not None and (isinstance(indent, bool) or not isinstance(indent, int) or indent < 0):
            raise ValueError("'indent' must be a non-negative integer.")

        output_dir_str = self.config.get("output_dir")
        if output_dir_str:
            absolute_path = (self.project_root / output_dir_str).resolve()
            if not absolute_path.is_dir():
                raise FileNotFoundError(f"The directory for 'output_dir' does not exist: {absolute_path}")
            self.output_dir = absolute_path

    def get_namespace_name(self) -> str:
        """
        Returns the label given to the exported namespace.
        """
        return self.config.get("namespace_name", DEFAULT_NAMESPACE_NAME)

    def get_output_dir(self) -> Path | None:
        """
        Returns the validated, absolute output directory, or None to use the working directory.
        """
        return self.output_dir

    def get_output_files(self) -> List[str]:
        return list(self.config.get("output_files", DEFAULT_OUTPUT_FILES))

    def get_logging_type(self) -> str:
        return self.config.get("logging_type", DEFAULT_LOGGING_TYPE)

    def get_indent(self) -> int:
        return self.config.get("indent", 2)
