"""
Configuration loader for CLI.

Handles loading and merging of configuration files with CLI arguments.
Precedence, lowest first: built-in defaults, configuration file, CLI flags.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

from matplotlib.colors import is_color_like

from ghg_sunburst.core.application.label_strategy import OVERRIDE_CHOICES
from ghg_sunburst.core.settings import ChartSettings
from ghg_sunburst.core.theme import available_themes

logger = logging.getLogger(__name__)

# CLI argument name -> configuration key
CLI_CONFIG_KEYS = {
    "theme": "theme",
    "share_basis": "share_basis",
    "diameter": "chart_diameter",
    "measure": "text_measurer",
}

EXTRA_CONFIG_KEYS = ("label_overrides",)

class ConfigLoader:
    """Loads and merges configuration from files and CLI arguments."""

    def load_config_file(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from JSON file.

        Args:
            config_path: Path to configuration file

        Returns:
            Dict[str, Any]: Configuration dictionary

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid JSON or not an object
        """
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file: {e}")

        if not isinstance(config, dict):
            raise ValueError("Configuration file must contain a JSON object")

        known = set(ChartSettings.__dataclass_fields__) | set(EXTRA_CONFIG_KEYS)
        for key in config:
            if key not in known:
                logger.warning("Ignoring unknown configuration key: %s", key)

        return config

    def merge_configs(self, base_config: Dict[str, Any],
                      override_config: Dict[str, Any]) -> Dict[str, Any]:
        merged = base_config.copy()
        merged.update(override_config)
        return merged

    def args_to_config(self, args: Dict[str, Any]) -> Dict[str, Any]:
        """
        Convert CLI arguments to configuration dictionary.

        Only flags that were actually given end up in the result.
        """
        config = {}
        for arg_name, config_key in CLI_CONFIG_KEYS.items():
            value = args.get(arg_name)
            if value is not None:
                config[config_key] = value
        return config

    def get_default_config(self) -> Dict[str, Any]:
        """
        Get default configuration.

        ``share_basis`` is left out so that a basis declared by the input
        document applies unless the user picks one.
        """
        config = ChartSettings().to_dict()
        config.pop("share_basis")
        config["label_overrides"] = {}
        return config

    def load_and_merge_config(self, config_path: Optional[str],
                              cli_args: Dict[str, Any]) -> Dict[str, Any]:
        """
        Load configuration file and merge with CLI arguments.

        Args:
            config_path: Path to configuration file (optional)
            cli_args: CLI arguments dictionary

        Returns:
            Dict[str, Any]: Final merged configuration

        Raises:
            ValueError: If the configuration file cannot be loaded
        """
        final_config = self.get_default_config()

        if config_path:
            try:
                file_config = self.load_config_file(config_path)
            except (OSError, ValueError) as e:
                raise ValueError(f"Failed to load config file: {e}")
            final_config = self.merge_configs(final_config, file_config)

        cli_config = self.args_to_config(cli_args)
        return self.merge_configs(final_config, cli_config)

    def validate_config(self, config: Dict[str, Any]) -> List[str]:
        """
        Validate configuration dictionary.

        Returns:
            List[str]: List of validation issues (empty if valid)
        """
        issues = []

        try:
            ChartSettings.from_dict(config)
        except (TypeError, ValueError) as e:
            issues.append(str(e))

        theme = config.get("theme")
        if theme not in available_themes():
            issues.append(f"Unsupported theme: {theme}. Supported: {', '.join(available_themes())}")

        overrides = config.get("label_overrides", {})
        if not isinstance(overrides, dict):
            issues.append("Field label_overrides must be an object")
        else:
            for node_id, choice in overrides.items():
                if choice not in OVERRIDE_CHOICES:
                    issues.append(
                        f"Invalid label override {choice!r} for {node_id}. "
                        f"Supported: {', '.join(OVERRIDE_CHOICES)}"
                    )

        sector_colors = config.get("sector_colors", {})
        if isinstance(sector_colors, dict):
            for sector_id, color in sector_colors.items():
                if not is_color_like(color):
                    issues.append(f"Invalid colour {color!r} for sector {sector_id}")

        return issues
