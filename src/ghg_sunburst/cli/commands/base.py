"""
Shared loading steps for chart commands.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ghg_sunburst.cli.config_loader import ConfigLoader
from ghg_sunburst.cli.output_formatter import OutputFormatter
from ghg_sunburst.core.application.chart_service import ChartService
from ghg_sunburst.core.application.hierarchy_service import (
    Hierarchy,
    HierarchyLoadError,
    HierarchyService,
)
from ghg_sunburst.core.dependency_injection import setup_container
from ghg_sunburst.core.settings import ChartSettings
from ghg_sunburst.core.view_models import SunburstScene

logger = logging.getLogger(__name__)

@dataclass
class ChartInputs:
    hierarchy: Hierarchy
    settings: ChartSettings
    overrides: Dict[str, str]

class ChartCommand:
    """Base for commands that lay out a chart."""

    def __init__(self):
        self.formatter = OutputFormatter()
        self.config_loader = ConfigLoader()
        self.container = setup_container()
        self.hierarchy_service = self.container.get(HierarchyService)
        self.chart_service = self.container.get(ChartService)

    def load_inputs(self, args) -> Optional[ChartInputs]:
        """
        Loads configuration, hierarchy and overrides.

        Errors are printed; None means the command should exit with 1.
        """
        try:
            config = self._load_configuration(args)
        except ValueError as e:
            self.formatter.print_error(str(e))
            return None

        issues = self.config_loader.validate_config(config)
        if issues:
            self.formatter.print_issues("Configuration validation failed:", issues)
            return None

        try:
            if args.sample:
                hierarchy = self.hierarchy_service.load_sample()
            else:
                hierarchy = self.hierarchy_service.load_from_file(args.input)

            overrides = dict(config.get("label_overrides") or {})
            if args.overrides:
                overrides.update(self.hierarchy_service.load_overrides(args.overrides))
        except HierarchyLoadError as e:
            self.formatter.print_error(f"Failed to load hierarchy: {e}")
            return None

        if not hierarchy.nodes:
            self.formatter.print_warning("Hierarchy is empty, the chart will have no wedges")

        if "share_basis" not in config and hierarchy.share_basis is not None:
            config["share_basis"] = hierarchy.share_basis.value

        settings = ChartSettings.from_dict(config)
        logger.debug("Share basis: %s", settings.share_basis.value)
        return ChartInputs(hierarchy=hierarchy, settings=settings, overrides=overrides)

    def build_scene(self, inputs: ChartInputs) -> SunburstScene:
        scene = self.chart_service.calculate_sunburst_data(
            inputs.hierarchy.nodes,
            settings=inputs.settings,
            label_overrides=inputs.overrides,
        )
        for warning in scene.warnings:
            self.formatter.print_warning(f"Warning: {warning.message}")
        return scene

    def _load_configuration(self, args) -> Dict[str, Any]:
        args_dict = vars(args)
        config = self.config_loader.load_and_merge_config(args_dict.get("config"), args_dict)

        if args.debug:
            self.formatter.print_info("Configuration loaded:")
            for key, value in config.items():
                self.formatter.print_info(f"  {key}: {value}")

        return config
