"""
Argument parser for CLI.

Handles parsing of command line arguments for all CLI commands.
"""

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from ghg_sunburst import __version__
from ghg_sunburst.core.domain.models import ShareBasis
from ghg_sunburst.core.theme import available_themes

OUTPUT_FORMATS = ("svg", "png", "pdf")
TEXT_MEASURERS = ("heuristic", "font")

class ArgumentParser:
    """Parses command line arguments for CLI commands."""

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="ghg-sunburst",
            description="ghg-sunburst - Render three-ring sunburst charts with automatic labels",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Render the bundled emissions dataset
  ghg-sunburst render --sample -o emissions.svg

  # Render your own hierarchy as PNG with the Our World in Data theme
  ghg-sunburst render -i hierarchy.json -o chart.png --theme our-world-in-data

  # Force labels for some wedges
  ghg-sunburst render -i hierarchy.json -o chart.svg --overrides overrides.json

  # Show how every wedge would be labelled
  ghg-sunburst info --sample
            """
        )

        self.parser.add_argument(
            "--debug", "-d",
            action="store_true",
            help="Enable debug logging"
        )
        self.parser.add_argument(
            "--log-file",
            help="Also write log records to this file"
        )
        self.parser.add_argument(
            "--version", "-v",
            action="version",
            version=f"ghg-sunburst {__version__}"
        )

        subparsers = self.parser.add_subparsers(
            dest="command",
            help="Available commands",
            required=True
        )

        self._setup_render_parser(subparsers)
        self._setup_info_parser(subparsers)

    def _setup_render_parser(self, subparsers):
        """Setup render command parser."""
        render_parser = subparsers.add_parser(
            "render",
            help="Render a hierarchy to SVG, PNG or PDF"
        )

        self._add_input_options(render_parser)
        render_parser.add_argument(
            "-o", "--output",
            required=True,
            help="Output file path"
        )
        render_parser.add_argument(
            "--format", "-f",
            choices=OUTPUT_FORMATS,
            help="Output format (default: taken from the output file extension)"
        )
        render_parser.add_argument(
            "--overwrite",
            action="store_true",
            help="Overwrite output file if it exists"
        )

        self._add_config_options(render_parser)

    def _setup_info_parser(self, subparsers):
        """Setup info command parser."""
        info_parser = subparsers.add_parser(
            "info",
            help="Show the layout and label decision of every wedge"
        )

        self._add_input_options(info_parser)
        self._add_config_options(info_parser)

    def _add_input_options(self, parser):
        input_group = parser.add_mutually_exclusive_group(required=True)
        input_group.add_argument(
            "-i", "--input",
            help="Input JSON hierarchy file path"
        )
        input_group.add_argument(
            "--sample",
            action="store_true",
            help="Use the bundled global greenhouse gas emissions dataset"
        )

    def _add_config_options(self, parser):
        """Add configuration options to parser."""
        config_group = parser.add_argument_group("Configuration Options")

        config_group.add_argument(
            "--config", "-c",
            help="Path to configuration file"
        )
        config_group.add_argument(
            "--theme",
            choices=available_themes(),
            help="Colour theme"
        )
        config_group.add_argument(
            "--share-basis",
            choices=[basis.value for basis in ShareBasis],
            help="What child shares are percentages of (default: parent, "
                 "or what the input document declares)"
        )
        config_group.add_argument(
            "--overrides",
            help="JSON file mapping node ids to 'curved' or 'radial'"
        )
        config_group.add_argument(
            "--diameter",
            type=float,
            help="Chart diameter in pixels (default: 800)"
        )
        config_group.add_argument(
            "--measure",
            choices=TEXT_MEASURERS,
            help="How label text width is measured"
        )

    def parse_args(self, args: Optional[List[str]] = None) -> argparse.Namespace:
        """
        Parse command line arguments.

        Args:
            args: Arguments to parse (default: sys.argv[1:])

        Returns:
            argparse.Namespace: Parsed arguments
        """
        if args is None:
            args = sys.argv[1:]

        return self.parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> List[str]:
        """
        Validate parsed arguments.

        Args:
            args: Parsed arguments

        Returns:
            List[str]: List of validation issues
        """
        issues = []

        if getattr(args, "input", None) and not os.path.exists(args.input):
            issues.append(f"Input file does not exist: {args.input}")

        if getattr(args, "config", None) and not os.path.exists(args.config):
            issues.append(f"Configuration file does not exist: {args.config}")

        if getattr(args, "overrides", None) and not os.path.exists(args.overrides):
            issues.append(f"Overrides file does not exist: {args.overrides}")

        diameter = getattr(args, "diameter", None)
        if diameter is not None and diameter <= 0:
            issues.append(f"Diameter must be positive: {diameter:g}")

        if args.command == "render":
            if os.path.exists(args.output) and not args.overwrite:
                issues.append(f"Output file already exists: {args.output}. Use --overwrite to overwrite")
            if resolve_output_format(args.output, args.format) is None:
                issues.append(
                    f"Cannot infer output format from {args.output}. "
                    f"Use --format ({', '.join(OUTPUT_FORMATS)})"
                )

        return issues

def resolve_output_format(output: str, fmt: Optional[str] = None) -> Optional[str]:
    """Explicit format wins; otherwise the output file's extension decides."""
    if fmt:
        return fmt
    suffix = Path(output).suffix.lower().lstrip(".")
    return suffix if suffix in OUTPUT_FORMATS else None
