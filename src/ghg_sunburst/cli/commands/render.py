"""
Render command for CLI.

Lays out a hierarchy and paints it to SVG, PNG or PDF.
"""

import os

from ghg_sunburst.cli.argument_parser import resolve_output_format
from ghg_sunburst.cli.commands.base import ChartCommand
from ghg_sunburst.render.matplotlib_renderer import ChartRenderingService
from ghg_sunburst.render.svg_renderer import SvgRenderingService

class RenderCommand(ChartCommand):
    """Command to render a sunburst chart to a file."""

    def __init__(self):
        super().__init__()
        self.svg_renderer = self.container.get(SvgRenderingService)
        self.matplotlib_renderer = self.container.get(ChartRenderingService)

    def execute(self, args) -> int:
        """
        Execute render command.

        Args:
            args: Parsed command line arguments

        Returns:
            int: Exit code (0 for success, 1 for error)
        """
        output_file = args.output
        fmt = resolve_output_format(output_file, args.format)

        source = "bundled sample" if args.sample else args.input
        self.formatter.print_info(f"Rendering {source} to {output_file}")

        inputs = self.load_inputs(args)
        if inputs is None:
            return 1

        scene = self.build_scene(inputs)

        try:
            if fmt == "svg":
                self.svg_renderer.save(scene, output_file)
            else:
                self.matplotlib_renderer.save(scene, output_file, fmt=fmt)
        except OSError as e:
            self.formatter.print_error(f"Failed to save output file: {e}")
            return 1

        stats = scene.get_statistics()
        self.formatter.print_success("Chart rendered successfully!")
        self.formatter.print_info(f"Output file: {output_file}")
        self.formatter.print_info(f"Output format: {fmt.upper()}")
        self.formatter.print_info(f"File size: {os.path.getsize(output_file):,} bytes")
        self.formatter.print_info(f"Wedges: {stats['total_segments']}")

        return 0
