"""
Info command for CLI.

Shows how every wedge is laid out and labelled without writing a chart.
"""

import math

from ghg_sunburst.cli.commands.base import ChartCommand

class InfoCommand(ChartCommand):
    """Command to show the layout of a hierarchy."""

    def execute(self, args) -> int:
        """
        Execute info command.

        Args:
            args: Parsed command line arguments

        Returns:
            int: Exit code (0 for success, 1 for error)
        """
        inputs = self.load_inputs(args)
        if inputs is None:
            return 1

        hierarchy = inputs.hierarchy
        self.formatter.print_info(f"Source: {hierarchy.source}")
        self.formatter.print_info(f"Nodes: {hierarchy.node_count()} (depth {hierarchy.max_depth()})")
        self.formatter.print_info(f"Share basis: {inputs.settings.share_basis.value}")

        scene = self.build_scene(inputs)
        self.formatter.print_info(f"Theme: {scene.theme}")

        rows = []
        for segment in scene.iter_segments():
            arc = segment.arc
            rows.append([
                "  " * (arc.depth - 1) + arc.id,
                str(arc.depth),
                f"{arc.share:g}%",
                f"{math.degrees(arc.span):.1f}°",
                f"{segment.arc_length:.1f}",
                segment.strategy.value,
                str(len(segment.label.line_texts)) if segment.label else "0",
            ])

        self.formatter.print_table(
            ["Wedge", "Depth", "Share", "Span", "Arc length", "Label", "Lines"],
            rows,
            title="Wedge Layout",
        )
        if scene.legend:
            self.formatter.print_table(
                ["Sector", "Colour"], [list(entry) for entry in scene.legend], title="Legend"
            )
        self.formatter.print_scene_summary(scene.get_statistics())

        return 0
