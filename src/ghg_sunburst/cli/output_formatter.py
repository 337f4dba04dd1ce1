"""
Output formatter for CLI.

Provides formatted output for console display including tables
and colored text.
"""

import sys
from typing import List, Optional

import colorama
from colorama import Fore, Style

class OutputFormatter:
    """Formats output for console display."""

    def __init__(self, use_colors: Optional[bool] = None):
        """
        Initialize formatter.

        Args:
            use_colors: Whether to use colored output (default: only on a terminal)
        """
        if use_colors is None:
            use_colors = sys.stdout.isatty()
        self.use_colors = use_colors
        if self.use_colors:
            colorama.init()

    def _colorize(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if self.use_colors and color:
            return f"{color}{text}{Style.RESET_ALL}"
        return text

    def success(self, text: str) -> str:
        return self._colorize(text, Fore.GREEN)

    def error(self, text: str) -> str:
        return self._colorize(text, Fore.RED)

    def warning(self, text: str) -> str:
        return self._colorize(text, Fore.YELLOW)

    def info(self, text: str) -> str:
        return self._colorize(text, Fore.CYAN)

    def bold(self, text: str) -> str:
        if self.use_colors:
            return f"{Style.BRIGHT}{text}{Style.RESET_ALL}"
        return text

    def print_success(self, text: str):
        print(self.success(text))

    def print_error(self, text: str):
        print(self.error(text), file=sys.stderr)

    def print_warning(self, text: str):
        print(self.warning(text))

    def print_info(self, text: str):
        print(self.info(text))

    def print_bold(self, text: str):
        print(self.bold(text))

    def print_issues(self, title: str, issues: List[str]):
        """Prints a heading and one bullet per issue to stderr."""
        self.print_error(title)
        for issue in issues:
            self.print_error(f"  • {issue}")

    def print_table(self, headers: List[str], rows: List[List[str]],
                    title: Optional[str] = None) -> None:
        """
        Print formatted table.

        Args:
            headers: Table headers
            rows: Table rows
            title: Optional table title
        """
        if title:
            print()
            print(self.bold(title))
            print()

        if not headers or not rows:
            print("No data to display")
            return

        col_widths = [len(header) for header in headers]
        for row in rows:
            for i, cell in enumerate(row):
                if i < len(col_widths):
                    col_widths[i] = max(col_widths[i], len(str(cell)))

        header_line = " | ".join(header.ljust(col_widths[i])
                                 for i, header in enumerate(headers))
        print(self.bold(header_line))
        print("-" * len(header_line))

        for row in rows:
            print(" | ".join(str(cell).ljust(col_widths[i]) for i, cell in enumerate(row)))
        print()

    def print_scene_summary(self, stats: dict) -> None:
        """Prints wedge and label counts of a rendered scene."""
        print()
        print(self.bold("Chart Summary"))
        print("=" * 40)

        print(f"{'Wedges':<20}: {stats.get('total_segments', 0)}")
        for depth, count in stats.get("segments_by_depth", {}).items():
            print(f"{f'  Ring {depth}':<20}: {count}")

        for strategy, count in stats.get("labels_by_strategy", {}).items():
            print(f"{f'  {strategy} labels':<20}: {count}")

        warnings = stats.get("budget_warnings", 0)
        if warnings:
            print(self.warning(f"{'Budget warnings':<20}: {warnings}"))
        print()
