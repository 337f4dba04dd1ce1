"""
Main entry point for CLI.

Handles command routing and global error handling.
"""

import logging
import sys
import traceback
from typing import Optional

from ghg_sunburst.cli.argument_parser import ArgumentParser
from ghg_sunburst.cli.commands.info import InfoCommand
from ghg_sunburst.cli.commands.render import RenderCommand
from ghg_sunburst.cli.output_formatter import OutputFormatter
from ghg_sunburst.shared_toolkit.core.logging import setup_logging

COMMANDS = {
    "render": RenderCommand,
    "info": InfoCommand,
}

def configure_logging(debug: bool = False, log_file: Optional[str] = None):
    """
    Setup logging configuration.

    Args:
        debug: Whether to enable debug logging
        log_file: Optional file that receives log records too
    """
    setup_logging("ghg_sunburst", debug_enabled=debug,
                  debug_env_var="GHG_SUNBURST_DEBUG", log_file=log_file)

    # Suppress noisy loggers
    logging.getLogger("matplotlib").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)

def main(args: Optional[list] = None) -> int:
    """
    Main CLI entry point.

    Args:
        args: Command line arguments (default: sys.argv[1:])

    Returns:
        int: Exit code (0 for success, 1 for error)
    """
    debug = "--debug" in (args if args is not None else sys.argv[1:])
    try:
        parser = ArgumentParser()
        parsed_args = parser.parse_args(args)
        debug = parsed_args.debug

        configure_logging(parsed_args.debug, parsed_args.log_file)

        validation_issues = parser.validate_args(parsed_args)
        if validation_issues:
            OutputFormatter().print_issues("Argument validation failed:", validation_issues)
            return 1

        command_class = COMMANDS.get(parsed_args.command)
        if command_class is None:
            formatter = OutputFormatter()
            formatter.print_error(f"Unknown command: {parsed_args.command}")
            formatter.print_info(f"Available commands: {', '.join(COMMANDS)}")
            return 1

        return command_class().execute(parsed_args)

    except KeyboardInterrupt:
        OutputFormatter().print_warning("\nOperation cancelled by user")
        return 130

    except Exception as e:
        OutputFormatter().print_error(f"Unexpected error: {e}")
        if debug:
            traceback.print_exc()
        return 1

if __name__ == "__main__":
    sys.exit(main())
