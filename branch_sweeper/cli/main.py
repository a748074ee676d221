"""Command-line interface for git-branch-sweeper"""

import os
import sys

from rich.console import Console

from branch_sweeper.cli.args import parse_args
from branch_sweeper.config import Config
from branch_sweeper.core import BranchSweeper
from branch_sweeper.exceptions import BranchSweeperError
from branch_sweeper.logging_config import setup_logging
from branch_sweeper.services.display_service import DisplayService

console = Console()


def main(argv=None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)

    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    config = Config(
        dry_run=parsed_args.dry_run,
        force=parsed_args.force,
        verbose=parsed_args.verbose,
        debug=parsed_args.debug,
    )

    if parsed_args.debug:
        console.print("[yellow]Debug mode enabled[/yellow]")
        console.print("[yellow]Configuration:[/yellow]")
        for key, value in config.to_dict().items():
            if key == "github_token" and value:
                value = "***"
            console.print(f"  {key}: {value}")

    display = DisplayService()
    sweeper = None
    try:
        sweeper = BranchSweeper(os.getcwd(), config, display=display)
        sweeper.run()
        return 0
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except BranchSweeperError as e:
        display.error(str(e))
        if parsed_args.debug:
            console.print_exception()
        return 1
    finally:
        if sweeper is not None:
            sweeper.close()


if __name__ == "__main__":
    sys.exit(main())
