"""Command-line argument parsing for git-branch-sweeper."""

import argparse
import sys

from branch_sweeper.__version__ import __version__

PROG = "git-branch-sweeper"


class SweeperArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        sys.stderr.write(f"{self.prog}: error: {message}\n")
        sys.stderr.write(f"Run {self.prog} --help for usage.\n")
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = SweeperArgumentParser(
        prog=PROG,
        description=(
            "Delete local and remote branches whose work has landed on main "
            "(merged, or squash-merged/closed via a GitHub pull request)."
        ),
        epilog="PR lookups use GITHUB_TOKEN, GH_TOKEN or the gh CLI's login. "
        "Without a token, unmerged branches are kept.",
    )
    parser.set_defaults(dry_run=True)
    parser.add_argument(
        "--dry-run",
        dest="dry_run",
        action="store_const",
        const=True,
        help="Show what would be deleted without doing it (default)",
    )
    parser.add_argument(
        "--execute",
        dest="dry_run",
        action="store_const",
        const=False,
        help="Actually delete the branches",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Also delete branches with no PR (prompts per branch)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"{PROG} {__version__}")
    return parser


def parse_args(argv=None):
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
