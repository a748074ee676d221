"""
git-branch-sweeper - Delete branches whose work has landed on main
"""

from .__version__ import __version__
from .core import BranchSweeper

__all__ = ["BranchSweeper", "__version__"]
