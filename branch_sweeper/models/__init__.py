"""Data model for git-branch-sweeper."""
