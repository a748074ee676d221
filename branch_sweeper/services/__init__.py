"""Services used by the branch sweeper run loop."""
