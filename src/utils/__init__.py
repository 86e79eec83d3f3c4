"""Path utilities for the sales-ledger-balancer project."""

from pathlib import Path


def get_workspace_root() -> Path:
    """Get the project workspace root directory.

    The workspace root is the parent directory of the src/ directory.
    This is calculated from the location of this file to work correctly
    regardless of where the module is imported from.

    Returns:
        Path: The workspace root directory.
    """
    return Path(__file__).parent.parent.parent
