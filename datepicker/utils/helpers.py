"""Small terminal helpers."""

import logging
import os
import subprocess

logger = logging.getLogger(__name__)


def secure_clear_screen() -> bool:
    """Clear the console without going through a shell.

    Returns:
        True if screen was cleared successfully, False otherwise
    """
    try:
        if os.name == "posix":
            subprocess.run(["clear"], check=True, timeout=5)
        else:
            subprocess.run(["cmd.exe", "/c", "cls"], check=True, timeout=5)
        return True
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError) as e:
        logger.warning(f"Failed to clear screen: {e}")
        print("\n" * 50)
        return False
