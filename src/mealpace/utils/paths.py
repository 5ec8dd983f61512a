"""Per-user directories for mealpace files."""

import os
from pathlib import Path


def app_dir(env_var: str, *fallback: str) -> Path:
    """
    The mealpace directory under an XDG base directory.

    Args:
        env_var: XDG variable naming the base, e.g. ``XDG_DATA_HOME``
        fallback: Path parts under the home directory used when it is unset

    Returns:
        ``<base>/mealpace``; not created
    """
    base = os.getenv(env_var) or str(Path.home().joinpath(*fallback))
    return Path(base) / "mealpace"
