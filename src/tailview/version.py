import subprocess
from importlib import metadata
from pathlib import Path

# Overwritten by release builds
__version__ = "test"

DISTRIBUTION = "tailview"


def _git_revision():
    """Short commit hash when running from a git checkout."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            capture_output=True,
            text=True,
            check=True,
            cwd=Path(__file__).resolve().parent,
        )
    except (subprocess.CalledProcessError, FileNotFoundError):
        return None
    return result.stdout.strip() or None


def get_version() -> str:
    """
    Version reported by the API and CLI, first match wins:
    release build, git checkout, installed distribution, "test".
    """
    if __version__ != "test":
        return __version__

    revision = _git_revision()
    if revision:
        return revision

    try:
        return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "test"
