"""Upstream repository acquisition.

Key classes:
    ResourceAcquirer  - Pinned clone of the DrupalVM repository
    GitClient         - ``git clone`` backed VersionControlClient
    AcquisitionError  - Fatal clone failure
"""

from .git import (
    LATEST_MARKERS,
    AcquisitionError,
    GitClient,
    ResourceAcquirer,
    VersionControlClient,
    clone_command,
    is_latest,
)

__all__ = [
    "LATEST_MARKERS",
    "AcquisitionError",
    "GitClient",
    "ResourceAcquirer",
    "VersionControlClient",
    "clone_command",
    "is_latest",
]
