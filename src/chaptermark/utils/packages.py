"""Utility functions to checking installed packages."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/chaptermark/utils/packages.py
from __future__ import annotations

from typing import Optional, Tuple


def get_package_version(package_name: str) -> Optional[str]:
    """Get the installed version of a distribution.

    Parameters
    ----------
    package_name : str
        Distribution name as published on the index (e.g. ``Pillow``)

    Returns
    -------
    str or None
        Version string if the distribution is installed, None otherwise

    """
    from importlib import metadata

    try:
        return metadata.version(package_name)
    except metadata.PackageNotFoundError:
        return None


def check_version_requirement(package_name: str, version_spec: str) -> Tuple[bool, Optional[str]]:
    """Check if an installed distribution meets a version requirement.

    Parameters
    ----------
    package_name : str
        Name of the distribution
    version_spec : str
        Version specification (e.g., ">=9.0.0")

    Returns
    -------
    tuple
        (meets_requirement, installed_version)

    """
    from packaging import version
    from packaging.specifiers import SpecifierSet

    installed_version = get_package_version(package_name)
    if not installed_version:
        return False, None

    meets = version.parse(installed_version) in SpecifierSet(version_spec)
    return meets, installed_version
