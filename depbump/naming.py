"""Branch, commit and pull request naming.

All functions are pure: the same package name and target version always give
the same names, so a re-run targets the same branch.
"""

from __future__ import annotations

PR_TITLE_PREFIX = "[Technical]"


def sanitize_version(version: str) -> str:
    """Strip range operators so the version is usable in a ref name.

    Examples:
        "^1.2.0" → "1.2.0"
        "~0.4.1" → "0.4.1"
    """
    return version.replace("^", "").replace("~", "")


def sanitize_package_name(package_name: str) -> str:
    """Strip scope characters from an npm package name.

    Examples:
        "left-pad" → "left-pad"
        "@hapi/hoek" → "hapihoek"
    """
    return package_name.replace("@", "").replace("/", "")


def branch_name(package_name: str, version: str) -> str:
    """Name of the branch that carries the bump, e.g. "bump-left-pad-v1.2.0"."""
    return f"bump-{sanitize_package_name(package_name)}-v{sanitize_version(version)}"


def commit_message(package_name: str, version: str) -> str:
    """Message of the bump commit, e.g. "Bump left-pad to v1.2.0"."""
    return f"Bump {sanitize_package_name(package_name)} to v{sanitize_version(version)}"


def pull_request_title(message: str) -> str:
    return f"{PR_TITLE_PREFIX} {message}"
