"""Error taxonomy for dep-bump.

Every error is fatal to a run. The pipeline never catches these; the CLI
prints them and exits non-zero.
"""

from __future__ import annotations


class DepBumpError(Exception):
    """Base class for all dep-bump failures."""


class ConfigurationError(DepBumpError):
    """Required configuration (e.g. credentials) is missing."""


class PreconditionError(DepBumpError):
    """Repository state or caller input does not allow the bump to proceed."""


class VersionControlError(DepBumpError):
    """A git operation failed (checkout, merge conflict, rejected push, ...)."""


class HostingApiError(DepBumpError):
    """The hosting API rejected a request or could not be reached."""
