"""Custom exceptions for License Lens.

Only fatal preconditions raise. Unreadable directories and malformed
manifests found during a scan are skipped, never raised.
"""


class LicenseLensError(Exception):
    """Base exception for all License Lens errors."""


class DependencyTreeNotFoundError(LicenseLensError):
    """Raised when the installed-dependency tree is missing under the project root."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"node_modules not found at {path}. "
            "Run npm ci / pnpm i / yarn install first."
        )


class ConfigError(LicenseLensError):
    """Raised when the policy config file cannot be parsed or has the wrong shape."""
