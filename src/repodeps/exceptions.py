"""repodeps exception hierarchy.

All public exceptions inherit from RepoDepsError, giving callers a single
base class to catch when they want to handle any repodeps-specific failure
without swallowing unrelated errors.

Lint findings are deliberately *not* exceptions: a run that finds cycles
still produces a full graph, and only the exit status changes.
"""


class RepoDepsError(Exception):
    """Base exception for all repodeps errors."""



class InputError(RepoDepsError):
    """Raised when the inputs of a run cannot be obtained.

    Covers repository fetch failures, manifest parse failures, malformed
    configuration files and layouts the inputs cannot satisfy. Always
    fatal: the run aborts before any graph is written.
    """


class FetchError(InputError):
    """Raised when a repository snapshot cannot be retrieved.

    Covers network errors, non-success HTTP statuses, missing local
    paths and unreadable or corrupt archives.
    """


class ManifestParseError(InputError):
    """Raised when a package manifest is not valid TOML or is malformed."""


class ConfigError(InputError):
    """Raised when the run configuration file is missing or malformed."""


class ConfigurationError(RepoDepsError):
    """Raised when the discovered manifests are mutually inconsistent.

    The main case is two manifests declaring the same package name, which
    makes node identity ambiguous.
    """


class RenderError(InputError):
    """Raised when the graph cannot be drawn in the requested layout.

    The color-per-repository layout has a fixed palette; scanning more
    repositories than it holds is rejected rather than reusing colors.
    """
