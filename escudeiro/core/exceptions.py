"""
Exceptions
==========

Exceptions raised by the core modules and translated into HTTP responses by the API.
"""


class EscudeiroError(Exception):
    """Base class for application errors."""

    pass


class ConfigurationError(EscudeiroError):
    """Exception raised when the server configuration is unusable."""

    pass


class PathOutsideRootError(EscudeiroError):
    """Exception raised when a request path resolves outside the web root."""

    pass


class FileNotFoundInRootError(EscudeiroError):
    """Exception raised when a requested file or directory does not exist."""

    pass


class DirectoryListingError(EscudeiroError):
    """Exception raised when a directory cannot be listed."""

    pass


class PHPExecutionError(EscudeiroError):
    """Exception raised when the PHP interpreter fails."""

    pass


class ProxyError(EscudeiroError):
    """Exception raised when the proxied backend cannot be reached."""

    pass


class PageRenderingError(EscudeiroError):
    """Exception raised when a template fails to render."""

    pass
