"""
Exception hierarchy for stl_mesh.

Every failure while loading an STL file surfaces as a single ``LoadError``
carrying the offending path and, when there is one, the underlying cause.
Configuration problems raise ``ConfigurationError``.
"""

from typing import Optional


class StlMeshError(Exception):
    """
    Base exception for all stl_mesh failures.
    
    Provides a consistent interface (message, error code, details) for
    error handling throughout the loader.
    """
    def __init__(self, message: str, error_code: str = None, details: dict = None):
        """
        Initialize stl_mesh error.
        
        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.error_code = error_code or "STL_MESH_ERROR"
        self.details = details or {}
        self.message = message
    
    def __str__(self):
        if self.details:
            return f"{self.message} (Code: {self.error_code}, Details: {self.details})"
        return f"{self.message} (Code: {self.error_code})"


class LoadError(StlMeshError):
    """
    Exception for STL loading failures.
    
    Raised on I/O failures, ASCII structural violations, numeric parse
    failures and truncated binary files. Partial meshes are never returned
    alongside it.
    """
    def __init__(self, message: str, path=None, cause: Optional[BaseException] = None, **kwargs):
        kwargs.setdefault("error_code", "LOAD_ERROR")
        super().__init__(message, **kwargs)
        self.path = str(path) if path is not None else None
        self.cause = cause
        if self.path:
            self.details["file"] = self.path
        if cause is not None:
            self.__cause__ = cause
            self.details["cause"] = f"{type(cause).__name__}: {cause}"


class ConfigurationError(StlMeshError):
    """
    Exception for configuration file and parameter errors.
    
    Raised when configuration files are unreadable, not valid JSON, or
    contain invalid parameter values.
    """
    def __init__(self, message: str, config_file: str = None, invalid_parameters: list = None, **kwargs):
        super().__init__(message, error_code="CONFIGURATION_ERROR", **kwargs)
        self.config_file = config_file
        self.invalid_parameters = invalid_parameters or []
        if config_file:
            self.details["config_file"] = str(config_file)
        if invalid_parameters:
            self.details["invalid_parameters"] = invalid_parameters


# Convenience functions for common error scenarios

def raise_load_error(message: str, path=None, cause: BaseException = None, **kwargs):
    """Raise a LoadError chained to its underlying cause."""
    raise LoadError(message, path=path, cause=cause, **kwargs) from cause

