#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the sitemark library.

The render path itself never raises for document content: malformed URLs,
asset lookup misses and invalid option values all degrade locally. These
exceptions are reserved for programming errors at the edges of the library
(wrong option types, unreadable configuration files, hook failures in strict
mode).

Exception Hierarchy
-------------------
- SitemarkError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class)

  - ConfigurationError (site configuration loading)

  - HookError (extension hook failures in strict mode)

"""

from typing import Any


class SitemarkError(Exception):
    """Base exception class for all sitemark-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(SitemarkError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an options object of the wrong type is supplied.

    Parameters
    ----------
    component_name : str
        Name of the component that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        component_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error with type details."""
        if message is None:
            message = (
                f"{component_name} expected options of type '{expected_type.__name__}' "
                f"or a mapping, but received '{received_type.__name__}'"
            )

        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class ConfigurationError(SitemarkError):
    """Exception raised when a site configuration file cannot be loaded.

    Parameters
    ----------
    message : str
        Description of the failure
    config_path : str, optional
        Path of the offending configuration file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error with the file path."""
        super().__init__(message, original_error=original_error)
        self.config_path = config_path


class HookError(SitemarkError):
    """Exception raised when an extension hook fails in strict mode.

    Parameters
    ----------
    message : str
        Description of the failure
    target : str, optional
        Hook target that was being dispatched
    original_error : Exception, optional
        The exception raised by the hook

    """

    def __init__(self, message: str, target: str | None = None, original_error: Exception | None = None):
        """Initialize the hook error with the dispatch target."""
        super().__init__(message, original_error=original_error)
        self.target = target


__all__ = [
    "SitemarkError",
    "ValidationError",
    "InvalidOptionsError",
    "ConfigurationError",
    "HookError",
]
