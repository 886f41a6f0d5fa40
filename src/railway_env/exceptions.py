"""Custom exceptions for railway-env.

Exceptions are organized into two categories:

Recoverable Errors (returned to the caller of load()):
    - RailwayEnvError: Base for all loader failures
    - NotRailwayError: RAILWAY_PROJECT_ID is unset or empty
    - MalformedVariableError: An integer variable could not be parsed

Fatal Failures (process should terminate):
    - RailwayEnvFatalError: Raised by must_load() when loading fails

Neither recoverable error is retryable: loading again without changing the
environment gives the same result.

Usage:
    from railway_env.exceptions import NotRailwayError, MalformedVariableError
"""

from __future__ import annotations

__all__ = [
    "MalformedVariableError",
    "NotRailwayError",
    "RailwayEnvError",
    "RailwayEnvFatalError",
    "VariableError",
]

from dataclasses import dataclass

from railway_env.constants import EXIT_CODE_CONFIGURATION, PROJECT_ID_ENV_VAR


# =============================================================================
# Recoverable Errors
# =============================================================================


class RailwayEnvError(Exception):
    """Base exception for Railway environment loading failures."""


class NotRailwayError(RailwayEnvError):
    """Raised when the process is not running on Railway.

    Detected by RAILWAY_PROJECT_ID being unset or empty. No partial
    environment is ever returned on this path.
    """

    def __init__(self, message: str = "not running on Railway") -> None:
        super().__init__(message)
        self.message = message
        self.variable = PROJECT_ID_ENV_VAR


@dataclass(frozen=True)
class VariableError:
    """A single malformed environment variable.

    Attributes:
        variable: Environment variable name (e.g., "RAILWAY_TCP_PROXY_PORT").
        value: The raw value that failed to parse.
        reason: Why the value was rejected.
    """

    variable: str
    value: str
    reason: str

    def __str__(self) -> str:
        return f"invalid {self.variable}: {self.reason}"


class MalformedVariableError(RailwayEnvError, ValueError):
    """Raised when integer environment variables are set but unparseable.

    Every malformed variable is reported, in field order. The first one is
    exposed as `variable` for callers that only care about one.
    The underlying parse error of the first variable is chained as
    __cause__.

    Attributes:
        errors: One VariableError per malformed variable.
        variable: Name of the first malformed variable.
        variables: Names of all malformed variables.
    """

    def __init__(self, errors: list[VariableError] | tuple[VariableError, ...]) -> None:
        if not errors:
            raise ValueError("MalformedVariableError requires at least one VariableError")
        self.errors: tuple[VariableError, ...] = tuple(errors)
        super().__init__("; ".join(str(e) for e in self.errors))

    @property
    def variable(self) -> str:
        """Name of the first malformed variable."""
        return self.errors[0].variable

    @property
    def variables(self) -> tuple[str, ...]:
        """Names of all malformed variables, in field order."""
        return tuple(e.variable for e in self.errors)

    def __repr__(self) -> str:
        return f"MalformedVariableError(variables={self.variables!r})"


# =============================================================================
# Fatal Failures
# =============================================================================


class RailwayEnvFatalError(Exception):
    """Loading the Railway environment failed and the caller cannot continue.

    Raised by must_load() with the original RailwayEnvError as __cause__.
    Deliberately not a RailwayEnvError subclass: handlers written for
    recoverable load() failures must not swallow it. Left uncaught, it
    terminates the process.

    Attributes:
        exit_code: Process exit code for callers that translate to sys.exit().
        failure_type: Category string for logging.
    """

    exit_code: int = EXIT_CODE_CONFIGURATION
    failure_type: str = "configuration_failure"
