"""Documented exit codes for the rfsurvey CLI.

Exit codes follow UNIX conventions:
- 0: Success
- 1: General/unspecified error
- 2: Invalid command-line arguments or usage
- 3-4: Application-specific errors

Usage:
    from rfsurvey.util.exit_codes import ExitCode
    sys.exit(ExitCode.RESULTS_NOT_FOUND)
"""

from __future__ import annotations


class ExitCode:
    """Exit code constants for rfsurvey processes.

    Attributes:
        SUCCESS: Normal termination, no errors.
        GENERAL_ERROR: Unspecified runtime error.
        INVALID_ARGS: Command-line argument validation failed.
        RESULTS_NOT_FOUND: The results directory does not exist.
        NO_POINTS: The results directory holds no survey points.
    """

    SUCCESS: int = 0
    GENERAL_ERROR: int = 1
    INVALID_ARGS: int = 2
    RESULTS_NOT_FOUND: int = 3
    NO_POINTS: int = 4

    @classmethod
    def message(cls, code: int) -> str:
        """Return a human-readable message for an exit code."""
        messages = {
            cls.SUCCESS: "Success",
            cls.GENERAL_ERROR: "General error",
            cls.INVALID_ARGS: "Invalid arguments",
            cls.RESULTS_NOT_FOUND: "Results directory not found",
            cls.NO_POINTS: "No survey points found",
        }
        return messages.get(code, f"Unknown exit code {code}")
