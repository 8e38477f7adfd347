"""Failure kinds raised by the string analyzer core.

None of these know about HTTP; ``app.main`` maps each one to a status code.
"""


class StringAnalyzerError(Exception):
    """Base class for expected, caller-visible failures."""

    default_message = "String analyzer error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class StringValidationError(StringAnalyzerError):
    default_message = "Invalid request body or missing 'value' field"


class DuplicateError(StringAnalyzerError):
    default_message = "String already exists in the system"


class NotFoundError(StringAnalyzerError):
    default_message = "String does not exist in the system"


class ParseError(StringAnalyzerError):
    default_message = "Unable to parse natural language query"


class ConflictError(StringAnalyzerError):
    default_message = "Query parsed but resulted in conflicting filters"
