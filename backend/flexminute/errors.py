"""Exception types for the Credit-Flex Minute service.

Only two of these ever reach a caller: ``ConfigurationError`` stops the
process at startup and ``GenerationError`` becomes an HTTP 500.  Problems
with the model's output are recovered inside the pipeline.
"""


class ConfigurationError(Exception):
    """Missing or invalid settings (e.g. no API key for the chosen provider)."""


class ProviderError(Exception):
    """A generation provider could not complete a request."""


class GenerationError(Exception):
    """The primary generation call failed."""


class MalformedOutputError(ValueError):
    """The generation service returned non-JSON or schema-invalid content."""
