"""Exception hierarchy for strangerstrings."""


class StrangerStringsError(Exception):
    """Base class for all errors raised by strangerstrings."""


class ModelParsingError(StrangerStringsError, ValueError):
    """A trigram model description is malformed.

    No partial model is ever produced when this is raised.
    """


class ModelNotLoadedError(StrangerStringsError, RuntimeError):
    """Trigram scoring was requested but no model has been loaded."""

    def __init__(self, msg: str = "Model not loaded - call load_model() first") -> None:
        super().__init__(msg)


class InvalidInputError(StrangerStringsError, ValueError):
    """A request names an unknown encoding or script, or misses an option."""
