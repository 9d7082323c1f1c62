"""Exceptions raised while translating commands."""


class EmitError(ValueError):
    """Translation-time failure; no fragment is produced."""
    pass


class UnknownCommandError(EmitError):
    def __init__(self, command: str):
        super().__init__(f"Unknown command: {command!r}")
        self.command = command


class UnsupportedFormError(EmitError):
    """A command argument has a shape the translator cannot express."""
    pass


class UnsupportedLocatorError(EmitError):
    pass
