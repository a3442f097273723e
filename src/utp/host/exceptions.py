"""Plugin exceptions."""


class PluginError(Exception):
    """Base exception for plugin errors."""


class PluginStateError(PluginError):
    """Lifecycle entry point called in the wrong state."""

    def __init__(self, operation: str, state: str) -> None:
        self.operation = operation
        self.state = state
        super().__init__(f"Cannot {operation} while plugin is {state}")


class SchemaNotFoundError(PluginError):
    """Requested settings schema does not exist."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        self.available = available or []
        message = f"Settings schema not found: {name}"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)
