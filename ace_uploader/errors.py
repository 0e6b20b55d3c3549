class ConfigError(Exception):
    """Base class for configuration errors."""


class MissingArgumentError(ConfigError):
    """Exception raised when a required command line argument is absent."""

    def __init__(self, flag: str):
        self.flag = flag
        super().__init__(f"Missing required argument: {flag}")


class NotInitializedError(ConfigError):
    """Exception raised when the configuration is read before it was loaded."""

    def __init__(self) -> None:
        super().__init__("Config not initialized. Call ConfigStore.init() first.")


class AlreadyInitializedError(ConfigError):
    """Exception raised when the configuration is loaded a second time."""

    def __init__(self) -> None:
        super().__init__("Config already initialized")
