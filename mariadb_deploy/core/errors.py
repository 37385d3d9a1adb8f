"""Exceptions raised by mariadb-deploy."""


class MariadbDeployError(Exception):
    pass


class SqlExecutionError(MariadbDeployError):
    """The mysql client exited with a nonzero status."""

    def __init__(self, statement: str, stderr: str):
        self.statement = statement
        self.stderr = stderr
        super().__init__(f"SQL ERROR executing statement:\n{statement}\n{stderr}".rstrip())


class UnsupportedPlatformError(MariadbDeployError):
    """No path, package or repository mapping exists for the platform."""

    def __init__(self, family, reason=None):
        self.family = family
        self.reason = reason
        message = f"Unsupported platform family: {family!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
