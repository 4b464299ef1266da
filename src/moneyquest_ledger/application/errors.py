"""Errors raised at the collaborator boundary."""


class DataSourceUnavailable(RuntimeError):
    """Raised when a repository or remote provider cannot be read."""


__all__ = ["DataSourceUnavailable"]
