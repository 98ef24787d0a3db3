"""
Domain Errors

Architectural Intent:
- Single exception hierarchy for every failure a hook can surface
- Each error carries the process exit status the CLI should terminate with
- Work failures mirror the external command's own exit status
"""


class VenvHooksError(Exception):
    """Base class for all venvhooks failures."""

    exit_code: int = 1


class MissingConfigurationError(VenvHooksError):
    """A required setting (e.g. the venv directory) is not set."""

    def __init__(self, setting: str, hook: str = ""):
        self.setting = setting
        self.hook = hook
        if hook:
            message = f"`{setting}` should be set when using `{hook}`."
        else:
            message = f"`{setting}` should be set."
        super().__init__(message)


class InvalidConfigurationError(VenvHooksError):
    """A setting has a value that cannot be converted to its declared type."""

    def __init__(self, setting: str, value: str, expected: str):
        self.setting = setting
        self.value = value
        super().__init__(f"`{setting}` must be {expected}, got {value!r}.")


class VenvNotFoundError(VenvHooksError):
    """The virtualenv to activate does not exist (yet)."""

    def __init__(self, venv_dir: str):
        self.venv_dir = venv_dir
        super().__init__(
            f"No virtualenv at {venv_dir}; run `venvhooks uv-sync` first."
        )


class HashComputationError(VenvHooksError):
    """An input of a fingerprint is missing or unreadable."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Unable to fingerprint {path}: {reason}")


class WorkUnitFailedError(VenvHooksError):
    def __init__(self, description: str, exit_code: int):
        self.description = description
        self.exit_code = exit_code
        super().__init__(f"{description} failed with exit status {exit_code}")
