class HBConfigError(ValueError):
    """Raised when a benchmark option is out of range. Subclass of ValueError."""
    def __init__(self, option: str, value: object, reason: str) -> None:
        self.option = option
        self.value = value
        super().__init__(f"Invalid value for {option}: {value!r} ({reason}).")


class HBInvalidHandleError(KeyError):
    """Raised when erasing a handle whose element is gone. Subclass of KeyError."""
    def __init__(self, handle: object) -> None:
        self.handle = handle
        super().__init__(f"Handle {handle!r} does not refer to a live element.")


class HBTimerStateError(RuntimeError):
    """Raised when the measure/pause/resume protocol is violated."""
