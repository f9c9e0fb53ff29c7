class ConfigurationError(Exception):
    pass


class LarkAPIError(Exception):
    """Raised when the Open Platform answers with a non-zero ``code``."""

    def __init__(self, code: int, msg: str, status_code: int | None = None) -> None:
        self.code = code
        self.msg = msg
        self.status_code = status_code
        super().__init__(f"[{code}] {msg}")


class TokenAcquisitionError(LarkAPIError):
    pass
