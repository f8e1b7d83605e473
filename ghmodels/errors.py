from __future__ import annotations


class ClientError(Exception):
    """Base class for errors raised by the GitHub Models client."""


class ConfigurationError(ClientError):
    pass


class StatusError(ClientError):
    def __init__(self, status_code: int, error_message: str):
        super().__init__(status_code, error_message)
        self.status_code = status_code
        self.error_message = error_message

    def __str__(self) -> str:
        return f"GitHub Models API error: {self.error_message} (status code: {self.status_code})"


class DecodingError(ClientError):
    pass


class CancelledError(ClientError):
    pass
