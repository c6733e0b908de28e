"""Exception types for FinanceiroLB."""

from typing import Any, Dict, Optional


class FinanceiroError(Exception):
    """Base class for application errors."""

    pass


class BackendError(FinanceiroError):
    """Raised when a call to the hosted backend fails."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details
        self.status_code = status_code

    @classmethod
    def from_payload(cls, payload: Dict[str, Any], status_code: Optional[int] = None) -> "BackendError":
        """Build from a PostgREST error body ({message, code, details, hint})."""
        message = payload.get("message") or payload.get("error") or "Erro desconhecido"
        details = payload.get("details") or payload.get("hint")
        return cls(message, code=payload.get("code"), details=details, status_code=status_code)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class UnknownFilterError(FinanceiroError, KeyError):
    """Raised when a filter key is not part of the configured filters."""

    def __str__(self) -> str:
        return f"Unknown filter: {self.args[0]!r}"


class DialogBusyError(FinanceiroError):
    """Raised when a dialog is submitted while its owner is still saving."""

    pass


class FormValidationError(FinanceiroError):
    """Raised when a form submission fails local validation."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = errors
