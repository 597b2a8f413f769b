"""Error taxonomy shared by the registry, the cache and the HTTP surface."""

from __future__ import annotations


class ServiceError(Exception):
    message = "Service error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message

    def __str__(self) -> str:
        return self.message


class SymbolNotFound(ServiceError):
    """Symbol is absent from the registry."""

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"{symbol} not found")


class UnsupportedSymbol(ServiceError):
    """Symbol is denylisted for depth filtering."""

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"{symbol} not supported")


class InternalError(ServiceError):
    message = "Internal error"

    @classmethod
    def wrap(cls, exc: BaseException, context: str | None = None) -> "InternalError":
        """Wrap a collaborator failure, keeping its message for diagnostics."""

        if isinstance(exc, InternalError):
            return exc
        detail = str(exc) or type(exc).__name__
        if context:
            detail = f"{context}: {detail}"
        return cls(detail)


__all__ = ["ServiceError", "SymbolNotFound", "UnsupportedSymbol", "InternalError"]
