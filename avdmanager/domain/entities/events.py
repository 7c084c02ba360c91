"""Shapes shared by the change ledger and the audit log writers."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Actor:
    """The authenticated administrator performing an operation."""

    id: int
    name: str | None = None


@dataclass(frozen=True)
class RequestMetadata:
    """Network metadata captured alongside audit entries."""

    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True)
class LedgerWriteResult:
    """Outcome of a best-effort ledger write.

    Writers never raise; callers decide whether to ignore or log a failed
    result, and the primary operation is unaffected either way.
    """

    ok: bool
    error: str | None = None

    @classmethod
    def success(cls) -> "LedgerWriteResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: str) -> "LedgerWriteResult":
        return cls(ok=False, error=error)


__all__ = ["Actor", "LedgerWriteResult", "RequestMetadata"]
