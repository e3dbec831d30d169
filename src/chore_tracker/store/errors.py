# src/chore_tracker/store/errors.py

from __future__ import annotations


class StoreError(RuntimeError):
    """
    Failure reported by the external store (network, auth, validation rejection).

    status is the HTTP status when the server answered, None for transport errors.
    code/details/hint mirror the PostgREST error body when one was returned.
    """

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        code: str | None = None,
        details: str | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.details = details
        self.hint = hint

    def __str__(self) -> str:
        parts = [self.message]
        if self.status is not None:
            parts.append(f"status={self.status}")
        if self.code:
            parts.append(f"code={self.code}")
        if self.details:
            parts.append(f"details={self.details}")
        return " ".join(parts)


def friendly_store_error_message(exc: BaseException) -> str:
    """Short operator-facing description of a store failure."""
    if not isinstance(exc, StoreError):
        return f"{exc.__class__.__name__}: {exc}"
    if exc.status is None:
        return f"Store unreachable: {exc.message}"
    if exc.status in (401, 403):
        return "Store rejected the credentials (check CHORES_STORE_KEY and the table policies)."
    if exc.status == 404:
        return "Store table not found (check CHORES_STORE_URL and the schema)."
    if 400 <= exc.status < 500:
        return f"Store rejected the request: {exc.message}"
    return f"Store error {exc.status}: {exc.message}"
