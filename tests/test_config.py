from app.core.config import Settings, _parse_cors_origins


def test_cors_origins_parsing():
    assert _parse_cors_origins("https://a.test, https://b.test") == ["https://a.test", "https://b.test"]
    assert _parse_cors_origins('["https://a.test"]') == ["https://a.test"]
    assert _parse_cors_origins("") == ["http://localhost:3000", "http://localhost:5173"]
    assert _parse_cors_origins("[not json") == ["http://localhost:3000", "http://localhost:5173"]


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("STORE_BACKEND", "memory")
    monkeypatch.setenv("DEFAULT_CREDITS", "3")
    monkeypatch.setenv("IDENTITY_HEADER", "X-Forwarded-User")
    s = Settings(_env_file=None)
    assert s.store_backend == "memory"
    assert s.default_credits == 3
    assert s.identity_header == "X-Forwarded-User"
    assert s.store_retry_attempts == 3


def test_status_by_code_matches_error_classes():
    from app.core.exceptions import (
        STATUS_BY_CODE,
        ConflictError,
        ForbiddenError,
        InsufficientCreditsError,
        NotFoundError,
        StorageFailureError,
        UnauthorizedError,
    )
    assert STATUS_BY_CODE == {
        "UNAUTHORIZED": 401,
        "FORBIDDEN": 403,
        "NOT_FOUND": 404,
        "CONFLICT": 409,
        "INSUFFICIENT_CREDITS": 402,
        "STORAGE_FAILURE": 503,
    }
    for cls in (UnauthorizedError, ForbiddenError, NotFoundError, ConflictError, InsufficientCreditsError, StorageFailureError):
        exc = cls()
        assert STATUS_BY_CODE[exc.code] == exc.status_code
