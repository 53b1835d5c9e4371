from starlette.requests import Request

from marketplace.core.config import get_settings
from marketplace.core.security import (
    AllowAllAuthorizer,
    SharedSecretAuthorizer,
    get_authorizer,
)


def _request(headers: dict[str, str] | None = None, query: str = "") -> Request:
    scope = {
        "type": "http",
        "method": "PUT",
        "path": "/api/products/1",
        "query_string": query.encode(),
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
    }
    return Request(scope)


def test_header_token_accepted():
    authorizer = SharedSecretAuthorizer(["s3cret"])
    assert authorizer.authorize(_request({"X-Admin-Token": "s3cret"}))


def test_query_param_token_accepted():
    authorizer = SharedSecretAuthorizer(["s3cret"])
    assert authorizer.authorize(_request(query="admin_token=s3cret"))


def test_wrong_or_missing_token_rejected():
    authorizer = SharedSecretAuthorizer(["s3cret"])
    assert not authorizer.authorize(_request({"X-Admin-Token": "S3CRET"}))
    assert not authorizer.authorize(_request())


def test_rotation_accepts_old_and_new_tokens():
    authorizer = SharedSecretAuthorizer(["old-token", "new-token"])
    assert authorizer.authorize(_request({"X-Admin-Token": "old-token"}))
    assert authorizer.authorize(_request({"X-Admin-Token": "new-token"}))


def test_no_configured_tokens_rejects_everything():
    authorizer = SharedSecretAuthorizer([])
    assert not authorizer.authorize(_request({"X-Admin-Token": ""}))
    assert not authorizer.authorize(_request({"X-Admin-Token": "anything"}))


def test_get_authorizer_follows_settings(monkeypatch):
    settings = get_settings()
    assert isinstance(get_authorizer(), SharedSecretAuthorizer)

    monkeypatch.setattr(settings, "admin_auth_enabled", False)
    assert isinstance(get_authorizer(), AllowAllAuthorizer)
