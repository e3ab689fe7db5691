import pytest
from fastapi import Depends, FastAPI, HTTPException
from fastapi.testclient import TestClient

from app.security import API_KEY_NAME, get_api_key, get_settings
from app.settings import Settings


def test_get_api_key_accepts_valid_key():
    settings = Settings(BLOG_ADMIN_KEY="secret")

    result = get_api_key(api_key_header="secret", current_settings=settings)
    assert result == "secret"


def test_get_api_key_rejects_invalid_key():
    settings = Settings(BLOG_ADMIN_KEY="secret")

    with pytest.raises(HTTPException) as exc:
        get_api_key(api_key_header="wrong", current_settings=settings)
    assert exc.value.status_code == 403


def test_get_api_key_rejects_missing_header():
    settings = Settings(BLOG_ADMIN_KEY="secret")

    with pytest.raises(HTTPException):
        get_api_key(api_key_header=None, current_settings=settings)  # type: ignore


def test_get_api_key_rejects_everything_when_unconfigured():
    settings = Settings(BLOG_ADMIN_KEY="")

    with pytest.raises(HTTPException):
        get_api_key(api_key_header="", current_settings=settings)


def test_dependency_in_route_accepts_valid_key(monkeypatch):
    monkeypatch.setattr("app.security.settings", Settings(BLOG_ADMIN_KEY="secret"))

    app = FastAPI()

    @app.get("/secure")
    async def secure(key=Depends(get_api_key)):
        return {"ok": True}

    client = TestClient(app)
    res = client.get("/secure", headers={API_KEY_NAME: "secret"})
    assert res.status_code == 200
    assert res.json() == {"ok": True}


def test_dependency_in_route_rejects_invalid_key():
    app = FastAPI()
    app.dependency_overrides[get_settings] = lambda: Settings(BLOG_ADMIN_KEY="secret")

    @app.get("/secure")
    async def secure(key=Depends(get_api_key)):
        return {"ok": True}

    client = TestClient(app)
    res = client.get("/secure", headers={API_KEY_NAME: "wrong"})
    assert res.status_code == 403
