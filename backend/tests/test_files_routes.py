"""Tests for /api/fs routes: auth short-circuit, status mapping and path safety."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from nasbox.api.deps import get_file_service, get_requested_path, require_username
from nasbox.api.errors import register_exception_handlers
from nasbox.api.routes import files
from nasbox.config import settings
from nasbox.services.file_service import FileService


@pytest.fixture
def alice_home(storage_root):
    home = storage_root / "alice"
    home.mkdir(exist_ok=True)
    (home / "music").mkdir()
    (home / "music" / "song.mp3").write_bytes(b"ID3")
    (home / "Köln.jpg").write_bytes(b"\xff\xd8")
    (home / "notes.txt").write_text("todo")
    return home


class TestAuthRequired:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method, url",
        [
            ("GET", "/api/fs/list"),
            ("GET", "/api/fs/list/music"),
            ("GET", "/api/fs/info/notes.txt"),
            ("DELETE", "/api/fs/delete/notes.txt"),
        ],
    )
    async def test_unauthenticated_gets_auth_page(self, client: AsyncClient, method, url):
        resp = await client.request(method, url)
        assert resp.status_code == 401
        assert resp.headers["content-type"].startswith("text/html")
        assert "please log in" in resp.text

    @pytest.mark.asyncio
    async def test_unauthenticated_never_touches_filesystem(self, client: AsyncClient):
        service = MagicMock()
        client._transport.app.dependency_overrides[get_file_service] = lambda: service

        resp = await client.delete("/api/fs/delete/notes.txt")

        assert resp.status_code == 401
        assert service.method_calls == []

    @pytest.mark.asyncio
    async def test_unknown_session_token(self, client: AsyncClient):
        client.cookies.set(settings.session_cookie_name, "not-a-real-token")
        resp = await client.get("/api/fs/list")
        assert resp.status_code == 401


class TestListing:
    @pytest.mark.asyncio
    async def test_list_home(self, logged_in_client: AsyncClient, alice_home):
        resp = await logged_in_client.get("/api/fs/list")
        assert resp.status_code == 200
        data = resp.json()
        assert data["path"] == ""
        assert data["entry"]["category"] == "Directory"
        assert [c["name"] for c in data["children"]] == ["music", "Köln.jpg", "notes.txt"]
        assert all("absolute_path" not in c for c in data["children"])

    @pytest.mark.asyncio
    async def test_list_subdirectory_with_trailing_slash(self, logged_in_client: AsyncClient, alice_home):
        resp = await logged_in_client.get("/api/fs/list/music/")
        assert resp.status_code == 200
        data = resp.json()
        assert data["path"] == "music"
        assert data["children"][0]["relative_path"] == "music/song.mp3"
        assert data["children"][0]["category"] == "Audio"

    @pytest.mark.asyncio
    async def test_info_percent_encoded_name(self, logged_in_client: AsyncClient, alice_home):
        resp = await logged_in_client.get("/api/fs/info/K%C3%B6ln.jpg")
        assert resp.status_code == 200
        data = resp.json()
        assert data["name"] == "Köln.jpg"
        assert data["category"] == "Image"
        assert data["extension"] == "jpg"
        assert data["size_bytes"] == 2


class TestErrorMapping:
    @pytest.mark.asyncio
    async def test_invalid_utf8_is_400(self, logged_in_client: AsyncClient, alice_home):
        resp = await logged_in_client.get("/api/fs/info/bad%FFname")
        assert resp.status_code == 400
        assert resp.headers["content-type"].startswith("text/html")

    @pytest.mark.asyncio
    async def test_missing_is_404_and_echoes_path(self, logged_in_client: AsyncClient, alice_home):
        resp = await logged_in_client.get("/api/fs/info/missing.txt")
        assert resp.status_code == 404
        assert "missing.txt" in resp.text

    @pytest.mark.asyncio
    async def test_traversal_is_403_without_path(self, logged_in_client: AsyncClient, alice_home, storage_root):
        resp = await logged_in_client.get("/api/fs/info/..%2F..%2Fetc%2Fpasswd")
        assert resp.status_code == 403
        assert "passwd" not in resp.text
        assert str(storage_root) not in resp.text

    @pytest.mark.asyncio
    async def test_other_user_is_403(self, logged_in_client: AsyncClient, alice_home, storage_root):
        (storage_root / "bob").mkdir()
        (storage_root / "bob" / "diary.txt").write_text("secret")
        resp = await logged_in_client.get("/api/fs/info/..%2Fbob%2Fdiary.txt")
        assert resp.status_code == 403

    @pytest.mark.asyncio
    async def test_error_page_hides_absolute_path(self, logged_in_client: AsyncClient, alice_home, storage_root):
        resp = await logged_in_client.get("/api/fs/info/music%2Fnope.mp3")
        assert resp.status_code == 404
        assert str(storage_root) not in resp.text


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_file(self, logged_in_client: AsyncClient, alice_home):
        resp = await logged_in_client.delete("/api/fs/delete/notes.txt")
        assert resp.status_code == 200
        assert resp.content == b""
        assert resp.headers["content-type"].startswith("text/html")
        assert not (alice_home / "notes.txt").exists()
        assert (alice_home / "Köln.jpg").exists()

    @pytest.mark.asyncio
    async def test_delete_directory(self, logged_in_client: AsyncClient, alice_home):
        resp = await logged_in_client.delete("/api/fs/delete/music/")
        assert resp.status_code == 200
        assert not (alice_home / "music").exists()

    @pytest.mark.asyncio
    async def test_delete_twice(self, logged_in_client: AsyncClient, alice_home):
        first = await logged_in_client.delete("/api/fs/delete/notes.txt")
        second = await logged_in_client.delete("/api/fs/delete/notes.txt")
        third = await logged_in_client.delete("/api/fs/delete/notes.txt")
        assert first.status_code == 200
        assert second.status_code == 404
        assert third.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_home_rejected(self, logged_in_client: AsyncClient, alice_home):
        resp = await logged_in_client.delete("/api/fs/delete/")
        assert resp.status_code == 400
        assert alice_home.exists()

    @pytest.mark.asyncio
    async def test_delete_outside_root_rejected(self, logged_in_client: AsyncClient, alice_home, storage_root):
        victim = storage_root.parent / "victim.txt"
        victim.write_text("keep me")
        resp = await logged_in_client.delete("/api/fs/delete/..%2F..%2Fvictim.txt")
        assert resp.status_code == 403
        assert victim.exists()

    @pytest.mark.asyncio
    async def test_delete_failure_is_500_without_os_error(self, logged_in_client: AsyncClient, alice_home, monkeypatch):
        import nasbox.storage.delete as delete_module

        def _denied(path):
            raise PermissionError(13, "Permission denied by kernel")

        monkeypatch.setattr(delete_module.os, "remove", _denied)
        resp = await logged_in_client.delete("/api/fs/delete/notes.txt")
        assert resp.status_code == 500
        assert "notes.txt" in resp.text
        assert "kernel" not in resp.text

    @pytest.mark.asyncio
    async def test_absolute_user_path_is_403(self, logged_in_client: AsyncClient, alice_home):
        resp = await logged_in_client.get("/api/fs/info//etc/passwd")
        assert resp.status_code == 403
        assert "passwd" not in resp.text


class TestRequestedPath:
    @pytest.mark.asyncio
    async def test_decode_error_echoes_only_user_path(self, logged_in_client: AsyncClient, alice_home):
        resp = await logged_in_client.get("/api/fs/info/music/bad%FFname")
        assert resp.status_code == 400
        assert "music/bad%FFname" in resp.text
        assert "/api/fs" not in resp.text

    @pytest.mark.asyncio
    async def test_router_mounted_under_other_prefix(self, file_service: FileService, alice_home):
        app = FastAPI()
        register_exception_handlers(app)
        app.include_router(files.router, prefix="/v2/storage/fs")
        app.dependency_overrides[require_username] = lambda: "alice"
        app.dependency_overrides[get_file_service] = lambda: file_service

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            info = await c.get("/v2/storage/fs/info/K%C3%B6ln.jpg")
            listing = await c.get("/v2/storage/fs/list/music/")
            deleted = await c.delete("/v2/storage/fs/delete/notes.txt")

        assert info.status_code == 200
        assert info.json()["relative_path"] == "Köln.jpg"
        assert listing.json()["path"] == "music"
        assert deleted.status_code == 200
        assert not (alice_home / "notes.txt").exists()

    def test_tail_taken_from_raw_path_not_route_template(self):
        request = Request({
            "type": "http",
            "method": "GET",
            "path": "/api/fs/info/a b/é",
            "raw_path": b"/api/fs/info/a%20b/%C3%A9",
            "root_path": "",
            "query_string": b"",
            "headers": [],
            "path_params": {"path": "a b/é"},
            "route": SimpleNamespace(path_format="/info/{path}"),
        })
        assert get_requested_path(request) == "a b/é"

    def test_tail_after_root_path(self):
        request = Request({
            "type": "http",
            "method": "GET",
            "path": "/api/fs/info/x.txt",
            "raw_path": b"/nas/api/fs/info/x.txt",
            "root_path": "/nas",
            "query_string": b"",
            "headers": [],
            "path_params": {"path": "x.txt"},
        })
        assert get_requested_path(request) == "x.txt"
