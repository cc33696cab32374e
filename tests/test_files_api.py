"""Tests for /files endpoints."""

import hashlib
from datetime import timedelta

from cabinet.core.config import get_settings
from cabinet.core.timestamps import format_http_date, parse_http_date
from cabinet.repositories import ByPath, DirectoryRepository, FileRepository


def _etag(content: bytes) -> str:
    return f'"{hashlib.sha1(content).hexdigest()}"'


class TestPutAndGet:

    def test_put_creates_file_and_parents(self, client, db):
        resp = client.put("/files/a/b/c.txt", content=b"hi")
        assert resp.status_code == 201
        assert resp.headers["etag"] == _etag(b"hi")
        assert "last-modified" in resp.headers

        dirs = DirectoryRepository(db)
        assert dirs.exists(ByPath("a"))
        assert dirs.exists(ByPath("a/b"))

        get_resp = client.get("/files/a/b/c.txt")
        assert get_resp.status_code == 200
        assert get_resp.content == b"hi"
        assert get_resp.headers["etag"] == _etag(b"hi")
        assert get_resp.headers["content-type"].startswith("text/plain")

    def test_put_existing_replaces_and_keeps_mode(self, client, db):
        client.put("/files/x.sh", content=b"one")
        record = FileRepository(db).fetch(ByPath("x.sh"))
        assert record.mode == get_settings().default_file_mode

        resp = client.put("/files/x.sh", content=b"two")
        assert resp.status_code == 204
        assert resp.headers["etag"] == _etag(b"two")
        assert client.get("/files/x.sh").content == b"two"

    def test_get_missing_returns_404(self, client):
        resp = client.get("/files/nope.txt")
        assert resp.status_code == 404
        assert resp.json()["error"] == "NOT_FOUND"

    def test_head_returns_headers_without_body(self, client):
        client.put("/files/page.html", content=b"<p>hi</p>")
        resp = client.head("/files/page.html")
        assert resp.status_code == 200
        assert resp.content == b""
        assert resp.headers["etag"] == _etag(b"<p>hi</p>")
        assert resp.headers["content-type"].startswith("text/html")

    def test_put_path_without_file_name_is_400(self, client):
        resp = client.put("/files/a/b/", content=b"hi")
        assert resp.status_code == 400

    def test_overlong_name_is_400_and_stores_nothing(self, client, db):
        resp = client.put("/files/dir/" + "n" * 300, content=b"hi")
        assert resp.status_code == 400
        assert resp.json()["details"]["max_length"] == 255
        assert not DirectoryRepository(db).exists(ByPath("dir"))


class TestConditionalGet:

    def test_if_none_match(self, client):
        client.put("/files/f.txt", content=b"abc")
        etag = _etag(b"abc")

        resp = client.get("/files/f.txt", headers={"If-None-Match": etag})
        assert resp.status_code == 304
        assert resp.content == b""
        assert resp.headers["etag"] == etag

        resp = client.get("/files/f.txt", headers={"If-None-Match": '"xyz"'})
        assert resp.status_code == 200
        assert resp.content == b"abc"

    def test_head_with_matching_etag_is_304(self, client):
        client.put("/files/f.txt", content=b"abc")
        resp = client.head("/files/f.txt", headers={"If-None-Match": _etag(b"abc")})
        assert resp.status_code == 304
        assert resp.content == b""
        assert resp.headers["etag"] == _etag(b"abc")

    def test_if_modified_since(self, client):
        put = client.put("/files/f.txt", content=b"abc")
        last_modified = put.headers["last-modified"]

        resp = client.get("/files/f.txt", headers={"If-Modified-Since": last_modified})
        assert resp.status_code == 304

        earlier = parse_http_date(last_modified) - timedelta(seconds=1)
        resp = client.get(
            "/files/f.txt",
            headers={"If-Modified-Since": format_http_date(earlier)},
        )
        assert resp.status_code == 200


class TestConditionalPut:

    def test_if_match_mismatch_is_412(self, client):
        client.put("/files/f.txt", content=b"v1")
        resp = client.put("/files/f.txt", content=b"v2", headers={"If-Match": '"stale"'})
        assert resp.status_code == 412
        assert client.get("/files/f.txt").content == b"v1"

    def test_if_match_current_etag_proceeds(self, client):
        client.put("/files/f.txt", content=b"v1")
        resp = client.put("/files/f.txt", content=b"v2", headers={"If-Match": _etag(b"v1")})
        assert resp.status_code == 204

    def test_if_unmodified_since(self, client):
        put = client.put("/files/f.txt", content=b"v1")
        last_modified = parse_http_date(put.headers["last-modified"])
        earlier = format_http_date(last_modified - timedelta(seconds=1))
        later = format_http_date(last_modified + timedelta(hours=1))

        resp = client.put("/files/f.txt", content=b"v2", headers={"If-Unmodified-Since": earlier})
        assert resp.status_code == 412

        resp = client.put("/files/f.txt", content=b"v2", headers={"If-Unmodified-Since": later})
        assert resp.status_code == 204

    def test_preconditions_ignored_for_new_file(self, client):
        resp = client.put("/files/new.txt", content=b"x", headers={"If-Match": '"whatever"'})
        assert resp.status_code == 201


class TestPayloadLimit:

    def test_oversized_body_is_413_and_stores_nothing(self, client, db):
        limit = get_settings().max_payload_bytes
        resp = client.put("/files/big.bin", content=b"x" * (limit + 1))
        assert resp.status_code == 413
        assert resp.json()["error"] == "PAYLOAD_TOO_LARGE"
        assert not FileRepository(db).exists(ByPath("big.bin"))

    def test_streamed_body_over_limit_is_413(self, client, db):
        limit = get_settings().max_payload_bytes

        def chunks():
            # A generator body is sent chunked, without Content-Length.
            for _ in range(limit // 1024 + 1):
                yield b"x" * 1024

        resp = client.put("/files/big.bin", content=chunks())
        assert resp.status_code == 413
        assert not FileRepository(db).exists(ByPath("big.bin"))

    def test_body_at_limit_is_accepted(self, client):
        limit = get_settings().max_payload_bytes
        resp = client.put("/files/big.bin", content=b"x" * limit)
        assert resp.status_code == 201


class TestDelete:

    def test_delete_file(self, client):
        client.put("/files/a/f.txt", content=b"x")
        resp = client.delete("/files/a/f.txt")
        assert resp.status_code == 204
        assert client.get("/files/a/f.txt").status_code == 404

    def test_delete_missing_is_404(self, client):
        resp = client.delete("/files/ghost.txt", headers={"If-Match": '"x"'})
        assert resp.status_code == 404

    def test_delete_with_stale_etag_is_412(self, client):
        client.put("/files/f.txt", content=b"x")
        resp = client.delete("/files/f.txt", headers={"If-Match": '"stale"'})
        assert resp.status_code == 412

    def test_delete_if_unmodified_since(self, client):
        put = client.put("/files/f.txt", content=b"x")
        last_modified = parse_http_date(put.headers["last-modified"])
        earlier = format_http_date(last_modified - timedelta(seconds=1))

        resp = client.delete("/files/f.txt", headers={"If-Unmodified-Since": earlier})
        assert resp.status_code == 412
        assert client.get("/files/f.txt").status_code == 200

        current = put.headers["last-modified"]
        resp = client.delete("/files/f.txt", headers={"If-Unmodified-Since": current})
        assert resp.status_code == 204

    def test_delete_file_used_by_boilerplate_is_400(self, client):
        client.put("/files/a/b/c.txt", content=b"hi")
        assert client.put("/boilerplates/demo", json={"client/x": "a/b/c.txt"}).status_code == 201

        resp = client.delete("/files/a/b/c.txt")
        assert resp.status_code == 400
        assert "demo" in resp.json()["message"]
        assert resp.json()["details"]["boilerplates"] == ["demo"]
