"""Tests for /dirs endpoints."""


class TestListing:

    def test_list_root(self, client):
        client.put("/files/top.txt", content=b"x")
        client.put("/dirs/docs")
        resp = client.get("/dirs/")
        assert resp.status_code == 200
        assert resp.json() == ["docs/", "top.txt"]

    def test_list_directory_sorted(self, client):
        client.put("/files/d/b.txt", content=b"x")
        client.put("/files/d/a.txt", content=b"x")
        client.put("/dirs/d/sub")
        assert client.get("/dirs/d").json() == ["sub/", "a.txt", "b.txt"]

    def test_list_missing_is_404(self, client):
        assert client.get("/dirs/nope").status_code == 404

    def test_list_file_is_400(self, client):
        client.put("/files/f.txt", content=b"x")
        assert client.get("/dirs/f.txt").status_code == 400


class TestCreate:

    def test_put_creates_then_is_idempotent(self, client):
        assert client.put("/dirs/a/b").status_code == 201
        assert client.put("/dirs/a/b").status_code == 204
        assert client.get("/dirs/a").json() == ["b/"]

    def test_put_root_is_204(self, client):
        assert client.put("/dirs/").status_code == 204


class TestDelete:

    def test_delete_empty_directory(self, client):
        client.put("/dirs/a/b")
        assert client.delete("/dirs/a/b").status_code == 204
        assert client.get("/dirs/a").json() == []

    def test_delete_non_empty_then_empty(self, client):
        client.put("/files/a/f.txt", content=b"x")
        resp = client.delete("/dirs/a")
        assert resp.status_code == 400
        assert resp.json()["message"] == "directory not empty"

        client.delete("/files/a/f.txt")
        assert client.delete("/dirs/a").status_code == 204

    def test_delete_missing_is_404(self, client):
        assert client.delete("/dirs/ghost").status_code == 404

    def test_delete_root_is_400(self, client):
        assert client.delete("/dirs/").status_code == 400

    def test_delete_directory_used_by_boilerplate_is_400(self, client):
        client.put("/files/a/b/c.txt", content=b"x")
        client.put("/boilerplates/demo", json={"x": "a/b/c.txt"})
        resp = client.delete("/dirs/a")
        assert resp.status_code == 400
        assert resp.json()["details"]["boilerplates"] == ["demo"]
