"""Log API integration tests."""

from httpx import AsyncClient

from revline.api.v1 import logs
from revline.config import settings


class TestLogAPI:
    """Tests for log API endpoints."""

    class TestListLogs:
        """SUT: list_logs"""

        async def test_empty(self, client: AsyncClient):
            response = await client.get("/api/v1/logs")
            assert response.status_code == 200
            assert response.json()["logs"] == []

        async def test_after_append(self, client: AsyncClient):
            await client.post("/api/v1/logs/app.log/lines", json={"lines": ["hello"]})

            response = await client.get("/api/v1/logs")
            assert response.status_code == 200
            assert response.json()["logs"] == [{"name": "app.log", "size": 6}]

        async def test_not_initialized(self, client: AsyncClient):
            """Should return 500 when no log manager is configured."""
            logs.log_manager = None
            response = await client.get("/api/v1/logs")
            assert response.status_code == 500

    class TestTail:
        """SUT: tail_log"""

        async def test_newest_first(self, client: AsyncClient, log_manager):
            (log_manager.base_dir / "app.log").write_bytes(b"l1\r\nl2\r\nl3\r\n")

            response = await client.get("/api/v1/logs/app.log/tail", params={"lines": 2})
            assert response.status_code == 200
            data = response.json()
            assert data == {"name": "app.log", "lines": ["l3", "l2"], "count": 2}
            assert (log_manager.base_dir / "app.log").read_bytes() == b"l1\r\nl2\r\nl3\r\n"

        async def test_default_line_count(self, client: AsyncClient, log_manager):
            content = "".join(f"{i}\n" for i in range(settings.default_tail_lines + 5))
            (log_manager.base_dir / "many.log").write_text(content)

            response = await client.get("/api/v1/logs/many.log/tail")
            assert response.status_code == 200
            assert response.json()["count"] == settings.default_tail_lines

        async def test_not_found(self, client: AsyncClient):
            response = await client.get("/api/v1/logs/missing.log/tail")
            assert response.status_code == 404

        async def test_invalid_name(self, client: AsyncClient):
            response = await client.get("/api/v1/logs/.secret/tail")
            assert response.status_code == 400

        async def test_zero_lines_rejected(self, client: AsyncClient):
            response = await client.get("/api/v1/logs/app.log/tail", params={"lines": 0})
            assert response.status_code == 422

        async def test_too_many_lines(self, client: AsyncClient):
            response = await client.get(
                "/api/v1/logs/app.log/tail",
                params={"lines": settings.max_tail_lines + 1}
            )
            assert response.status_code == 400

    class TestPop:
        """SUT: pop_log"""

        async def test_pop(self, client: AsyncClient, log_manager):
            path = log_manager.base_dir / "queue.log"
            path.write_bytes(b"a\nb\nc\n")

            response = await client.post("/api/v1/logs/queue.log/pop", json={"count": 2})
            assert response.status_code == 200
            data = response.json()
            assert data["lines"] == ["c", "b"]
            assert data["count"] == 2
            assert data["remaining_bytes"] == 2
            assert path.read_bytes() == b"a\n"

        async def test_default_count(self, client: AsyncClient, log_manager):
            (log_manager.base_dir / "queue.log").write_bytes(b"a\nb\n")

            response = await client.post("/api/v1/logs/queue.log/pop", json={})
            assert response.status_code == 200
            assert response.json()["lines"] == ["b"]

        async def test_pop_empty_log(self, client: AsyncClient, log_manager):
            (log_manager.base_dir / "queue.log").write_bytes(b"")

            response = await client.post("/api/v1/logs/queue.log/pop", json={"count": 3})
            assert response.status_code == 200
            assert response.json()["lines"] == []

        async def test_not_found(self, client: AsyncClient):
            response = await client.post("/api/v1/logs/missing.log/pop", json={"count": 1})
            assert response.status_code == 404

        async def test_invalid_count(self, client: AsyncClient):
            response = await client.post("/api/v1/logs/queue.log/pop", json={"count": 0})
            assert response.status_code == 422

    class TestAppend:
        """SUT: append_log"""

        async def test_append_then_pop_is_lifo(self, client: AsyncClient):
            response = await client.post(
                "/api/v1/logs/stack.log/lines",
                json={"lines": ["one", "two", "three"]}
            )
            assert response.status_code == 201
            data = response.json()
            assert data == {"name": "stack.log", "appended": 3, "size": 14}

            response = await client.post("/api/v1/logs/stack.log/pop", json={"count": 2})
            assert response.json()["lines"] == ["three", "two"]

            await client.post("/api/v1/logs/stack.log/lines", json={"lines": ["four"]})
            response = await client.post("/api/v1/logs/stack.log/pop", json={"count": 5})
            assert response.json()["lines"] == ["four", "one"]

        async def test_rejects_embedded_newline(self, client: AsyncClient):
            response = await client.post(
                "/api/v1/logs/stack.log/lines",
                json={"lines": ["bad\nline"]}
            )
            assert response.status_code == 422

        async def test_rejects_empty_list(self, client: AsyncClient):
            response = await client.post("/api/v1/logs/stack.log/lines", json={"lines": []})
            assert response.status_code == 422

        async def test_invalid_name(self, client: AsyncClient):
            response = await client.post("/api/v1/logs/.x/lines", json={"lines": ["a"]})
            assert response.status_code == 400
