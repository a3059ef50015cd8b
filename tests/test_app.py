async def test_healthz_reports_database_and_scheduler(client):
    response = await client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "database": "connected",
        "scheduler": "stopped",
    }


async def test_request_id_is_echoed_or_generated(client):
    given = await client.get("/", headers={"X-Request-ID": "req-123"})
    generated = await client.get("/")

    assert given.headers["X-Request-ID"] == "req-123"
    assert generated.headers["X-Request-ID"]
    assert generated.headers["X-Request-ID"] != "req-123"
    assert "X-Process-Time" in given.headers
