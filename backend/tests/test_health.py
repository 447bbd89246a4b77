def test_health_ok(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "ok"
    assert body["catalogue"] is True
    assert body["payment_adapter"] is True
    assert body["orders"] == 0
