from datetime import datetime


class TestHealth:
    def test_healthy_without_auth(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00"))

    def test_ignores_bad_credentials(self, client):
        response = client.get("/health", headers={"Authorization": "Bearer wrong-token"})
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_after_webhook_traffic(self, client, auth_headers):
        client.post("/webhook", content=b"{broken", headers=auth_headers)
        client.post("/webhook", json={"event": "ping"}, headers=auth_headers)
        assert client.get("/health").status_code == 200
