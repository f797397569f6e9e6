"""API tests for /api/campaigns, /api/stats and /health."""
from datetime import datetime, timedelta, timezone

from conftest import T0


class TestHealth:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"


class TestAdminGuard:
    def test_list_requires_admin(self, client):
        assert client.get("/api/campaigns").status_code == 401

    def test_create_requires_admin(self, client, campaign_payload):
        assert client.post("/api/campaigns", json=campaign_payload).status_code == 401

    def test_bad_token(self, client):
        r = client.get("/api/campaigns", headers={"Authorization": "Bearer not-a-jwt"})
        assert r.status_code == 401

    def test_patch_and_delete_require_admin(self, client):
        assert client.patch("/api/campaigns/x", json={"sponsorName": "y"}).status_code == 401
        assert client.delete("/api/campaigns/x").status_code == 401


class TestCreateAndList:
    def test_create_forces_flags(self, client, admin_headers, campaign_payload):
        payload = dict(campaign_payload, isActive=False, hasWinner=True)
        r = client.post("/api/campaigns", json=payload, headers=admin_headers)

        assert r.status_code == 201, r.text
        body = r.json()
        assert body["isActive"] is True
        assert body["hasWinner"] is False
        assert body["secretCode"] == "WIN1"
        assert body["createdAt"].startswith("2026-03-01T12:00:00")
        assert body["id"]

    def test_create_validation_error(self, client, admin_headers, campaign_payload):
        payload = dict(campaign_payload)
        del payload["secretCode"]
        r = client.post("/api/campaigns", json=payload, headers=admin_headers)
        assert r.status_code == 422

    def test_list_returns_full_records(self, client, admin_headers, campaign_payload):
        client.post("/api/campaigns", json=campaign_payload, headers=admin_headers)
        r = client.get("/api/campaigns", headers=admin_headers)

        assert r.status_code == 200
        rows = r.json()
        assert len(rows) == 1
        assert rows[0]["secretCode"] == "WIN1"


class TestPublicViews:
    def _create(self, client, admin_headers, payload):
        r = client.post("/api/campaigns", json=payload, headers=admin_headers)
        assert r.status_code == 201, r.text
        return r.json()["id"]

    def test_no_active_campaign(self, client):
        r = client.get("/api/campaigns/active")
        assert r.status_code == 404

    def test_active_campaign_hides_code_while_pending(self, client, admin_headers, campaign_payload):
        cid = self._create(client, admin_headers, campaign_payload)

        r = client.get("/api/campaigns/active")
        assert r.status_code == 200
        body = r.json()
        assert body["id"] == cid
        assert body["phase"] == "pending"
        assert body["secretCode"] is None

    def test_code_revealed_at_countdown_end(self, client, clock, admin_headers, campaign_payload):
        cid = self._create(client, admin_headers, campaign_payload)
        clock.advance(minutes=30)

        body = client.get(f"/api/campaigns/{cid}").json()
        assert body["phase"] == "revealed"
        assert body["secretCode"] == "WIN1"

        # revealed campaigns are no longer the "active" one
        assert client.get("/api/campaigns/active").status_code == 404

    def test_active_prefers_most_recent(self, client, clock, admin_headers, campaign_payload):
        self._create(client, admin_headers, campaign_payload)
        clock.advance(minutes=1)
        newer = self._create(client, admin_headers, dict(campaign_payload, sponsorName="Newer"))

        assert client.get("/api/campaigns/active").json()["id"] == newer

    def test_unknown_campaign(self, client):
        r = client.get("/api/campaigns/does-not-exist")
        assert r.status_code == 404
        assert r.json()["code"] == "campaign_not_found"


class TestUpdateAndDelete:
    def test_patch(self, client, admin_headers, campaign_payload):
        cid = client.post("/api/campaigns", json=campaign_payload, headers=admin_headers).json()["id"]

        new_end = (T0 + timedelta(hours=2)).isoformat()
        r = client.patch(
            f"/api/campaigns/{cid}",
            json={"sponsorTagline": "Fresh", "countdownEnd": new_end, "hasWinner": True},
            headers=admin_headers,
        )
        assert r.status_code == 200, r.text
        body = r.json()
        assert body["sponsorTagline"] == "Fresh"
        assert body["countdownEnd"].startswith("2026-03-01T14:00:00")
        assert body["hasWinner"] is False

    def test_patch_unknown(self, client, admin_headers):
        r = client.patch("/api/campaigns/missing", json={"sponsorName": "x"}, headers=admin_headers)
        assert r.status_code == 404

    def test_delete(self, client, admin_headers, campaign_payload):
        cid = client.post("/api/campaigns", json=campaign_payload, headers=admin_headers).json()["id"]

        assert client.delete(f"/api/campaigns/{cid}", headers=admin_headers).status_code == 204
        assert client.get(f"/api/campaigns/{cid}").status_code == 404
        assert client.delete(f"/api/campaigns/{cid}", headers=admin_headers).status_code == 404


class TestStats:
    def test_counts(self, client, clock, admin_headers, campaign_payload):
        client.post("/api/campaigns", json=campaign_payload, headers=admin_headers)
        cid = client.post(
            "/api/campaigns",
            json=dict(campaign_payload, countdownEnd=T0.isoformat()),
            headers=admin_headers,
        ).json()["id"]
        client.post("/api/winners", json={"campaignId": cid, "winnerName": "Ann", "codeUsed": "WIN1"})

        r = client.get("/api/stats")
        assert r.status_code == 200
        assert r.json() == {"campaigns": 2, "winners": 1, "liveCampaigns": 1}


def parse_utc(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class TestTimestamps:
    def test_offset_countdown_comes_back_as_the_same_utc_instant(self, client, admin_headers, campaign_payload):
        payload = dict(campaign_payload, countdownEnd="2026-03-01T17:30:00+05:30")
        body = client.post("/api/campaigns", json=payload, headers=admin_headers).json()

        for field in ("countdownEnd", "createdAt"):
            assert body[field].endswith(("Z", "+00:00"))
        assert parse_utc(body["countdownEnd"]) == datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

        public = client.get(f"/api/campaigns/{body['id']}").json()
        assert parse_utc(public["countdownEnd"]) == datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
        assert public["createdAt"].endswith(("Z", "+00:00"))

    def test_won_at_carries_utc_offset(self, client, clock, admin_headers, campaign_payload):
        cid = client.post("/api/campaigns", json=campaign_payload, headers=admin_headers).json()["id"]
        clock.advance(minutes=30)

        body = client.post("/api/winners", json={"campaignId": cid, "winnerName": "Ann", "codeUsed": "WIN1"}).json()
        assert parse_utc(body["wonAt"]) == (T0 + timedelta(minutes=30)).replace(tzinfo=timezone.utc)


class TestRevealedCampaignById:
    def test_code_stays_visible_through_the_window_and_after(self, client, clock, admin_headers, campaign_payload):
        cid = client.post("/api/campaigns", json=campaign_payload, headers=admin_headers).json()["id"]
        assert client.get(f"/api/campaigns/{cid}").json()["secretCode"] is None

        clock.advance(minutes=30 + 59)
        body = client.get(f"/api/campaigns/{cid}").json()
        assert body["phase"] == "revealed"
        assert body["secretCode"] == "WIN1"

        clock.advance(minutes=1)
        body = client.get(f"/api/campaigns/{cid}").json()
        assert body["phase"] == "expired"
        assert body["secretCode"] == "WIN1"
        assert body["hasWinner"] is False
        assert client.get("/api/campaigns/active").status_code == 404
