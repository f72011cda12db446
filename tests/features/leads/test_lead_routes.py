from unittest.mock import AsyncMock, patch

from sqlalchemy.exc import OperationalError


def post_sms(client, body, sid, sender="+15551234567"):
    return client.post(
        "/webhook/sms",
        data={"From": sender, "To": "+15550001111", "Body": body, "MessageSid": sid},
    )


def test_list_leads_empty(client):
    response = client.get("/api/leads")

    assert response.status_code == 200
    assert response.json() == {"leads": []}


def test_list_leads_newest_first(client):
    post_sms(client, "Is the 2 bedroom available?", "SM1")
    post_sms(client, "Something is broken in the kitchen", "SM2")
    post_sms(client, "Hi there", "SM3")

    response = client.get("/api/leads")

    assert response.status_code == 200
    leads = response.json()["leads"]
    assert [lead["message_sid"] for lead in leads] == ["SM3", "SM2", "SM1"]

    newest = leads[0]
    assert newest["category"] == "general"
    assert newest["urgency"] == 2
    assert newest["status"] == "new"
    assert newest["phone"] == "+15551234567"
    assert newest["message"] == "Hi there"
    assert newest["suggested_response"] == "Thanks for your message! I'll get back to you shortly."
    assert newest["created_at"]
    assert newest["updated_at"] is None


def test_duplicate_deliveries_create_duplicate_leads(client):
    post_sms(client, "Hi there", "SM-dup")
    post_sms(client, "Hi there", "SM-dup")

    leads = client.get("/api/leads").json()["leads"]
    assert [lead["message_sid"] for lead in leads] == ["SM-dup", "SM-dup"]


def test_list_leads_storage_error(client):
    with patch(
        "app.features.leads.routes.lead_route.LeadService.list_recent",
        new_callable=AsyncMock,
        side_effect=OperationalError("SELECT", {}, Exception("db down")),
    ):
        response = client.get("/api/leads")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch leads"}


def test_update_lead_status(client):
    post_sms(client, "Something is broken in the kitchen", "SM10")
    lead_id = client.get("/api/leads").json()["leads"][0]["id"]

    response = client.patch(f"/api/leads/{lead_id}", json={"status": "contacted"})

    assert response.status_code == 200
    assert response.json() == {"success": True}

    lead = client.get("/api/leads").json()["leads"][0]
    assert lead["status"] == "contacted"
    assert lead["updated_at"] is not None
    assert lead["category"] == "maintenance"


def test_update_unknown_lead_is_noop_success(client):
    response = client.patch("/api/leads/does-not-exist", json={"status": "closed"})

    assert response.status_code == 200
    assert response.json() == {"success": True}


def test_update_lead_storage_error(client):
    with patch(
        "app.features.leads.routes.lead_route.LeadService.update_status",
        new_callable=AsyncMock,
        side_effect=OperationalError("UPDATE", {}, Exception("db down")),
    ):
        response = client.patch("/api/leads/abc", json={"status": "closed"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to update lead"}


def test_update_lead_requires_status(client):
    response = client.patch("/api/leads/abc", json={})

    assert response.status_code == 422
    assert response.json()["error"] == "Validation failed"
