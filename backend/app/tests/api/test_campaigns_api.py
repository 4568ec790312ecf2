from salescrm.repositories.crm.models.enums import AppointmentStatus


CAMPAIGN = {
    "name": "Autumn webinar",
    "budget": 2500,
    "start_date": "2026-10-01T00:00:00",
    "end_date": "2026-10-31T00:00:00",
}


def test_create_and_get_campaign(client):
    response = client.post("/api/campaigns", json=CAMPAIGN)

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Autumn webinar"
    assert body["status"] == "ACTIVE"

    fetched = client.get(f"/api/campaigns/{body['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["budget"] == 2500


def test_create_campaign_rejects_bad_dates(client):
    payload = dict(CAMPAIGN, end_date="2026-09-01T00:00:00")

    response = client.post("/api/campaigns", json=payload)

    assert response.status_code == 400
    assert response.json() == {"detail": "Invalid data"}


def test_create_campaign_rejects_missing_name(client):
    payload = {key: value for key, value in CAMPAIGN.items() if key != "name"}

    assert client.post("/api/campaigns", json=payload).status_code == 400


def test_list_campaigns_counts_leads(client, make_campaign, make_lead):
    campaign = make_campaign("With leads")
    make_lead(campaign)
    make_lead(campaign, first_name="Mia")
    make_campaign("Empty")

    response = client.get("/api/campaigns")

    assert response.status_code == 200
    counts = {item["name"]: item["lead_count"] for item in response.json()}
    assert counts == {"With leads": 2, "Empty": 0}


def test_update_campaign_status(client, make_campaign):
    campaign = make_campaign()

    response = client.put(f"/api/campaigns/{campaign.id}", json={"status": "PAUSED"})

    assert response.status_code == 200
    assert response.json()["status"] == "PAUSED"


def test_update_campaign_end_before_start(client, make_campaign):
    campaign = make_campaign()

    response = client.put(
        f"/api/campaigns/{campaign.id}", json={"end_date": "2025-12-01T00:00:00"}
    )

    assert response.status_code == 400


def test_campaign_stats(client, make_campaign, make_lead, make_appointment):
    campaign = make_campaign()
    make_appointment(lead=make_lead(campaign), status=AppointmentStatus.NO_SHOW)
    make_appointment(lead=make_lead(campaign))
    make_lead(campaign)

    response = client.get(f"/api/campaigns/{campaign.id}/stats")

    assert response.status_code == 200
    assert response.json()["stats"] == {
        "total_leads": 3,
        "appointments": 2,
        "deals_won": 0,
        "no_shows": 1,
    }


def test_unknown_campaign(client):
    assert client.get("/api/campaigns/42").status_code == 404
    assert client.get("/api/campaigns/42/stats").status_code == 404


def test_update_campaign_rejects_null_for_required_field(client, make_campaign):
    campaign = make_campaign()

    response = client.put(f"/api/campaigns/{campaign.id}", json={"budget": None})

    assert response.status_code == 400
    assert response.json() == {"detail": "Invalid data"}
    assert client.get(f"/api/campaigns/{campaign.id}").json()["budget"] == 1000


def test_update_campaign_can_clear_end_date(client, make_campaign):
    campaign = make_campaign()

    response = client.put(f"/api/campaigns/{campaign.id}", json={"end_date": None})

    assert response.status_code == 200
    assert response.json()["end_date"] is None
