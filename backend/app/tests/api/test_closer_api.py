from datetime import timedelta

from salescrm.services.clock import local_now


def test_closer_dashboard(client, make_user, make_appointment):
    closer = make_user("Max Closer")
    appointment = make_appointment(closer=closer)
    make_appointment(closer=closer, scheduled_at=local_now() + timedelta(days=1))

    response = client.get(f"/api/closer/dashboard/{closer.id}")

    assert response.status_code == 200
    body = response.json()
    assert [item["id"] for item in body["todays_appointments"]] == [appointment.id]
    assert body["todays_appointments"][0]["lead"]["campaign"] == "Spring funnel"
    assert body["stats"] == {"total_calls": 0, "total_wins": 0, "total_revenue": 0}


def test_closer_dashboard_lists_follow_ups(client, make_user, make_appointment):
    closer = make_user()
    follow_up_date = (local_now() + timedelta(days=3)).isoformat()
    client.post(
        "/api/closer/deal/create",
        json={
            "appointment_id": make_appointment(closer=closer).id,
            "status": "FOLLOW_UP",
            "follow_up_date": follow_up_date,
            "product_price": 800,
            "payment_type": "FULL",
        },
    )

    body = client.get(f"/api/closer/dashboard/{closer.id}").json()

    assert [item["product_price"] for item in body["follow_ups"]] == [800]


def test_complete_appointment_counts_call(client, make_user, make_appointment):
    closer = make_user()
    appointment = make_appointment(closer=closer)

    response = client.post(
        f"/api/closer/appointment/{appointment.id}/complete",
        json={
            "status": "COMPLETED",
            "showed_up": True,
            "call_duration": 45,
            "notes": "Wants the premium plan",
        },
    )

    assert response.status_code == 200
    assert response.json()["call_duration"] == 45
    stats = client.get(f"/api/closer/dashboard/{closer.id}").json()["stats"]
    assert stats["total_calls"] == 1


def test_no_show_report_does_not_count_call(client, make_user, make_appointment):
    closer = make_user()
    appointment = make_appointment(closer=closer)

    response = client.post(
        f"/api/closer/appointment/{appointment.id}/complete",
        json={"status": "NO_SHOW_FORGOT", "showed_up": False, "no_show_reason": "Forgot"},
    )

    assert response.json()["no_show_reason"] == "Forgot"
    stats = client.get(f"/api/closer/dashboard/{closer.id}").json()["stats"]
    assert stats["total_calls"] == 0


def test_negative_call_duration_is_rejected(client, make_appointment):
    response = client.post(
        f"/api/closer/appointment/{make_appointment().id}/complete",
        json={"status": "COMPLETED", "showed_up": True, "call_duration": -5},
    )

    assert response.status_code == 400


def test_deal_created_after_call_belongs_to_appointment_closer(
    client, make_user, make_appointment
):
    closer, other = make_user("Max Closer"), make_user("Lena Closer")
    appointment = make_appointment(closer=closer)

    response = client.post(
        "/api/closer/deal/create",
        json={
            "appointment_id": appointment.id,
            "closer_id": other.id,
            "product_price": 1200,
            "payment_type": "FULL",
        },
    )

    assert response.status_code == 200
    assert response.json()["closer_id"] == closer.id


def test_lead_call_sheet(client, make_lead):
    lead = make_lead()

    response = client.get(f"/api/closer/lead/{lead.id}")

    assert response.status_code == 200
    assert response.json()["name"] == "Jonas Weber"
    assert response.json()["campaign"] == "Spring funnel"
    assert response.json()["notes"] == ""


def test_unknown_closer_and_lead(client):
    assert client.get("/api/closer/dashboard/11").status_code == 404
    assert client.get("/api/closer/lead/11").status_code == 404


def test_call_report_must_leave_scheduled(client, make_user, make_appointment):
    closer = make_user()
    appointment = make_appointment(closer=closer)
    url = f"/api/closer/appointment/{appointment.id}/complete"

    responses = [
        client.post(url, json={"status": "SCHEDULED", "showed_up": True})
        for _ in range(3)
    ]

    assert [response.status_code for response in responses] == [400, 400, 400]
    stats = client.get(f"/api/closer/dashboard/{closer.id}").json()["stats"]
    assert stats["total_calls"] == 0


def test_repeated_call_report_counts_once(client, make_user, make_appointment):
    closer = make_user()
    appointment = make_appointment(closer=closer)
    url = f"/api/closer/appointment/{appointment.id}/complete"
    report = {"status": "COMPLETED", "showed_up": True}

    first = client.post(url, json=report)
    second = client.post(url, json=report)

    assert first.status_code == 200
    assert second.status_code == 400
    stats = client.get(f"/api/closer/dashboard/{closer.id}").json()["stats"]
    assert stats["total_calls"] == 1
