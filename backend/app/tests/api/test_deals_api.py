from salescrm.repositories.crm.models.enums import UserRole


def _installment_deal(appointment_id: int) -> dict:
    return {
        "appointment_id": appointment_id,
        "product_price": 1500,
        "payment_type": "INSTALLMENTS",
        "down_payment": 500,
        "monthly_rate": 250,
        "number_of_rates": 4,
    }


def test_installment_deal_and_payment(client, make_appointment):
    appointment = make_appointment()

    created = client.post("/api/deals", json=_installment_deal(appointment.id))

    assert created.status_code == 201
    deal = created.json()
    assert deal["status"] == "WON"
    assert deal["total_value"] == 1500
    assert deal["paid_amount"] == 0

    payment = client.post(
        f"/api/deals/{deal['id']}/payments", json={"amount": 500, "note": "Rate 1"}
    )
    assert payment.status_code == 201

    fetched = client.get(f"/api/deals/{deal['id']}").json()
    assert fetched["total_value"] == 1500
    assert fetched["paid_amount"] == 500
    assert [p["amount"] for p in fetched["payments"]] == [500]
    assert fetched["lead_name"] == "Jonas Weber"


def test_full_payment_defaults_to_product_price(client, make_appointment):
    appointment = make_appointment()

    response = client.post(
        "/api/deals",
        json={
            "appointment_id": appointment.id,
            "product_price": 2500,
            "payment_type": "FULL",
        },
    )

    deal = response.json()
    assert deal["full_amount"] == 2500
    assert deal["total_value"] == 2500
    assert deal["paid_amount"] == 2500


def test_installments_require_rates(client, make_appointment):
    payload = _installment_deal(make_appointment().id)
    del payload["monthly_rate"]

    response = client.post("/api/deals", json=payload)

    assert response.status_code == 400
    assert response.json() == {"detail": "Invalid data"}


def test_negative_price_is_rejected(client, make_appointment):
    payload = dict(_installment_deal(make_appointment().id), product_price=-1)

    assert client.post("/api/deals", json=payload).status_code == 400


def test_second_deal_for_appointment(client, make_appointment):
    appointment = make_appointment()
    client.post("/api/deals", json=_installment_deal(appointment.id))

    response = client.post("/api/deals", json=_installment_deal(appointment.id))

    assert response.status_code == 400
    assert response.json()["detail"] == "Appointment already has a deal"


def test_deal_for_unknown_appointment(client):
    assert client.post("/api/deals", json=_installment_deal(3)).status_code == 404


def test_follow_up_to_won(client, make_appointment):
    appointment = make_appointment()
    payload = dict(_installment_deal(appointment.id), status="FOLLOW_UP")
    deal = client.post("/api/deals", json=payload).json()
    assert deal["closed_at"] is None

    response = client.put(f"/api/deals/{deal['id']}", json={"status": "WON"})

    assert response.status_code == 200
    assert response.json()["closed_at"] is not None
    users = client.get("/api/admin/users").json()
    assert users[0]["total_wins"] == 1
    assert users[0]["total_revenue"] == 1500


def test_won_deal_cannot_be_lost(client, make_appointment):
    deal = client.post("/api/deals", json=_installment_deal(make_appointment().id)).json()

    response = client.put(f"/api/deals/{deal['id']}", json={"status": "LOST"})

    assert response.status_code == 400


def test_list_deals_by_status(client, make_appointment):
    client.post("/api/deals", json=_installment_deal(make_appointment().id))
    pending = dict(_installment_deal(make_appointment().id), status="PENDING")
    client.post("/api/deals", json=pending)

    response = client.get("/api/deals", params={"status": "PENDING"})

    assert [deal["status"] for deal in response.json()] == ["PENDING"]


def test_payment_must_be_positive(client, make_appointment):
    deal = client.post("/api/deals", json=_installment_deal(make_appointment().id)).json()

    response = client.post(f"/api/deals/{deal['id']}/payments", json={"amount": 0})

    assert response.status_code == 400


def test_payment_for_unknown_deal(client):
    assert client.post("/api/deals/9/payments", json={"amount": 10}).status_code == 404


def test_deal_for_admin_closer_is_rejected(client, make_user, make_appointment):
    admin = make_user("Anna Admin", role=UserRole.ADMIN)
    payload = dict(_installment_deal(make_appointment().id), closer_id=admin.id)

    response = client.post("/api/deals", json=payload)

    assert response.status_code == 400
    assert client.get("/api/deals").json() == []
