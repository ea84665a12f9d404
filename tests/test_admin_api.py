def test_stats_on_empty_store(client, make_vehicle):
    make_vehicle(name="Land Cruiser")

    response = client.get("/api/admin/stats")

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "stats": {
            "totalBookings": 0,
            "totalRevenue": 0,
            "totalCustomers": 0,
            "activeVehicles": 1,
        },
    }


def test_stats_aggregate_bookings(client, make_booking, make_vehicle):
    make_booking(payment_status="paid", total_amount="100", lead_email="a@x.com")
    make_booking(payment_status="pending", total_amount="50", lead_email="a@x.com")
    make_booking(payment_status="paid", total_amount="25", lead_email="b@x.com")
    make_vehicle(status="available")
    make_vehicle(status="booked")

    stats = client.get("/api/admin/stats").json()["stats"]

    assert stats == {
        "totalBookings": 3,
        "totalRevenue": 125,
        "totalCustomers": 2,
        "activeVehicles": 1,
    }


def test_stats_reflect_payment_updates(client, make_booking):
    booking = make_booking(payment_status="pending", total_amount="80")
    assert client.get("/api/admin/stats").json()["stats"]["totalRevenue"] == 0

    client.put(f"/api/bookings/{booking.id}", json={"payment_status": "paid"})

    assert client.get("/api/admin/stats").json()["stats"]["totalRevenue"] == 80


def test_analytics_replays_booking_events(client, booking_payload):
    created = client.post("/api/bookings", json=booking_payload).json()["booking"]
    client.get("/api/packages")

    response = client.get("/api/admin/analytics", params={"event_type": "booking_created"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert len(body["analytics"]) == 1
    event = body["analytics"][0]
    assert event["event_type"] == "booking_created"
    assert event["event_data"]["booking_reference"] == created["booking_reference"]
    assert event["user_ip"] == "testclient"


def test_analytics_without_filter_returns_all_recent(client, booking_payload):
    client.post("/api/bookings", json=booking_payload)
    client.get("/api/shuttles")

    analytics = client.get("/api/admin/analytics").json()["analytics"]

    assert {e["event_type"] for e in analytics} == {"booking_created", "shuttles_viewed"}


def test_analytics_rejects_negative_window(client):
    response = client.get("/api/admin/analytics", params={"days": -1})

    assert response.status_code == 422
    assert response.json()["success"] is False
