from src.models import AnalyticsEvent, ContactMessage, NewsletterSubscriber, PlanMyTripRequest

ADMIN_EMAIL = "admin@angoni.test"

TRIP = {
    "full_name": "Juma Kweka",
    "email": "juma@example.com",
    "phone": "+255 700 000 002",
    "destination": "Serengeti",
    "start_date": "2026-12-01",
    "end_date": "2026-12-08",
    "travelers": 4,
    "interests": ["wildlife", "photography"],
}


def test_plan_trip_request(client, mailer, db_session):
    response = client.post("/api/plan-trip", json=TRIP)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["request"]["full_name"] == "Juma Kweka"
    assert body["request"]["status"] == "new"
    assert db_session.query(PlanMyTripRequest).count() == 1

    alert = mailer.sent[0]
    assert alert["to"] == ADMIN_EMAIL
    assert alert["subject"] == "New Plan My Trip Request"
    assert "Serengeti" in alert["html"]

    event = db_session.query(AnalyticsEvent).filter(AnalyticsEvent.event_type == "plan_trip_request").one()
    assert event.event_data == {"email": "juma@example.com"}


def test_plan_trip_survives_mail_outage(client, mailer, db_session):
    mailer.fail = True

    response = client.post("/api/plan-trip", json=TRIP)

    assert response.status_code == 200
    assert db_session.query(PlanMyTripRequest).count() == 1


def test_plan_trip_rejects_inverted_dates(client):
    response = client.post("/api/plan-trip", json={**TRIP, "end_date": "2026-11-01"})

    assert response.status_code == 422
    assert response.json()["success"] is False


def test_list_trip_requests(client):
    client.post("/api/plan-trip", json=TRIP)
    client.post("/api/plan-trip", json={**TRIP, "full_name": "Neema Lyimo", "email": "neema@example.com"})

    requests = client.get("/api/plan-trip").json()["requests"]

    assert [r["full_name"] for r in requests] == ["Neema Lyimo", "Juma Kweka"]


def test_newsletter_subscribe(client, db_session):
    response = client.post("/api/newsletter/subscribe", json={"email": "fan@example.com"})

    assert response.json() == {"success": True, "message": "Subscribed successfully"}
    assert db_session.query(NewsletterSubscriber).count() == 1
    assert db_session.query(AnalyticsEvent).filter(
        AnalyticsEvent.event_type == "newsletter_subscribe"
    ).count() == 1


def test_newsletter_duplicate_returns_400(client):
    client.post("/api/newsletter/subscribe", json={"email": "fan@example.com"})

    response = client.post("/api/newsletter/subscribe", json={"email": "Fan@Example.com"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Email already subscribed"}


def test_newsletter_rejects_invalid_email(client):
    response = client.post("/api/newsletter/subscribe", json={"email": "not-an-email"})

    assert response.status_code == 422


def test_contact_message(client, mailer, db_session):
    response = client.post("/api/contact", json={
        "name": "<i>Eve</i>",
        "email": "eve@example.com",
        "subject": "Group booking",
        "message": "Do you have space for 12 people?",
    })

    assert response.json() == {"success": True, "message": "Message sent successfully"}
    assert db_session.query(ContactMessage).count() == 1
    alert = mailer.sent[0]
    assert alert["subject"] == "New Contact Message: Group booking"
    assert "&lt;i&gt;Eve&lt;/i&gt;" in alert["html"]


def test_contact_survives_mail_outage(client, mailer):
    mailer.fail = True

    response = client.post("/api/contact", json={
        "name": "Eve", "email": "eve@example.com", "message": "Hello"
    })

    assert response.status_code == 200
    assert response.json()["success"] is True
