from app.constants.constants import Ledger

STUDENT = {
    "name": "Asha Rao",
    "regNo": "RA2111003010",
    "department": "CSE",
    "year": 3,
    "email": "asha@college.edu",
    "phone": "9876543210",
}

GUEST = {
    "name": "Vikram Shah",
    "rollNo": "21BCE1042",
    "college": "VIT Chennai",
    "department": "ECE",
    "email": "vikram@vit.ac.in",
    "phone": "9123456780",
}


def test_health_check(client):
    response = client.get("/")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["notifier"] == "fake"
    assert body["ledger"] == "in-memory"
    assert body["schedulers_running"] == 1


def test_send_otp_never_echoes_code(client, notifier):
    response = client.post("/api/send-otp", json={"email": "u@x.com"})

    assert response.status_code == 200
    assert response.json() == {"success": True}
    code = notifier.last_code()
    assert code is not None
    assert code not in response.text


def test_send_otp_invalid_email(client, notifier):
    response = client.post("/api/send-otp", json={"email": "nope"})
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert notifier.sent == []


def test_send_otp_missing_body_field(client):
    response = client.post("/api/send-otp", json={})
    assert response.status_code == 400


def test_send_otp_malformed_json_is_400(client):
    response = client.post("/api/send-otp", content="{", headers={"content-type": "application/json"})
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_send_otp_rate_limited_on_sixth_request(client):
    for i in range(5):
        assert client.post("/api/send-otp", json={"email": f"u{i}@x.com"}).status_code == 200

    response = client.post("/api/send-otp", json={"email": "u9@x.com"})
    assert response.status_code == 429
    assert response.json()["success"] is False
    assert "retry-after" in response.headers


def test_send_otp_dispatch_failure_is_500(client, notifier):
    notifier.fail = True
    response = client.post("/api/send-otp", json={"email": "u@x.com"})
    assert response.status_code == 500
    assert response.json()["success"] is False


def test_verify_otp_flow(client, notifier):
    client.post("/api/send-otp", json={"email": "u@x.com"})
    code = notifier.last_code()
    wrong = "000000" if code != "000000" else "111111"

    bad = client.post("/api/verify-otp", json={"email": "u@x.com", "otp": wrong})
    assert bad.status_code == 400
    assert bad.json()["verified"] is False

    ok = client.post("/api/verify-otp", json={"email": "U@X.com", "otp": code})
    assert ok.status_code == 200
    assert ok.json() == {"verified": True}

    again = client.post("/api/verify-otp", json={"email": "u@x.com", "otp": code})
    assert again.status_code == 400
    assert again.json()["verified"] is False


def test_verify_otp_invalid_input(client):
    response = client.post("/api/verify-otp", json={"email": "u@x.com", "otp": "12"})
    assert response.status_code == 400
    assert response.json() == {"verified": False, "message": "Invalid email or OTP"}


def test_unknown_and_wrong_codes_get_the_same_message(client, notifier):
    client.post("/api/send-otp", json={"email": "known@x.com"})
    code = notifier.last_code()
    wrong = "000000" if code != "000000" else "111111"

    unknown = client.post("/api/verify-otp", json={"email": "unknown@x.com", "otp": wrong})
    mismatch = client.post("/api/verify-otp", json={"email": "known@x.com", "otp": wrong})
    assert unknown.json() == mismatch.json()


def test_save_student_then_duplicate(client, ledger_store):
    first = client.post("/api/save-student", json=STUDENT)
    assert first.status_code == 200
    assert first.json() == {"success": True}
    assert ledger_store.rows[Ledger.student][0][4] == "3"

    second = client.post("/api/save-student", json=STUDENT)
    assert second.status_code == 409
    assert second.json()["success"] is False


def test_save_guest_with_student_email_succeeds(client):
    assert client.post("/api/save-student", json=STUDENT).status_code == 200
    response = client.post("/api/save-guest", json={**GUEST, "email": STUDENT["email"]})
    assert response.status_code == 200


def test_save_guest_missing_field(client, ledger_store):
    response = client.post("/api/save-guest", json={**GUEST, "college": ""})
    assert response.status_code == 400
    assert response.json()["missing"] == ["college"]
    assert ledger_store.rows[Ledger.guest] == []


def test_update_payment_status_for_student(client, ledger_store, notifier):
    client.post("/api/save-student", json=STUDENT)

    response = client.post(
        "/api/update-payment-status",
        json={"email": STUDENT["email"], "transactionId": "UTR998877", "paymentStatus": "paid"},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert ledger_store.rows[Ledger.student][0][7:] == ["paid", "UTR998877"]
    assert notifier.sent[-1]["to"] == STUDENT["email"]
    assert "UTR998877" in notifier.sent[-1]["subject"]


def test_update_payment_status_for_guest_is_noop_success(client, ledger_store):
    client.post("/api/save-guest", json={**GUEST, "email": "a@b.com"})
    before = [list(row) for row in ledger_store.rows[Ledger.guest]]

    response = client.post(
        "/api/update-payment-status",
        json={"email": "a@b.com", "transactionId": "TXN123", "paymentStatus": "paid"},
    )

    assert response.status_code == 200
    assert ledger_store.rows[Ledger.guest] == before


def test_update_payment_status_unknown_email(client):
    response = client.post(
        "/api/update-payment-status",
        json={"email": "ghost@x.com", "transactionId": "TXN123", "paymentStatus": "paid"},
    )
    assert response.status_code == 500
    assert response.json()["success"] is False


def test_update_payment_status_missing_field(client):
    response = client.post("/api/update-payment-status", json={"email": "a@b.com", "paymentStatus": "paid"})
    assert response.status_code == 400


def test_confirmation_failure_does_not_fail_payment_update(client, notifier):
    client.post("/api/save-student", json=STUDENT)
    notifier.fail = True

    response = client.post(
        "/api/update-payment-status",
        json={"email": STUDENT["email"], "transactionId": "UTR1", "paymentStatus": "paid"},
    )
    assert response.status_code == 200


def test_ticket_info(client):
    body = client.get("/api/ticket-info").json()
    assert body["event"] == "VYOMANG"
    assert body["price"] == 800
    assert body["currency"] == "INR"
    fields = {p["type"]: [f["name"] for f in p["fields"]] for p in body["passes"]}
    assert fields["student"] == ["name", "regNo", "department", "year", "email", "phone"]
    assert fields["guest"] == ["name", "rollNo", "college", "department", "email", "phone"]


def test_payment_qr(client):
    response = client.get("/api/payment-qr", params={"email": "asha@college.edu"})
    assert response.status_code == 200
    body = response.json()
    assert body["paymentUri"].startswith("upi://pay?pa=vyomang%40okaxis")
    assert "am=800" in body["paymentUri"]
    assert body["qrCode"].startswith("data:image/png;base64,")
    assert body["email"] == "asha@college.edu"


def test_payment_confirmation_escapes_submitted_values(client, notifier):
    client.post("/api/save-student", json=STUDENT)
    link = '<a href="https://evil.example/pay">Payment failed, click to retry</a>'

    response = client.post(
        "/api/update-payment-status",
        json={"email": STUDENT["email"], "transactionId": link, "paymentStatus": "paid\r\nBcc: x@y.com"},
    )

    assert response.status_code == 200
    message = notifier.sent[-1]
    assert "&lt;a href=&quot;https://evil.example/pay&quot;&gt;" in message["html"]
    assert "<a href" not in message["html"]
    assert "\r" not in message["subject"] and "\n" not in message["subject"]


def test_slowapi_limiter_is_registered_but_otp_throttling_is_separate(client):
    from slowapi.errors import RateLimitExceeded

    from app.main import app

    assert app.state.limiter is not None
    assert RateLimitExceeded in app.exception_handlers
    for i in range(5):
        client.post("/api/send-otp", json={"email": f"u{i}@x.com"})
    assert client.post("/api/send-otp", json={"email": "u9@x.com"}).json()["success"] is False
