"""Order confirmation email."""

from app.services import notification_service

SUMMARY = {
    "order_id": 42,
    "customer_name": "Ayesha",
    "package_name": "Mini Box",
    "quantity": 2,
    "delivery_date": "Wednesday, 11 March 2026",
    "order_type": "self",
    "total_amount": "358.20",
    "discount_amount": "39.80",
}


def test_skipped_without_smtp(monkeypatch):
    sent = []
    monkeypatch.setattr(notification_service, "SMTP_USER", None)
    monkeypatch.setattr(notification_service, "_send_email", lambda *args: sent.append(args))

    notification_service.send_order_confirmation(SUMMARY, "ayesha@example.com")

    assert sent == []


def test_sends_to_customer_and_admin(monkeypatch):
    sent = []
    monkeypatch.setattr(notification_service, "SMTP_USER", "orders@example.com")
    monkeypatch.setattr(notification_service, "ADMIN_NOTIFY_EMAIL", "kitchen@example.com")
    monkeypatch.setattr(notification_service, "_send_email", lambda to, subject, html: sent.append((to, subject)))

    notification_service.send_order_confirmation(SUMMARY, "ayesha@example.com")

    assert sent == [
        ("ayesha@example.com", "Order Confirmed - #42"),
        ("kitchen@example.com", "Order Confirmed - #42"),
    ]


def test_smtp_failure_is_swallowed(monkeypatch):
    def broken(*args):
        raise OSError("smtp down")

    monkeypatch.setattr(notification_service, "SMTP_USER", "orders@example.com")
    monkeypatch.setattr(notification_service, "ADMIN_NOTIFY_EMAIL", None)
    monkeypatch.setattr(notification_service, "_send_email", broken)

    notification_service.send_order_confirmation(SUMMARY, "ayesha@example.com")


def test_confirmation_lists_discount():
    html = notification_service.render_confirmation_html(SUMMARY)
    assert "#42" in html
    assert "39.80" in html
    assert "358.20" in html


def test_customer_text_is_escaped():
    html = notification_service.render_confirmation_html(
        {**SUMMARY, "customer_name": "<script>alert(1)</script>", "package_name": "Box & <b>More</b>"}
    )
    assert "<script>" not in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
    assert "Box &amp; &lt;b&gt;More&lt;/b&gt;" in html
