# app/services/notification_service.py
import html
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Dict, Optional

from app.core.config import (
    SMTP_HOST,
    SMTP_PORT,
    SMTP_USER,
    SMTP_PASSWORD,
    EMAIL_FROM_NAME,
    ADMIN_NOTIFY_EMAIL,
)

logger = logging.getLogger(__name__)


def build_order_summary(order) -> Dict:
    return {
        "order_id": order.id,
        "customer_name": order.customer_name,
        "package_name": order.package.name if order.package else "",
        "quantity": order.quantity,
        "delivery_date": order.delivery_date.strftime("%A, %d %B %Y"),
        "order_type": getattr(order.order_type, "value", order.order_type),
        "total_amount": f"{order.total_amount:.2f}",
        "discount_amount": f"{order.discount_amount:.2f}",
    }


def render_confirmation_html(summary: Dict) -> str:
    customer_name = html.escape(str(summary["customer_name"]))
    package_name = html.escape(str(summary["package_name"]))
    order_type = html.escape(str(summary["order_type"]))

    discount_row = ""
    if summary["discount_amount"] != "0.00":
        discount_row = f"<tr><td>Discount</td><td>- ₹{summary['discount_amount']}</td></tr>"

    return f"""
    <html>
    <body style="font-family: Arial, sans-serif; color: #333;">
        <h2>Assalamu Alaikum {customer_name}!</h2>
        <p>Thank you for your order. Your box has been confirmed.</p>
        <table cellpadding="6">
            <tr><td>Order</td><td>#{summary['order_id']}</td></tr>
            <tr><td>Package</td><td>{package_name} × {summary['quantity']}</td></tr>
            <tr><td>Order type</td><td>{order_type}</td></tr>
            <tr><td>Delivery date</td><td>{summary['delivery_date']}</td></tr>
            {discount_row}
            <tr><td><strong>Total paid</strong></td><td><strong>₹{summary['total_amount']}</strong></td></tr>
        </table>
    </body>
    </html>
    """


def _send_email(to_email: str, subject: str, html_content: str):
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = formataddr((EMAIL_FROM_NAME, SMTP_USER))
    msg["To"] = to_email
    msg.attach(MIMEText(html_content, "html"))

    server = smtplib.SMTP(SMTP_HOST, SMTP_PORT, timeout=10)
    try:
        server.starttls()
        server.login(SMTP_USER, SMTP_PASSWORD)
        server.sendmail(SMTP_USER, to_email, msg.as_string())
    finally:
        server.quit()


def send_order_confirmation(summary: Dict, customer_email: Optional[str] = None):
    """
    Best-effort confirmation email after a settled payment. Runs as a
    background task; failures are logged and never reach the caller.
    """
    if not SMTP_USER:
        logger.info(f"SMTP not configured; skipping confirmation for order {summary['order_id']}")
        return

    recipients = [r for r in (customer_email, ADMIN_NOTIFY_EMAIL) if r]
    subject = f"Order Confirmed - #{summary['order_id']}"
    html_content = render_confirmation_html(summary)

    for recipient in recipients:
        try:
            _send_email(recipient, subject, html_content)
            logger.info(f"Confirmation for order {summary['order_id']} sent to {recipient}")
        except Exception as e:
            logger.error(f"Failed to send confirmation for order {summary['order_id']} to {recipient}: {e}")
