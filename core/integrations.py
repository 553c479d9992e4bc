# core/integrations.py
"""
Simulated third-party integrations (payments, uploads).

These accept arbitrary input, log it and hand back canned payloads.
Nothing here talks to the network.
"""
import logging
import secrets
import string
import time

logger = logging.getLogger("ovento.integrations")

PROTOTYPE_WARNING = "Prototype mode: no real payment was processed."

UPLOAD_MAX_BYTES = 10 * 1024 * 1024
UPLOAD_ALLOWED_TYPES = ("image/jpeg", "image/png", "image/gif", "application/pdf", "text/plain")


def _token(length=16):
    alphabet = string.ascii_lowercase + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))


def _millis():
    return int(time.time() * 1000)


def create_payment_intent(amount, currency="inr", metadata=None):
    intent_id = f"pi_mock_{_millis()}"
    logger.info(f"Simulated payment intent {intent_id}: amount={amount} {currency}, metadata={metadata or {}}")
    return {
        "id": intent_id,
        "client_secret": f"{intent_id}_secret_{_token()}",
        "amount": amount,
        "currency": currency,
        "status": "requires_payment_method",
    }


def create_subscription(user, price_id=None):
    subscription_id = f"sub_mock_{_millis()}"
    customer_id = user.stripe_customer_id or f"cus_mock_{_token(10)}"
    logger.info(f"Simulated subscription {subscription_id} for user={user.id}, price={price_id}")
    return {
        "subscription_id": subscription_id,
        "customer_id": customer_id,
        "client_secret": f"{subscription_id}_secret_{_token()}",
        "status": "active",
    }


def store_upload(uploaded_file, prefix="/uploads"):
    """
    Pretends to persist the file and returns where it would live.
    """
    url = f"{prefix}/{_millis()}-{uploaded_file.name}"
    logger.info(f"Simulated upload: {uploaded_file.name} ({uploaded_file.size} bytes) -> {url}")
    return url
