# core/config.py
"""
Feature flags derived from the environment.

Missing Stripe or auth configuration forces prototype mode, whatever
else is configured.
"""
import logging

from django.conf import settings

logger = logging.getLogger("ovento")


def feature_flags() -> dict:
    ovento = settings.OVENTO
    return {
        "openai": ovento["OPENAI_ENABLED"],
        "sendgrid": ovento["SENDGRID_ENABLED"],
        "stripe": ovento["STRIPE_ENABLED"],
        "auth": ovento["AUTH_ENABLED"],
        "database": ovento["DB_ENABLED"],
    }


def is_prototype_mode() -> bool:
    return settings.OVENTO["PROTOTYPE_MODE"]


def log_config_status():
    flags = feature_flags()
    mode = "PROTOTYPE" if is_prototype_mode() else "FULL"
    logger.info(f"Ovento starting in {mode} mode")
    for name, enabled in flags.items():
        logger.info(f"  {name}: {'enabled' if enabled else 'simulated'}")
    if is_prototype_mode():
        logger.warning(
            "Prototype mode: payments, email delivery and login are simulated. "
            "Set STRIPE_SECRET_KEY and REPLIT_DOMAINS/AUTH_JWT_SECRET to leave it."
        )
