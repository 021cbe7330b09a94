import logging

import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

logger = logging.getLogger(__name__)

_use_sentry = False


def configure_sentry(dsn: str) -> bool:
    """Inicializa o Sentry se houver DSN. Retorna True quando habilitado."""
    global _use_sentry
    if not dsn:
        logger.info("Not using Sentry")
        _use_sentry = False
        return False

    sentry_sdk.init(
        dsn=dsn,
        integrations=[
            FlaskIntegration(transaction_style='endpoint'),
            # Mensagens de log viram breadcrumbs; eventos só via report()
            LoggingIntegration(level=logging.INFO, event_level=None),
        ],
        send_default_pii=False,
        attach_stacktrace=True,
    )
    _use_sentry = True
    logger.info("Sentry initialized")
    return True


def report(message: str):
    """Loga a mensagem e, se configurado, duplica para o Sentry (best-effort)."""
    logger.error(message)
    if not _use_sentry:
        return
    try:
        sentry_sdk.capture_message(message)
    except Exception as exc:
        logger.warning(f"Falha ao enviar mensagem ao Sentry: {exc}")
