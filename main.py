import logging
import sys

from pydantic import ValidationError

from app.reporting import configure_sentry
from app.validation import format_errors, load_settings

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)

# Validação é fatal no startup
try:
    settings = load_settings()
except ValidationError as exc:
    for error in format_errors(exc):
        logger.error(error)
    logger.critical("Parameters validation failed")
    sys.exit(1)

if settings.debug_mode:
    logging.getLogger().setLevel(logging.DEBUG)

try:
    configure_sentry(settings.sentry_dsn)
except Exception as exc:
    logger.critical(f"Sentry initialization failed: {exc}")
    sys.exit(1)

from app.controller import create_app  # noqa: E402

app = create_app(settings)

if __name__ == '__main__':
    logger.info(f"listening on: 0.0.0.0:{settings.port}")
    # threaded=True: uma thread por requisição
    app.run(host='0.0.0.0', port=settings.port, debug=settings.debug_mode, use_reloader=False, threaded=True)
