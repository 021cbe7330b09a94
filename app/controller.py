import json
import logging

from flask import Flask, request

from .cache import TTLCache
from .directory import DirectoryClient
from .dispatcher import AlertDispatcher
from .reporting import report
from .resolver import RecipientResolver
from .services import TwilioNotifier

logger = logging.getLogger(__name__)

ALL_METHODS = ['GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']


def as_json(status_code, message):
    return json.dumps(message), status_code, {'Content-Type': 'application/json'}


def _check_string_map(alert, field):
    mapping = alert.get(field)
    if mapping is None:
        return
    if not isinstance(mapping, dict):
        raise ValueError(f"alert '{field}' must be a JSON object")
    for key, value in mapping.items():
        if not isinstance(value, str):
            raise ValueError(f"alert {field[:-1]} '{key}' must be a string")


def parse_alerts(data):
    """Valida o formato mínimo do payload do Alertmanager e retorna a lista de alertas."""
    if not isinstance(data, dict):
        raise ValueError("alert payload must be a JSON object")
    alerts = data.get('alerts') or []
    if not isinstance(alerts, list):
        raise ValueError("'alerts' must be a list")
    for alert in alerts:
        if not isinstance(alert, dict):
            raise ValueError("each alert must be a JSON object")
        if alert.get('status') is not None and not isinstance(alert.get('status'), str):
            raise ValueError("alert 'status' must be a string")
        # Labels e annotations do Alertmanager são sempre string -> string
        _check_string_map(alert, 'labels')
        _check_string_map(alert, 'annotations')
    return alerts


def build_dispatcher(settings):
    # Caches vivem o tempo do processo; o longo nunca expira
    short_cache = TTLCache(ttl_seconds=settings.short_cache_ttl_seconds)
    long_cache = TTLCache(ttl_seconds=None)
    directory = DirectoryClient(
        spreadsheet_id=settings.google_sheet_id,
        token_path=str(settings.google_token_path),
        read_range=settings.google_sheet_range,
    )
    notifier = TwilioNotifier(
        account_sid=settings.twilio_account_sid,
        auth_sid=settings.twilio_auth_sid,
        auth_token=settings.twilio_auth_token,
        from_number=settings.twilio_from_number,
        api_url=settings.twilio_api_url,
        timeout=settings.twilio_timeout_seconds,
    )
    return AlertDispatcher(RecipientResolver(directory, short_cache, long_cache), notifier)


def create_app(settings=None, dispatcher=None):
    app = Flask(__name__)
    if dispatcher is None:
        dispatcher = build_dispatcher(settings)
    app.config['DISPATCHER'] = dispatcher

    @app.errorhandler(405)
    def method_not_allowed(_error):
        return as_json(405, "unsupported HTTP method")

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok', 'service': 'alertmanager-sms-proxy'}, 200

    @app.route('/webhook', methods=ALL_METHODS, provide_automatic_options=False)
    def webhook():
        if request.method != 'POST':
            return as_json(405, "unsupported HTTP method")

        try:
            data = json.loads(request.get_data(as_text=True))
            alerts = parse_alerts(data)
        except ValueError as e:
            report(f"Error parsing alerts content: {e}")
            return as_json(400, str(e))

        logger.debug(f"Recebidos {len(alerts)} alertas")
        try:
            sent = dispatcher.dispatch(alerts)
        except Exception as e:
            report(str(e))
            return as_json(500, str(e))

        logger.info(f"{sent} SMS enviados para {len(alerts)} alertas")
        return as_json(200, "success")

    return app
