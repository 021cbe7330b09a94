import logging

import requests

from .constants import DEFAULT_TWILIO_API_URL, DEFAULT_TWILIO_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class SmsSendError(Exception):
    pass


class TwilioNotifier:
    """Envia um SMS por destinatário via API REST do Twilio (sem retry)."""

    def __init__(self, account_sid: str, auth_sid: str, auth_token: str, from_number: str,
                 api_url: str = DEFAULT_TWILIO_API_URL, timeout: int = DEFAULT_TWILIO_TIMEOUT_SECONDS):
        self.account_sid = account_sid
        self.auth = (auth_sid, auth_token)
        self.from_number = from_number
        self.url = f"{api_url.rstrip('/')}/Accounts/{account_sid}/Messages.json"
        self.timeout = timeout

    def send(self, recipient: str, message: str) -> str:
        logger.info(f"Sending SMS to {recipient}: {message}")
        try:
            resp = requests.post(
                self.url,
                data={"To": recipient, "From": self.from_number, "Body": message},
                auth=self.auth,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise SmsSendError(f"Error querying twilio API: {exc}") from exc

        if resp.status_code < 200 or resp.status_code >= 300:
            raise SmsSendError(f"Non-200 response from twilio API: {resp.status_code} - {resp.text}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise SmsSendError(f"Error in twilio response body: {exc}") from exc

        sid = data.get("sid") if isinstance(data, dict) else None
        logger.info(f"Successfully sent SMS - SID {sid}")
        return sid
