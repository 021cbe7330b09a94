import logging
import re
from typing import Dict, Iterable, List, Optional

from .constants import PHONE_NUMBERS_LABEL, SUMMARY_ANNOTATION, TEAM_LABEL
from .reporting import report

logger = logging.getLogger(__name__)

PHONES_PATTERN = re.compile(r'[1-9]\d{1,14}(,[1-9]\d{1,14})*', re.ASCII)


class InvalidPhoneLabel(ValueError):
    pass


def parse_phone_label(phone_numbers: Optional[str]) -> Optional[List[str]]:
    """
    Interpreta o label `phone_numbers` (ex: "33611111111,33622222222").
    Retorna None se o label estiver ausente; levanta InvalidPhoneLabel se a sintaxe for inválida.
    """
    if not phone_numbers:
        return None
    if not PHONES_PATTERN.fullmatch(phone_numbers):
        raise InvalidPhoneLabel("Wrong comma-separated phone numbers syntax")
    return phone_numbers.split(',')


def format_recipient(number: str) -> str:
    number = number.strip()
    if number.startswith('+'):
        return number
    return f"+{number}"


def build_message(alert: Dict) -> str:
    annotations = alert.get('annotations') or {}
    return f"{alert.get('status', '')}: {annotations.get(SUMMARY_ANNOTATION, '')}"


class AlertDispatcher:
    """
    Para cada alerta: monta a mensagem, resolve destinatários (label ou planilha)
    e envia um SMS por destinatário.

    Política fail-fast: o primeiro erro de resolução ou envio interrompe o lote
    inteiro (a exceção sobe para o endpoint).
    """

    def __init__(self, resolver, notifier):
        self.resolver = resolver
        self.notifier = notifier

    def recipients_for(self, alert: Dict) -> List[str]:
        labels = alert.get('labels') or {}
        raw = labels.get(PHONE_NUMBERS_LABEL)
        try:
            recipients = parse_phone_label(raw)
        except InvalidPhoneLabel as exc:
            report(f"Cannot use label-provided phone numbers {raw}: {exc}")
            recipients = None

        if recipients is None:
            recipients = self.resolver.resolve(labels.get(TEAM_LABEL, ''))
        else:
            logger.debug(f"Usando telefones do label {PHONE_NUMBERS_LABEL}: {recipients}")
        return recipients

    def dispatch(self, alerts: Iterable[Dict]) -> int:
        sent = 0
        for alert in alerts:
            message = build_message(alert)
            for recipient in self.recipients_for(alert):
                self.notifier.send(format_recipient(recipient), message)
                sent += 1
        return sent
