import logging
import threading
from typing import List, Optional

from .cache import TTLCache
from .directory import DirectoryClient, DirectoryError, Snapshot
from .reporting import report

logger = logging.getLogger(__name__)


class NotFoundError(Exception):
    def __init__(self, team: str, reason: Optional[str] = None):
        self.team = team
        self.reason = reason
        message = f"No numbers found for team {team}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class DirectoryUnavailableError(Exception):
    """Falha ao obter um snapshot utilizável do diretório (erro de sessão/leitura ou planilha vazia)."""

    def __init__(self, cause):
        self.cause = cause
        super().__init__(str(cause))


class RecipientResolver:
    """
    Resolve time -> telefones com dois níveis de cache:

    1. cache curto (TTL fixo): caminho rápido, sem rede
    2. leitura completa da planilha, que reabastece os dois caches
    3. cache longo (sem expiração): fallback quando a planilha está indisponível

    Uma leitura bem sucedida é autoritativa: se o time não está na planilha,
    NotFoundError é levantado mesmo que o cache longo tenha uma entrada antiga.
    """

    def __init__(self, directory: DirectoryClient, short_cache: TTLCache, long_cache: TTLCache):
        self.directory = directory
        self.short_cache = short_cache
        self.long_cache = long_cache
        self._write_lock = threading.Lock()

    def load(self, snapshot: Snapshot):
        # Mesma linha vai para os dois caches sob o mesmo lock
        with self._write_lock:
            for team, numbers in snapshot:
                recipients = list(numbers)
                self.long_cache.set(team, recipients)
                self.short_cache.set(team, recipients)
        # Uma varredura por snapshot, não por linha
        self.short_cache.purge_expired()

    def _fetch(self) -> Snapshot:
        try:
            snapshot = self.directory.fetch_all()
        except DirectoryError as exc:
            raise DirectoryUnavailableError(exc) from exc
        if not snapshot:
            raise DirectoryUnavailableError("Sheet appears to be empty")
        return snapshot

    def resolve(self, team: str) -> List[str]:
        numbers, found = self.short_cache.get(team)
        if found:
            return list(numbers)

        logger.info(f"Buscando telefones do time \"{team}\" na planilha")
        try:
            snapshot = self._fetch()
        except DirectoryUnavailableError as exc:
            report(f"Cannot read Sheet, reading from fallback cache - {exc}")
            numbers, found = self.long_cache.get(team)
            if found:
                return list(numbers)
            raise NotFoundError(team, reason=str(exc)) from exc

        self.load(snapshot)
        matches = [numbers for name, numbers in snapshot if name == team]
        if not matches:
            raise NotFoundError(team, reason="no row found in Sheet")
        # Em caso de linhas duplicadas, a última vence (é a que ficou no cache)
        return list(matches[-1])
