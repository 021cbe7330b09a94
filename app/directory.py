import logging
from typing import List, Sequence, Tuple

from google.oauth2 import service_account
from googleapiclient.discovery import build

from .constants import DEFAULT_SHEET_RANGE

logger = logging.getLogger(__name__)

SCOPES = ['https://www.googleapis.com/auth/spreadsheets']

Snapshot = List[Tuple[str, List[str]]]


class DirectoryError(Exception):
    pass


class ConnectError(DirectoryError):
    """Não foi possível criar a sessão com a API do Sheets (credenciais, discovery...)."""


class FetchError(DirectoryError):
    """Sessão criada, mas a leitura do range falhou."""


def _split_cell(cell) -> List[str]:
    if cell is None:
        return []
    return [part.strip() for part in str(cell).split(',') if part.strip()]


def parse_rows(rows: Sequence[Sequence]) -> Snapshot:
    """
    Converte as linhas cruas da planilha em (time, [telefones]).
    Primeira coluna = time; demais colunas = telefones (uma célula pode
    conter vários números separados por vírgula). Linhas sem time são ignoradas.
    """
    snapshot: Snapshot = []
    for row in rows:
        if not row:
            continue
        team = str(row[0]) if row[0] is not None else ''
        if team == '':
            continue
        numbers: List[str] = []
        for cell in row[1:]:
            numbers.extend(_split_cell(cell))
        snapshot.append((team, numbers))
    return snapshot


class DirectoryClient:
    def __init__(self, spreadsheet_id: str, token_path: str, read_range: str = DEFAULT_SHEET_RANGE):
        self.spreadsheet_id = spreadsheet_id
        self.token_path = token_path
        self.read_range = read_range

    def _connect(self):
        # Sessão nova a cada chamada: o volume já é limitado pelo cache curto
        try:
            credentials = service_account.Credentials.from_service_account_file(self.token_path, scopes=SCOPES)
            return build('sheets', 'v4', credentials=credentials, cache_discovery=False)
        except Exception as exc:
            raise ConnectError(f"Unable to establish Sheets client: {exc}") from exc

    def fetch_all(self) -> Snapshot:
        service = self._connect()
        try:
            resp = service.spreadsheets().values().get(
                spreadsheetId=self.spreadsheet_id, range=self.read_range
            ).execute()
        except Exception as exc:
            raise FetchError(f"Cannot read Sheet {self.spreadsheet_id} ({self.read_range}): {exc}") from exc

        snapshot = parse_rows(resp.get('values', []))
        logger.debug(f"Planilha lida: {len(snapshot)} times encontrados")
        return snapshot
