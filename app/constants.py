# Valores padrão; as variáveis de ambiente são lidas e validadas em validation.Settings
DEFAULT_PORT = 9080
DEFAULT_TWILIO_API_URL = "https://api.twilio.com/2010-04-01"
DEFAULT_TWILIO_TIMEOUT_SECONDS = 10

# Linha 1 é cabeçalho; coluna A = time, B..D = telefones
DEFAULT_SHEET_RANGE = "A2:D"

# Cache curto (caminho principal); o cache longo nunca expira
DEFAULT_SHORT_CACHE_TTL_SECONDS = 600  # 10 minutos

# Labels esperados nos alertas do Alertmanager
TEAM_LABEL = "team"
PHONE_NUMBERS_LABEL = "phone_numbers"
SUMMARY_ANNOTATION = "summary"
