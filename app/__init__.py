"""Pacote webapp modular para o proxy Alertmanager -> SMS (Twilio), com destinatários vindos de uma planilha Google.

Este pacote contém:
- constants: variáveis de ambiente e configuração
- validation: validação das variáveis de ambiente no startup
- reporting: logging de erros com duplicação opcional para o Sentry
- cache: cache TTL em memória (curto e longo)
- directory: leitura da planilha time -> telefones (Google Sheets)
- resolver: resolução de destinatários com cache e fallback
- dispatcher: processamento do lote de alertas e envio
- services: integração com serviços externos (Twilio)
- controller: criação do Flask app e endpoints
"""
