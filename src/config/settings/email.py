"""Settings específicas de Email.

Notificações de booking enviadas pela API REST do EmailJS.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

EMAILJS_API_URL = "https://api.emailjs.com/api/v1.0/email/send"


@dataclass(frozen=True)
class EmailSettings:
    """Configurações do canal Email.

    Attributes:
        service_id: ID do serviço EmailJS
        provider_template_id: Template para emails destinados ao provider
        booker_template_id: Template para emails destinados ao booker
        public_key: Chave pública (user_id) da conta EmailJS
        api_url: Endpoint de envio
        request_timeout_seconds: Timeout para conexões
    """

    service_id: str = ""
    provider_template_id: str = ""
    booker_template_id: str = ""
    public_key: str = ""
    api_url: str = EMAILJS_API_URL
    request_timeout_seconds: float = 10.0

    @property
    def is_configured(self) -> bool:
        return bool(
            self.service_id
            and self.provider_template_id
            and self.booker_template_id
            and self.public_key
        )

    def validate(self) -> list[str]:
        """Valida configurações mínimas de Email."""
        errors: list[str] = []
        if not self.service_id:
            errors.append("EMAILJS_SERVICE_ID não configurado")
        if not self.public_key:
            errors.append("EMAILJS_PUBLIC_KEY não configurado")
        if not (self.provider_template_id and self.booker_template_id):
            errors.append("EMAILJS_PROVIDER_TEMPLATE_ID/EMAILJS_BOOKER_TEMPLATE_ID não configurados")
        return errors


def _load_from_env() -> EmailSettings:
    """Carrega EmailSettings de variáveis de ambiente."""
    return EmailSettings(
        service_id=os.getenv("EMAILJS_SERVICE_ID", ""),
        provider_template_id=os.getenv("EMAILJS_PROVIDER_TEMPLATE_ID", ""),
        booker_template_id=os.getenv("EMAILJS_BOOKER_TEMPLATE_ID", ""),
        public_key=os.getenv("EMAILJS_PUBLIC_KEY", ""),
        api_url=os.getenv("EMAILJS_API_URL", EMAILJS_API_URL),
        request_timeout_seconds=float(os.getenv("EMAILJS_REQUEST_TIMEOUT_SECONDS", "10")),
    )


@lru_cache(maxsize=1)
def get_email_settings() -> EmailSettings:
    """Retorna instância cacheada de EmailSettings."""
    return _load_from_env()
