"""Contrato do processador de pagamentos: checkout, contas conectadas e reembolso."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

# Status que o processador usa para reembolso que não foi efetivado
FAILED_REFUND_STATUSES = frozenset({"failed", "canceled"})


class PaymentProcessorError(Exception):
    """Falha ao comunicar com o processador de pagamentos."""


@dataclass(frozen=True, slots=True)
class RefundResult:
    """Resultado de um reembolso emitido.

    Attributes:
        id: Identificador do reembolso no processador
        amount: Valor reembolsado em unidades menores (centavos)
        status: Status reportado pelo processador
    """

    id: str
    amount: int
    status: str

    @property
    def failed(self) -> bool:
        return self.status in FAILED_REFUND_STATUSES


@dataclass(frozen=True, slots=True)
class CheckoutRequest:
    """Sessão de pagamento único com repasse para a conta do provider.

    Attributes:
        destination_account_id: Conta conectada que recebe o repasse
        amount_cents: Valor cobrado do booker (centavos)
        application_fee_cents: Taxa retida pela plataforma (centavos)
        currency: Moeda ISO 4217 em minúsculas
        product_name: Nome exibido na página de pagamento
        success_url: Retorno após pagamento concluído
        cancel_url: Retorno quando o booker desiste
        metadata: Gravado na sessão e no PaymentIntent
    """

    destination_account_id: str
    amount_cents: int
    application_fee_cents: int
    currency: str
    product_name: str
    success_url: str
    cancel_url: str
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class CheckoutSession:
    id: str
    url: str


@runtime_checkable
class PaymentProcessorProtocol(Protocol):
    """Contrato para cobrança via checkout e reembolsos vinculados a um pagamento."""

    async def refund(
        self,
        payment_intent_id: str,
        *,
        refund_application_fee: bool,
        reverse_transfer: bool,
        idempotency_key: str,
    ) -> RefundResult:
        """Emite reembolso do pagamento.

        Raises:
            PaymentProcessorError: erro de comunicação ou recusa do processador
        """
        ...

    async def payment_metadata(self, payment_intent_id: str) -> dict[str, str]:
        """Metadados gravados no pagamento (fallback quando o checkout vem sem metadata).

        Raises:
            PaymentProcessorError: erro de comunicação com o processador
        """
        ...

    async def account_payouts_enabled(self, account_id: str) -> bool:
        """Se a conta conectada já pode receber repasses.

        Raises:
            PaymentProcessorError: erro de comunicação com o processador
        """
        ...

    async def create_checkout_session(self, request: CheckoutRequest) -> CheckoutSession:
        """Cria a sessão de pagamento hospedada pelo processador.

        Raises:
            PaymentProcessorError: erro de comunicação ou recusa do processador
        """
        ...
