"""Gestão das regras de disponibilidade de um provider."""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import TYPE_CHECKING

from pydantic import ValidationError

from app.domain.availability import ExclusionRule, RecurringRule
from app.domain.errors import InvalidAvailabilityError, NotFoundError, UnauthorizedError

if TYPE_CHECKING:
    from app.infra.stores.availability_store import AvailabilityStore

logger = logging.getLogger(__name__)


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    return str(errors[0].get("msg", exc))


class AvailabilityManager:
    """Cria, lista e remove regras recorrentes e exclusões.

    Somente o próprio provider altera suas regras; não há update in-place.
    """

    def __init__(self, store: AvailabilityStore) -> None:
        self._store = store

    async def add_recurring_rule(
        self,
        provider_id: str,
        caller_id: str,
        weekday: int,
        start_time: str,
        end_time: str,
    ) -> RecurringRule:
        """Adiciona bloco semanal (weekday 0 = domingo)."""
        self._authorize(provider_id, caller_id)
        try:
            rule = RecurringRule(
                id=uuid.uuid4().hex,
                provider_id=provider_id,
                weekday=weekday,
                start_time=start_time,
                end_time=end_time,
            )
        except ValidationError as exc:
            raise InvalidAvailabilityError(_first_error(exc)) from exc
        await self._store.add(rule)
        logger.info(
            "availability_rule_added",
            extra={"component": "availability", "action": "add_recurring", "result": "ok"},
        )
        return rule

    async def add_exclusion(
        self,
        provider_id: str,
        caller_id: str,
        day: date | str,
        reason: str | None = None,
    ) -> ExclusionRule:
        """Bloqueia uma data inteira, sobrepondo as regras recorrentes."""
        self._authorize(provider_id, caller_id)
        try:
            rule = ExclusionRule(
                id=uuid.uuid4().hex,
                provider_id=provider_id,
                date=day,
                reason=reason or None,
            )
        except ValidationError as exc:
            raise InvalidAvailabilityError(_first_error(exc)) from exc
        await self._store.add(rule)
        logger.info(
            "availability_rule_added",
            extra={"component": "availability", "action": "add_exclusion", "result": "ok"},
        )
        return rule

    async def delete_rule(self, rule_id: str, caller_id: str) -> None:
        rule = await self._store.get(rule_id)
        if rule is None:
            raise NotFoundError(f"Regra {rule_id} não encontrada")
        self._authorize(rule.provider_id, caller_id)
        await self._store.delete(rule_id)
        logger.info(
            "availability_rule_deleted",
            extra={"component": "availability", "action": "delete", "result": "ok"},
        )

    async def list_rules(
        self, provider_id: str
    ) -> tuple[list[RecurringRule], list[ExclusionRule]]:
        recurring, exclusions = await self._store.list_for_provider(provider_id)
        recurring.sort(key=lambda rule: (rule.weekday, rule.start_time))
        exclusions.sort(key=lambda rule: rule.date)
        return recurring, exclusions

    @staticmethod
    def _authorize(provider_id: str, caller_id: str) -> None:
        if provider_id != caller_id:
            raise UnauthorizedError("Somente o provider pode alterar a própria disponibilidade")
