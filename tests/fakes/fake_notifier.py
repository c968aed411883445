"""Fake de notifier que guarda as notificações enviadas."""

from __future__ import annotations

from dataclasses import dataclass, field

from app.protocols.notifier import NotificationKind, NotificationPayload


@dataclass
class SentNotification:
    kind: NotificationKind
    recipient_email: str
    payload: NotificationPayload


@dataclass
class FakeNotifier:
    """Notifier em memória; `fail=True` simula indisponibilidade do provedor."""

    fail: bool = False
    sent: list[SentNotification] = field(default_factory=list)

    async def notify(
        self,
        kind: NotificationKind,
        recipient_email: str,
        payload: NotificationPayload,
    ) -> None:
        if self.fail:
            raise ConnectionError("email provider unavailable")
        self.sent.append(SentNotification(kind, recipient_email, payload))

    def kinds(self) -> list[NotificationKind]:
        return [item.kind for item in self.sent]
