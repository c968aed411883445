"""Entrega de notificações."""

from app.infra.notifications.emailjs_notifier import EmailJsNotifier

__all__ = ["EmailJsNotifier"]
