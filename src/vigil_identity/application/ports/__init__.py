from vigil_identity.application.ports.notifier import AccountNotifier

__all__ = ["AccountNotifier"]
