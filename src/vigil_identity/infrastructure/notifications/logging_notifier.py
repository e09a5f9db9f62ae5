"""Notifier that writes outbound messages to the log instead of sending them.

Suitable for development and for deployments where mail delivery is
handled out of band.
"""

import logging

from vigil_identity.application.ports import AccountNotifier

logger = logging.getLogger(__name__)


class LoggingNotifier(AccountNotifier):
    def __init__(self, include_links: bool = False):
        # Links embed live tokens; only log them when explicitly asked to
        self._include_links = include_links

    async def send_verification_email(
        self,
        to_email: str,
        verification_link: str,
    ) -> None:
        if self._include_links:
            logger.warning(
                "Mail delivery disabled, verification email to %s (link: %s)",
                to_email,
                verification_link,
            )
        else:
            logger.warning(
                "Mail delivery disabled, verification email to %s",
                to_email,
            )

    async def send_password_reset_email(self, to_email: str, reset_link: str) -> None:
        if self._include_links:
            logger.warning(
                "Mail delivery disabled, password reset email to %s (link: %s)",
                to_email,
                reset_link,
            )
        else:
            logger.warning(
                "Mail delivery disabled, password reset email to %s",
                to_email,
            )
