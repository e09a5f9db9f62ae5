"""Outbound notification port.

Delivery mechanics are owned by the adapter; the authentication flows only
hand over the recipient and the link to include.
"""

from abc import ABC, abstractmethod


class AccountNotifier(ABC):
    @abstractmethod
    async def send_verification_email(
        self,
        to_email: str,
        verification_link: str,
    ) -> None:
        """Send the email-address verification link."""

    @abstractmethod
    async def send_password_reset_email(self, to_email: str, reset_link: str) -> None:
        """Send the password reset link."""
