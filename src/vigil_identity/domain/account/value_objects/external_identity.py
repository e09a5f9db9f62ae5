from dataclasses import dataclass


@dataclass(frozen=True)
class ExternalIdentity:
    """Federated identity link: provider name and the provider's subject id."""

    provider: str
    subject: str

    def __post_init__(self) -> None:
        if not self.provider or not self.subject:
            msg = "External identity requires provider and subject"
            raise ValueError(msg)
        object.__setattr__(self, "provider", self.provider.lower().strip())
