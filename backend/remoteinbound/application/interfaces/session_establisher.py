"""Port for signing a freshly registered user in."""

from abc import ABC, abstractmethod

from remoteinbound.domain.entities import User


class SessionEstablisher(ABC):
    """Receives every user created by a registration, remote or fallback."""

    @abstractmethod
    def establish(self, user: User) -> None:
        """Mark ``user`` as the signed-in user."""
        ...
