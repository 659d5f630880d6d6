"""Domain entity for published conference speakers."""

from dataclasses import dataclass, field

from .user import SocialLinks


@dataclass
class Speaker:
    """A speaker listed on the public speakers page."""

    id: str
    name: str
    title: str
    company: str
    bio: str
    avatar: str | None = None
    social: SocialLinks = field(default_factory=SocialLinks)
    sessions: list[str] = field(default_factory=list)
