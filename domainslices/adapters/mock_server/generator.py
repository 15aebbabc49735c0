"""Fake record generation for the mock API.

Each call produces a fresh random collection. Usernames are unique within
one call; nothing is stable across calls unless a seed is given.
"""

import logging

from faker import Faker
from faker.exceptions import UniquenessException

from domainslices.core.models import Post, PostAuthor, User
from domainslices.core.posts import generate_excerpt

logger = logging.getLogger(__name__)

SNIPPET_LENGTH = 120


class MockRecordGenerator:
    """Synthesizes users and posts with Faker."""

    def __init__(self, seed: int | None = None, locale: str | None = None):
        """Initialize the generator.

        Args:
            seed: Optional seed making the output reproducible.
            locale: Optional Faker locale (e.g., "en_US").
        """
        self.fake = Faker(locale) if locale else Faker()
        if seed is not None:
            self.fake.seed_instance(seed)

    def generate_users(self, count: int) -> list[User]:
        """Generate count users with distinct usernames.

        Raises:
            ValueError: If count is negative or exceeds the distinct usernames
                Faker can produce for the locale.
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")

        self.fake.unique.clear()
        try:
            users = [
                User(
                    username=self.fake.unique.user_name(),
                    name=self.fake.name(),
                    email=self.fake.email(),
                )
                for _ in range(count)
            ]
        except UniquenessException as e:
            raise ValueError(f"cannot generate {count} distinct usernames: {e}") from e
        logger.debug(f"Generated {len(users)} users")
        return users

    def generate_posts(
        self, count: int, authors: list[User] | None = None
    ) -> list[Post]:
        """Generate count posts with ids 1..count.

        Args:
            count: Number of posts.
            authors: Users to draw embedded authors from. When omitted, a
                small pool of authors is generated.
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        if not authors:
            authors = self.generate_users(max(1, min(count, 5)))

        posts = []
        for post_id in range(1, count + 1):
            body = self.fake.paragraph(nb_sentences=8)
            author = self.fake.random.choice(authors)
            posts.append(
                Post(
                    id=post_id,
                    title=self.fake.sentence(nb_words=6).rstrip("."),
                    body=body,
                    snippet=generate_excerpt(body, SNIPPET_LENGTH),
                    author=PostAuthor.from_user(author),
                )
            )
        logger.debug(f"Generated {len(posts)} posts")
        return posts
