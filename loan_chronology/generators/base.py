"""Base generator for synthetic loans and payments."""

from __future__ import annotations

import random
from abc import ABC

from faker import Faker


class BaseGenerator(ABC):
    """Shared Faker instance and seeding for the loan generators.

    Parameters
    ----------
    seed : int | None
        Random seed; seeds both Faker and the ``random`` module so amounts,
        dates and names are reproducible together.
    locale : str
        Faker locale for borrower names (default ``es_MX``).
    """

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "es_MX",
    ) -> None:
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)
            random.seed(seed)

    def new_id(self) -> str:
        return self.fake.uuid4()

    def borrower_name(self) -> str:
        """Full name in capitals, as written on the route sheet."""
        return f"{self.fake.first_name()} {self.fake.last_name()}".upper()
