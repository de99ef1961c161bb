from dataclasses import dataclass

from boxsim.driver import Driver


@dataclass(frozen=True)
class RoleConfig:
    """A shared, read-only driver and how many of it fill one role."""

    driver: Driver
    count: int = 1

    def __post_init__(self):
        if self.count < 1:
            raise ValueError(f"Driver count must be at least 1, got {self.count}")
