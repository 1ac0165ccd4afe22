"""Storage policy exceptions"""


class PolicyError(Exception):
    """Base exception for storage policy operations."""


class PolicyNotFoundError(PolicyError):
    """Storage policy not found by identifier."""

    def __init__(self, resource_type: str, resource_id: int | str):
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(f"{resource_type} {resource_id} not found")
