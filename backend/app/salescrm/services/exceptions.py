"""Errors raised by the service layer and mapped to HTTP statuses by controllers."""


class NotFoundError(ValueError):
    """A referenced row does not exist."""

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidTransitionError(ValueError):
    """A status change is not allowed from the current status."""

    def __init__(self, entity: str, current: object, target: object) -> None:
        current_value = getattr(current, "value", current)
        target_value = getattr(target, "value", target)
        super().__init__(
            f"{entity} cannot move from {current_value} to {target_value}"
        )
