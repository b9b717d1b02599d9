from enum import Enum


class Sentinel(Enum):
    """Stand-ins for statistics that have no numeric value."""
    NOT_REACHED = "not reached"
    NOT_APPLICABLE = "not applicable"
    UNDEFINED = "undefined"

    def __str__(self) -> str:
        return self.value


def is_sentinel(value) -> bool:
    return isinstance(value, Sentinel)
