from enum import Enum


class ModelKind(str, Enum):
    """Compartmental model variants; the value is the conventional name."""
    SI = "SI"
    SIS = "SIS"
    SIR = "SIR"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value) -> "ModelKind":
        """Accept a ModelKind or its name in any case ("sir", "SIR")."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ValueError(
                f"Unknown model kind: {value!r}; expected one of {[k.value for k in cls]}"
            ) from None
