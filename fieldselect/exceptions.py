"""Field selection exceptions."""


class InvalidFieldSpec(TypeError):
    """Raised when fields are given neither as a string nor as a mapping."""

    pass
