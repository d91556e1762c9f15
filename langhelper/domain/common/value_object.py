"""Base class for immutable domain values such as words, meanings and ids."""


class ValueObject:
    """
    Marker base for frozen dataclasses compared by their fields.

    Subclasses validate themselves in __post_init__.
    """

    def to_primitive(self) -> object:
        """
        Convert to primitive Python type for serialization.

        Single-value objects collapse to that value, others to a dict.
        """
        values = list(self.__dict__.values())
        if len(values) == 1:
            return values[0]
        return dict(self.__dict__)
