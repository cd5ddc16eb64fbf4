from enum import Enum


class HasMemberMixin(Enum):
    """Lets callers check whether a raw token is a member value before converting it"""

    @classmethod
    def has_value(cls, value) -> bool:
        return value in cls._value2member_map_
