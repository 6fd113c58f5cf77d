class TeamSize:
    """Allowed size range for a generated training team.

    Pure lookup: nothing here enforces the range, the generator decides how
    strictly to follow it.
    """

    MIN = 4
    MAX = 6

    @classmethod
    def is_empty(cls, size: int) -> bool:
        return size == 0

    @classmethod
    def is_full(cls, size: int) -> bool:
        return size == cls.MAX

    @classmethod
    def can_add_member(cls, size: int) -> bool:
        return size < cls.MAX

    @classmethod
    def is_valid(cls, size: int) -> bool:
        return cls.MIN <= size <= cls.MAX
