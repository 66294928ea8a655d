VALUE_BITS = 16
VALUE_MASK = (1 << VALUE_BITS) - 1
VALUE_MAX = VALUE_MASK


def wrap(value: int) -> int:
    return value & VALUE_MASK


def fits(value: int) -> bool:
    return 0 <= value <= VALUE_MAX
