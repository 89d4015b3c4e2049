from enum import Enum


class RoundingMethod(str, Enum):
    TRUNCATE = "Truncate"
    NEAREST = "Nearest"
    FLOOR = "Floor"
    CEILING = "Ceiling"
