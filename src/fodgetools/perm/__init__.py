from .permutation import Permutation
from .generators import Generator, ZnGenerator, SnGenerator, ZRGenerator

__all__ = [
    "Permutation",
    "Generator",
    "ZnGenerator",
    "SnGenerator",
    "ZRGenerator",
]
