from .bitwise import all_mask, bitcount, unshift, iter_bits, format_bits

__all__ = [
    "all_mask",
    "bitcount",
    "unshift",
    "iter_bits",
    "format_bits",
]
