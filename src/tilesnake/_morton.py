"""Morton (Z-order) interleaving of two 16-bit grid components.

``x`` occupies the even bits of the index and ``y`` the odd bits. The
functions accept plain ints or integer NumPy arrays, so the grid can decode
its whole backing array in one vectorized pass.
"""

from __future__ import annotations


def _spread(n):
    n = n & 0x0000FFFF
    n = (n | (n << 8)) & 0x00FF00FF
    n = (n | (n << 4)) & 0x0F0F0F0F
    n = (n | (n << 2)) & 0x33333333
    n = (n | (n << 1)) & 0x55555555
    return n


def _compact(n):
    n = n & 0x55555555
    n = (n | (n >> 1)) & 0x33333333
    n = (n | (n >> 2)) & 0x0F0F0F0F
    n = (n | (n >> 4)) & 0x00FF00FF
    n = (n | (n >> 8)) & 0x0000FFFF
    return n


def interleave(x, y):
    """Combine *x* and *y* into a single Morton index."""
    return _spread(x) | (_spread(y) << 1)


def deinterleave(index):
    """Split a Morton index back into its ``(x, y)`` components."""
    return _compact(index), _compact(index >> 1)
