# pylint: disable = invalid-name
"""
Numba helpers shared by the kernels: the `myjit` device decorator and small
3x3 complex matrix routines that work inside compiled code.
"""

from __future__ import absolute_import

from numba import njit

from nsiosc import CTYPE, TARGET


__all__ = [
    "ctype",
    "myjit",
    "conjugate",
    "conjugate_transpose",
    "matrix_dot_matrix",
    "clear_matrix",
]


ctype = CTYPE


def myjit(func):
    """Compile `func` as a device function callable from other kernels and
    from the host (TARGET "cpu" or "parallel" both compile the device code
    for the host)"""
    assert TARGET in ("cpu", "parallel"), str(TARGET)
    return njit(func, fastmath=False, cache=False)


@myjit
def conjugate(z):
    """complex conjugate of a scalar"""
    return z.conjugate()


@myjit
def conjugate_transpose(A, B):
    """B is the conjugate transpose of A"""
    for i in range(A.shape[0]):
        for j in range(A.shape[1]):
            B[i, j] = A[j, i].conjugate()


@myjit
def matrix_dot_matrix(A, B, C):
    """dot-product of two 2d arrays, C = A * B (C is overwritten)"""
    for i in range(A.shape[0]):
        for j in range(B.shape[1]):
            C[i, j] = 0.0
            for n in range(A.shape[1]):
                C[i, j] += A[i, n] * B[n, j]


@myjit
def clear_matrix(A):
    """zero out 2d array"""
    for i in range(A.shape[0]):
        for j in range(A.shape[1]):
            A[i, j] = 0.0
