# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Longest common subsequence of two line sequences.

The core is the classic O(NM) dynamic programming grid. Equal leading
and trailing lines are stripped first, which keeps the grid small for
the usual case of a few edits in a large document.
"""

__all__ = ["lcs_indices", "lcs_opcodes"]


def llcs_grid(A, B):
    "Compute grid R[x][y] == llcs(A[:x], B[:y])."
    N, M = len(A), len(B)
    R = [[0]*(M+1) for i in range(N+1)]
    for x in range(1, N+1):
        a = A[x-1]
        row = R[x]
        prev = R[x-1]
        for y in range(1, M+1):
            if a == B[y-1]:
                row[y] = prev[y-1] + 1
            else:
                row[y] = max(prev[y], row[y-1])
    return R


def _grid_lcs_indices(A, B):
    R = llcs_grid(A, B)
    A_indices = []
    B_indices = []
    x = len(A)
    y = len(B)
    while x > 0 and y > 0:
        if A[x-1] == B[y-1]:
            x -= 1
            y -= 1
            A_indices.append(x)
            B_indices.append(y)
        elif R[x][y] == R[x-1][y]:
            x -= 1
        else:
            y -= 1
    A_indices.reverse()
    B_indices.reverse()
    return A_indices, B_indices


def lcs_indices(A, B):
    """Compute the lcs of A and B.

    Returns two lists (A_indices, B_indices) with length == llcs(A, B),
    such that lcs(A, B) == A[A_indices] == B[B_indices].
    """
    N, M = len(A), len(B)

    # Common prefix
    p = 0
    while p < N and p < M and A[p] == B[p]:
        p += 1
    # Common suffix, not overlapping the prefix
    s = 0
    while s < N - p and s < M - p and A[N-1-s] == B[M-1-s]:
        s += 1

    A_mid, B_mid = _grid_lcs_indices(A[p:N-s], B[p:M-s])

    A_indices = list(range(p))
    B_indices = list(range(p))
    A_indices.extend(i + p for i in A_mid)
    B_indices.extend(j + p for j in B_mid)
    A_indices.extend(range(N-s, N))
    B_indices.extend(range(M-s, M))
    return A_indices, B_indices


def lcs_opcodes(A, B):
    """Compute the opcodes transforming A into B.

    Opcodes are tuples (tag, i1, i2, j1, j2) as produced by difflib,
    with tag one of 'equal', 'delete', 'insert' or 'replace'.
    """
    A_indices, B_indices = lcs_indices(A, B)
    opcodes = []
    x = 0
    y = 0
    # Sentinel match at the end flushes trailing deletions/insertions
    for i, j in zip(A_indices + [len(A)], B_indices + [len(B)]):
        if i > x and j > y:
            opcodes.append(("replace", x, i, y, j))
        elif i > x:
            opcodes.append(("delete", x, i, y, y))
        elif j > y:
            opcodes.append(("insert", x, x, y, j))
        if i < len(A):
            if opcodes and opcodes[-1][0] == "equal":
                tag, i1, i2, j1, j2 = opcodes[-1]
                opcodes[-1] = ("equal", i1, i + 1, j1, j + 1)
            else:
                opcodes.append(("equal", i, i + 1, j, j + 1))
        x = i + 1
        y = j + 1
    return opcodes
