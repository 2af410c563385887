import numpy as np


# weighted quick-union with path compression
class WeightedQuickUnionUF:
    """
    Disjoint-set forest over the fixed universe 0 .. n-1.

    Both arrays are allocated once; elements are plain integer indices,
    so `union` and `connected` run in amortized near-constant time.
    """

    def __init__(self, n: int):
        if n <= 0:
            raise ValueError("union-find size must be a positive integer")

        # parent[i] == i marks a root
        self.parent = np.arange(n, dtype=np.int64)
        # size[r] is only meaningful while r is a root
        self.size = np.ones(n, dtype=np.int64)
        self.count = n

    def __len__(self):
        return len(self.parent)

    def get_count(self) -> int:
        """Number of disjoint components."""
        return self.count

    def _validate(self, p: int):
        n = len(self)
        if p < 0 or p >= n:
            raise IndexError(f"index {p} is not between 0 and {n - 1}")

    def find(self, p: int) -> int:
        self._validate(p)

        root = p
        while root != self.parent[root]:
            root = self.parent[root]

        # compress: every node on the walked path now hangs off the root
        while p != root:
            nxt = self.parent[p]
            self.parent[p] = root
            p = nxt

        return int(root)

    def connected(self, p: int, q: int) -> bool:
        return self.find(p) == self.find(q)

    def union(self, p: int, q: int):
        rootP = self.find(p)
        rootQ = self.find(q)
        if rootP == rootQ:
            return

        # smaller tree goes under the larger one
        if self.size[rootP] < self.size[rootQ]:
            rootP, rootQ = rootQ, rootP
        self.parent[rootQ] = rootP
        self.size[rootP] += self.size[rootQ]
        self.count -= 1
