import numpy as np

from union_find import WeightedQuickUnionUF


class Percolation:
    """
    Site percolation on an n-by-n square grid with 4-neighbour connectivity.

    Sites are addressed by 1-indexed (row, col). Site (row, col) lives at
    union-find index (row - 1) * n + col; index 0 is the virtual top and
    index n * n + 1 the virtual bottom. Both terminals are joined to their
    whole border row up front, so `percolates` is a single `connected` call.

    Unlike a single-structure grid, a second union-find without the bottom
    terminal answers `isFull`, so an open bottom-row site is not reported
    full just because the bottom terminal is connected to the top.
    """

    # create a n by n grid with all sites blocked
    def __init__(self, n: int):
        if n <= 0:
            raise ValueError("grid size n must be a positive integer")

        self.gridSize = n
        self.gridSquare = n * n
        self.grid = np.zeros((n, n), dtype=bool)
        self.openSite = 0

        self.virtualTop = 0
        self.virtualBottom = self.gridSquare + 1

        self.wqfGrid_TB = WeightedQuickUnionUF(self.gridSquare + 2)
        self.wqfGrid_Full = WeightedQuickUnionUF(self.gridSquare + 1)

        for col in range(1, n + 1):
            top = self.flattenGrid(1, col)
            bottom = self.flattenGrid(n, col)
            self.wqfGrid_TB.union(self.virtualTop, top)
            self.wqfGrid_TB.union(self.virtualBottom, bottom)
            self.wqfGrid_Full.union(self.virtualTop, top)

    # open the site[row, col] if it's not open yet
    def open_site(self, row: int, col: int):
        self.validState(row, col)
        if self.grid[row - 1][col - 1]:
            return

        self.grid[row - 1][col - 1] = True
        self.openSite += 1

        flatIndex = self.flattenGrid(row, col)
        # left, right, up, down
        for nrow, ncol in ((row, col - 1), (row, col + 1), (row - 1, col), (row + 1, col)):
            if self.isOnGrid(nrow, ncol) and self.grid[nrow - 1][ncol - 1]:
                neighbour = self.flattenGrid(nrow, ncol)
                self.wqfGrid_TB.union(flatIndex, neighbour)
                self.wqfGrid_Full.union(flatIndex, neighbour)

    # is site[row, col] open?
    def isOpen(self, row: int, col: int) -> bool:
        self.validState(row, col)
        return bool(self.grid[row - 1][col - 1])

    # is site[row, col] open and reachable from the top row?
    def isFull(self, row: int, col: int) -> bool:
        self.validState(row, col)
        if not self.grid[row - 1][col - 1]:
            return False
        return self.wqfGrid_Full.connected(self.virtualTop, self.flattenGrid(row, col))

    def numberOfOpenSites(self) -> int:
        return self.openSite

    def percolates(self) -> bool:
        # for n == 1 the lone site is in both border rows, so the terminals
        # are joined before anything is open
        return self.openSite > 0 and self.wqfGrid_TB.connected(self.virtualTop, self.virtualBottom)

    def validState(self, row: int, col: int):
        if not self.isOnGrid(row, col):
            raise IndexError(f"site ({row}, {col}) is outside the {self.gridSize}x{self.gridSize} grid")

    def flattenGrid(self, row: int, col: int) -> int:
        return self.gridSize * (row - 1) + col

    def isOnGrid(self, row: int, col: int) -> bool:
        return 1 <= row <= self.gridSize and 1 <= col <= self.gridSize
