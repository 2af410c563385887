import numpy as np
import pytest

from square_percolation import Percolation


def open_all(perc):
    n = perc.gridSize
    for row in range(1, n + 1):
        for col in range(1, n + 1):
            perc.open_site(row, col)


@pytest.mark.parametrize("n", [1, 2, 3, 5, 8])
def test_fully_open_grid_percolates(n):
    perc = Percolation(n)
    open_all(perc)
    assert perc.percolates()
    assert perc.numberOfOpenSites() == n * n


@pytest.mark.parametrize("n", [1, 2, 3, 5, 8])
def test_blocked_grid_does_not_percolate(n):
    perc = Percolation(n)
    assert not perc.percolates()
    assert perc.numberOfOpenSites() == 0


@pytest.mark.parametrize("n", [0, -1])
def test_rejects_non_positive_size(n):
    with pytest.raises(ValueError):
        Percolation(n)


@pytest.mark.parametrize("n", [1, 2, 4])
def test_coordinates_outside_grid_are_rejected(n):
    perc = Percolation(n)
    bad = [(0, 1), (1, 0), (n + 1, 1), (1, n + 1)]
    for row, col in bad:
        with pytest.raises(IndexError):
            perc.open_site(row, col)
        with pytest.raises(IndexError):
            perc.isOpen(row, col)
        with pytest.raises(IndexError):
            perc.isFull(row, col)
    assert perc.numberOfOpenSites() == 0
    assert not perc.grid.any()


def test_terminals_joined_to_border_rows_at_construction():
    n = 4
    perc = Percolation(n)
    uf = perc.wqfGrid_TB
    for col in range(1, n + 1):
        assert uf.connected(perc.virtualTop, perc.flattenGrid(1, col))
        assert uf.connected(perc.virtualBottom, perc.flattenGrid(n, col))
    assert not uf.connected(perc.virtualTop, perc.virtualBottom)
    assert perc.virtualBottom == n * n + 1


def test_site_index_mapping():
    perc = Percolation(3)
    assert perc.flattenGrid(1, 1) == 1
    assert perc.flattenGrid(1, 3) == 3
    assert perc.flattenGrid(2, 1) == 4
    assert perc.flattenGrid(3, 3) == 9


def test_open_is_idempotent():
    once = Percolation(3)
    twice = Percolation(3)
    for perc in (once, twice):
        perc.open_site(1, 2)
        perc.open_site(2, 2)
    twice.open_site(2, 2)

    assert twice.numberOfOpenSites() == once.numberOfOpenSites() == 2
    assert twice.isOpen(2, 2) and once.isOpen(2, 2)
    assert twice.isFull(2, 2) == once.isFull(2, 2)
    assert twice.percolates() == once.percolates()


def test_open_count_is_monotone_and_full_implies_open():
    n = 7
    rng = np.random.default_rng(7)
    perc = Percolation(n)
    previous = 0
    for _ in range(60):
        row, col = (int(v) for v in rng.integers(1, n + 1, size=2))
        perc.open_site(row, col)
        assert perc.numberOfOpenSites() >= previous
        previous = perc.numberOfOpenSites()

    assert previous == int(perc.grid.sum())
    for row in range(1, n + 1):
        for col in range(1, n + 1):
            if perc.isFull(row, col):
                assert perc.isOpen(row, col)


def test_single_site_grid():
    perc = Percolation(1)
    assert not perc.percolates()
    assert not perc.isFull(1, 1)
    perc.open_site(1, 1)
    assert perc.percolates()
    assert perc.isFull(1, 1)


def test_diagonal_sites_do_not_percolate():
    perc = Percolation(2)
    perc.open_site(1, 1)
    perc.open_site(2, 2)
    assert not perc.percolates()
    assert perc.isFull(1, 1)
    assert not perc.isFull(2, 2)


def test_vertical_pair_percolates_on_second_open():
    perc = Percolation(2)
    perc.open_site(1, 1)
    assert not perc.percolates()
    perc.open_site(2, 1)
    assert perc.percolates()


def test_connection_does_not_depend_on_opening_order():
    perc = Percolation(3)
    perc.open_site(3, 2)
    perc.open_site(1, 2)
    assert not perc.percolates()
    perc.open_site(2, 2)
    assert perc.percolates()
    assert perc.isFull(3, 2)


def test_bottom_site_not_full_through_bottom_terminal():
    perc = Percolation(3)
    for row in (1, 2, 3):
        perc.open_site(row, 1)
    perc.open_site(3, 3)
    assert perc.percolates()
    assert perc.isFull(3, 1)
    assert perc.isOpen(3, 3)
    assert not perc.isFull(3, 3)


def test_full_follows_winding_path():
    perc = Percolation(4)
    path = [(1, 4), (2, 4), (2, 3), (2, 2), (2, 1), (3, 1), (4, 1)]
    for row, col in path:
        perc.open_site(row, col)
    assert perc.percolates()
    assert all(perc.isFull(row, col) for row, col in path)
    assert not perc.isOpen(3, 2)


def test_fullness_tracked_without_bottom_terminal():
    perc = Percolation(3)
    assert len(perc.wqfGrid_TB) == 3 * 3 + 2
    assert len(perc.wqfGrid_Full) == 3 * 3 + 1
    for row in (1, 2, 3):
        perc.open_site(row, 2)
    perc.open_site(3, 1)
    perc.open_site(3, 3)
    assert perc.isFull(3, 1) and perc.isFull(3, 3)
    perc.open_site(2, 3)
    assert perc.isFull(2, 3)
