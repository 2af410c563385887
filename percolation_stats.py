import argparse
import logging
import math
import sys

import numpy as np
from scipy.stats import linregress

from square_percolation import Percolation

log = logging.getLogger(__name__)

# z value of the two-sided 95% normal interval
CONFIDENCE_95 = 1.96

# finite-size scaling exponent -1/nu for 2D percolation (nu = 4/3)
SCALING_EXPONENT = -3 / 4


class PercolationStats:
    """
    Monte Carlo estimate of the site percolation threshold.

    Every trial opens uniformly random sites of a fresh `Percolation` grid
    until it percolates and records the fraction of open sites. Draws that
    hit an already open site are simply thrown away.

    `stddev` is the Bessel-corrected sample standard deviation. With a single
    trial it is nan, and so are both confidence bounds; treat that as
    "not enough data".
    """

    def __init__(self, n: int, trials: int, rng=None):
        if trials < 1:
            raise ValueError("trials count must be a positive integer")

        self.gridSize = n
        self.trialCount = trials
        self.rng = rng if rng is not None else np.random.default_rng()

        results = np.empty(trials, dtype=float)
        for i in range(trials):
            results[i] = self._run_trial()
            log.debug("trial %d/%d: threshold %.6f", i + 1, trials, results[i])
        results.flags.writeable = False
        self.trialResults = results

        self._mean = None
        self._stddev = None
        log.info("n = %d, %d trials done", n, trials)

    def _run_trial(self) -> float:
        n = self.gridSize
        simulator = Percolation(n)
        while not simulator.percolates():
            row = int(self.rng.integers(1, n + 1))
            col = int(self.rng.integers(1, n + 1))
            if not simulator.isOpen(row, col):
                simulator.open_site(row, col)
        return simulator.numberOfOpenSites() / (n * n)

    def mean(self) -> float:
        if self._mean is None:
            self._mean = float(np.mean(self.trialResults))
        return self._mean

    def stddev(self) -> float:
        if self._stddev is None:
            if self.trialCount < 2:
                self._stddev = math.nan
            else:
                self._stddev = float(np.std(self.trialResults, ddof=1))
        return self._stddev

    def _half_width(self) -> float:
        return CONFIDENCE_95 * self.stddev() / math.sqrt(self.trialCount)

    def confidenceLo(self) -> float:
        return self.mean() - self._half_width()

    def confidenceHi(self) -> float:
        return self.mean() + self._half_width()

    def confidence_interval(self):
        return self.confidenceLo(), self.confidenceHi()

    def report(self):
        print(f"mean                    = {self.mean()}")
        print(f"stddev                  = {self.stddev()}")
        lo, hi = self.confidence_interval()
        print(f"95% confidence interval = [{lo}, {hi}]")


def sweep_sizes(sizes, trials: int, rng=None):
    """
    Run `trials` experiments for every grid size in `sizes`.

    Returns (sizes, means, stds) as float arrays, in the order given.
    """
    rng = rng if rng is not None else np.random.default_rng()
    means = []
    stds = []
    for n in sizes:
        log.info("simulate n = %d", n)
        stats = PercolationStats(int(n), trials, rng=rng)
        means.append(stats.mean())
        stds.append(stats.stddev())
    return np.asarray(sizes, dtype=float), np.asarray(means, dtype=float), np.asarray(stds, dtype=float)


def extrapolate_threshold(sizes, means, exponent=SCALING_EXPONENT):
    """
    Fit p_c(L) = p_c(inf) + slope * L**exponent and return the intercept.

    The fit is a straight line in the scaling variable L**exponent, so the
    intercept at L**exponent = 0 is the infinite-lattice estimate.
    """
    sizes = np.asarray(sizes, dtype=float)
    means = np.asarray(means, dtype=float)
    if sizes.shape != means.shape:
        raise ValueError("sizes and means must have the same length")
    if np.unique(sizes).size < 2:
        raise ValueError("need at least two distinct grid sizes to extrapolate")

    fit = linregress(sizes ** exponent, means)
    return {"pc_inf": float(fit.intercept), "slope": float(fit.slope), "r_squared": float(fit.rvalue ** 2)}


def positive_int(text):
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{text!r} is not an integer") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"{value} is not a positive integer")
    return value


def non_negative_int(text):
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{text!r} is not an integer") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"{value} is not a non-negative integer")
    return value


def build_parser():
    parser = argparse.ArgumentParser(
        prog="percolation-stats",
        description="Estimate the site percolation threshold of an n-by-n grid by Monte Carlo simulation.",
    )
    parser.add_argument("n", type=positive_int, help="Grid size (n x n sites).")
    parser.add_argument("trials", type=positive_int, help="Number of independent trials.")
    parser.add_argument("--seed", type=non_negative_int, default=None, help="Seed for the random generator.")
    parser.add_argument(
        "--Lmax",
        type=positive_int,
        default=None,
        help="Sweep grid sizes from n up to Lmax and extrapolate pc(infinity).",
    )
    parser.add_argument("--Lstep", type=positive_int, default=10, help="Step between swept grid sizes.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every trial.")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(format="[%(levelname)s] %(message)s")
    logging.getLogger().setLevel(logging.DEBUG if args.verbose else logging.INFO)
    rng = np.random.default_rng(args.seed)

    if args.Lmax is None:
        PercolationStats(args.n, args.trials, rng=rng).report()
        return 0

    if args.Lmax <= args.n:
        parser.error("--Lmax must be larger than n")

    sizes = np.arange(args.n, args.Lmax + 1, args.Lstep)
    if sizes.size < 2:
        parser.error("the sweep needs at least two grid sizes; lower --Lstep")

    L_values, means, stds = sweep_sizes(sizes, args.trials, rng=rng)
    for L, m, s in zip(L_values, means, stds):
        print(f"n = {int(L):5d}  mean = {m:.6f}  stddev = {s:.6f}")

    fit = extrapolate_threshold(L_values, means)
    print(f"pc(infinity) = {fit['pc_inf']:.6f}, R^2 = {fit['r_squared']:.4f} (exponent {SCALING_EXPONENT:.2f})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
