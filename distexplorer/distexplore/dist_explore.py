''' Backend for distribution explorer. Samples distribution specifications and
    reduces the samples to histograms and summary statistics for display.

    recompute() is the whole pipeline for one distribution: draw samples,
    check them against the distribution's domain, aggregate, and summarize.
    It holds no state; call it again whenever a parameter changes.
'''
import logging
from dataclasses import dataclass
from typing import Any, Optional
import numpy as np

from ..common import distributions, reporter
from . import sampling
from .aggregate import histogram, discrete_histogram, categorical_counts, InternalInconsistency
from .summary import summarize, SummaryStats
from .report.dist_explore import ReportDistExplore, ReportExploreResult


SAMPLE_COUNTS = (100, 1000, 10000)
DEFAULT_SAMPLES = 1000
DEFAULT_BINS = 30
MAX_SAMPLES = 10000


@reporter.reporter(ReportExploreResult)
@dataclass
class ExploreResult:
    ''' Samples of one distribution and their aggregates

    Attributes:
        spec: The distribution that was sampled
        samples: Array of samples
        aggregate: List of HistogramBin (continuous), list of DiscreteHistogramBin
            (discrete), or dictionary of label: count (boolean and categorical)
        stats: Summary statistics of numeric samples. None for categorical.
    '''
    spec: distributions.Distribution
    samples: np.ndarray
    aggregate: Any
    stats: Optional[SummaryStats]

    @property
    def domain(self):
        return self.spec.domain

    @property
    def count(self):
        ''' Number of samples '''
        return len(self.samples)

    @property
    def success_rate(self):
        ''' Fraction of True samples of a boolean distribution '''
        if self.domain != 'boolean':
            raise AttributeError('success_rate only applies to boolean distributions')
        if self.count == 0:
            return np.nan
        return self.aggregate['True'] / self.count

    def expected(self):
        ''' Theoretical mean and standard deviation of the sampled distribution '''
        return self.spec.expected()


def check_domain(spec, samples):
    ''' Verify samples are the type and in the range the distribution produces.
        Raises InternalInconsistency if not.
    '''
    samples = np.asarray(samples)
    domain = spec.domain
    if domain == 'categorical':
        categorical_counts(samples, spec.labels)  # Raises on undeclared labels
        return
    elif domain == 'boolean':
        if samples.dtype != bool:
            raise InternalInconsistency(f'{spec.displayname} samples must be boolean, got {samples.dtype}')
        return
    elif domain == 'discrete' and not np.issubdtype(samples.dtype, np.integer):
        raise InternalInconsistency(f'{spec.displayname} samples must be integers, got {samples.dtype}')
    elif domain == 'continuous' and not np.issubdtype(samples.dtype, np.floating):
        raise InternalInconsistency(f'{spec.displayname} samples must be floats, got {samples.dtype}')

    if len(samples) > 0:
        lo, hi = spec.support()
        if not np.all(np.isfinite(samples)) or samples.min() < lo or samples.max() > hi:
            raise InternalInconsistency(f'{spec.displayname} samples fall outside [{lo}, {hi}]')


def recompute(spec, count, bins=DEFAULT_BINS, rng=None):
    ''' Sample the distribution and aggregate the samples

        Args:
            spec (Distribution): Distribution to sample
            count (int): Number of samples
            bins (int): Number of bins for continuous histograms
            rng (np.random.Generator or int): Random source or seed

        Returns:
            ExploreResult
    '''
    samples = sampling.draw(spec, count, rng=rng)
    check_domain(spec, samples)

    stats = None
    if spec.domain == 'continuous':
        aggregate = histogram(samples, bins)
        stats = summarize(samples)
    elif spec.domain == 'discrete':
        aggregate = discrete_histogram(samples)
        stats = summarize(samples)
    elif spec.domain == 'boolean':
        aggregate = categorical_counts(np.where(samples, 'True', 'False'), spec.labels)
        stats = summarize(samples.astype(float))
    else:
        aggregate = categorical_counts(samples, spec.labels)

    logging.debug(f'Recomputed {spec.displayname} with {count} samples')
    return ExploreResult(spec, samples, aggregate, stats)


class DistExplore:
    ''' Distribution Explorer

        Holds a set of named distributions and samples each one
        with the same number of samples.

        Args:
            samples (int): Number of random samples to draw
            bins (int): Number of bins for continuous histograms
            seed (int): Random number seed
    '''
    def __init__(self, samples=DEFAULT_SAMPLES, bins=DEFAULT_BINS, seed=None):
        self.dists = {}          # Dictionary of name: Distribution
        self.nsamples = samples  # Number of samples
        self.bins = bins
        self.seed = seed
        self.results = {}        # Dictionary of name: ExploreResult
        self.report = ReportDistExplore(self)
        self.set_numsamples(samples)

    def set_numsamples(self, N):
        ''' Set number of samples. Clears any previous results. '''
        if N != int(N) or not 1 <= N <= MAX_SAMPLES:
            raise ValueError(f'Number of samples must be an integer from 1 to {MAX_SAMPLES}, got {N}')
        self.nsamples = int(N)
        self.results = {}

    def set_dist(self, name, dist):
        ''' Define a named distribution

            Args:
                name (str): Name for the distribution
                dist (Distribution or dict): Distribution, or its config dictionary
        '''
        if not isinstance(dist, distributions.Distribution):
            dist = distributions.from_config(dist)
        self.dists[name] = dist
        self.results.pop(name, None)

    def rem_dist(self, name):
        ''' Remove a named distribution '''
        self.dists.pop(name)
        self.results.pop(name, None)

    def sample(self, name, rng=None):
        ''' Sample distribution with given name

            Args:
                name (str): Name of distribution to sample
                rng (np.random.Generator): Random source. New one seeded with
                    self.seed if not given.

            Returns:
                ExploreResult
        '''
        dist = self.dists.get(name)
        if dist is None:
            raise ValueError(f'Distribution {name} has not been defined')
        if rng is None:
            rng = sampling.get_rng(self.seed)
        self.results[name] = recompute(dist, self.nsamples, bins=self.bins, rng=rng)
        return self.results[name]

    def calculate(self):
        ''' Sample all distributions and return self '''
        rng = sampling.get_rng(self.seed)
        for name in self.dists:
            self.sample(name, rng=rng)
        return self
