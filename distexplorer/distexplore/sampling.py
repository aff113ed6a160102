''' Random sample generation for distribution specifications

Every distribution is sampled by transforming uniform [0, 1) variates
from a numpy random Generator. Samples come back as numpy arrays:
float for continuous, int for discrete, bool for boolean, and str
for categorical distributions.
'''

import logging
import numpy as np

from ..common.distributions import InvalidSpecification


# Use Knuth's multiplicative Poisson algorithm up to this rate. exp(-lam)
# loses precision and the loop gets long beyond it.
POISSON_KNUTH_MAX = 30

# Largest number of uniform variates to draw at once when summing Bernoulli
# trials for a Binomial. Larger problems use the Generator's binomial sampler.
BINOMIAL_SUM_MAX = 10_000_000


def get_rng(seed=None):
    ''' Get the random source. Passes an existing np.random.Generator
        through unchanged, otherwise seeds a new one (None for fresh entropy).
    '''
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def choose(weights, count, rng):
    ''' Draw indices into weights, each with probability proportional to its weight.
        Indices of zero-weight entries are never returned.
    '''
    weights = np.asarray(weights, dtype=float)
    nonzero = np.flatnonzero(weights > 0)
    cumulative = np.cumsum(weights[nonzero])
    u = rng.random(count) * cumulative[-1]
    idx = np.searchsorted(cumulative, u, side='right')
    return nonzero[np.minimum(idx, len(nonzero)-1)]


def _normal(spec, count, rng):
    # Box-Muller. 1-u is in (0, 1] so the log is finite.
    u1 = rng.random(count)
    u2 = rng.random(count)
    z = np.sqrt(-2 * np.log1p(-u1)) * np.cos(2 * np.pi * u2)
    return spec.mean + spec.std * z


def _uniform(spec, count, rng):
    return spec.low + rng.random(count) * (spec.high - spec.low)


def _expon(spec, count, rng):
    return -np.log1p(-rng.random(count)) / spec.rate


def _kumaraswamy(spec, count, rng):
    u = rng.random(count)
    return (1 - (1 - u)**(1/spec.b))**(1/spec.a)


def _rayleigh(spec, count, rng):
    return spec.sigma * np.sqrt(-2 * np.log1p(-rng.random(count)))


def _bernoulli(spec, count, rng):
    return rng.random(count) < spec.p


def _binom(spec, count, rng):
    if count * spec.n > BINOMIAL_SUM_MAX:
        return rng.binomial(spec.n, spec.p, size=count).astype(np.int64)
    trials = rng.random((count, spec.n)) < spec.p
    return trials.sum(axis=1).astype(np.int64)


def _poisson(spec, count, rng):
    if spec.lam > POISSON_KNUTH_MAX:
        return rng.poisson(spec.lam, size=count).astype(np.int64)

    # Knuth: multiply uniforms until the product drops below exp(-lam)
    limit = np.exp(-spec.lam)
    k = np.zeros(count, dtype=np.int64)
    product = rng.random(count)
    active = product > limit
    while active.any():
        k[active] += 1
        product[active] *= rng.random(np.count_nonzero(active))
        active = product > limit
    return k


def _empty(spec, count):
    ''' Output array of the right type for the distribution's domain '''
    if spec.domain == 'discrete':
        return np.zeros(count, dtype=np.int64)
    elif spec.domain == 'boolean':
        return np.zeros(count, dtype=bool)
    elif spec.domain == 'categorical':
        return np.full(count, '', dtype=object)
    return np.zeros(count, dtype=float)


def _mixture(spec, count, rng):
    index = choose(spec.weights, count, rng)
    samples = _empty(spec, count)
    for i, component in enumerate(spec.components):
        mask = index == i
        n = np.count_nonzero(mask)
        if n > 0:
            samples[mask] = draw(component, n, rng=rng)
    if spec.domain == 'categorical':
        samples = samples.astype(str)
    return samples


def _categorical(spec, count, rng):
    index = choose(spec.weights, count, rng)
    return np.array(spec.labels, dtype=str)[index]


_samplers = {
    'normal': _normal,
    'uniform': _uniform,
    'expon': _expon,
    'kumaraswamy': _kumaraswamy,
    'rayleigh': _rayleigh,
    'bernoulli': _bernoulli,
    'binom': _binom,
    'poisson': _poisson,
    'mixture': _mixture,
    'categorical': _categorical,
    }


def draw(spec, count, rng=None):
    ''' Draw random samples from a distribution

        Args:
            spec (Distribution): Distribution specification to sample
            count (int): Number of samples (>= 0)
            rng (np.random.Generator or int): Random source, or seed for
                a new one. Fresh entropy if None.

        Returns:
            samples (array): Array of count samples
    '''
    spec.validate()
    if count != int(count) or count < 0:
        raise InvalidSpecification(f'Sample count must be an integer >= 0, got {count}')
    try:
        sampler = _samplers[spec.name]
    except KeyError:
        raise InvalidSpecification(f'No sampler for distribution `{spec.name}`') from None

    samples = sampler(spec, int(count), get_rng(rng))
    logging.debug(f'Drew {count} samples from {spec.displayname}')
    return samples
