''' Probability Distribution Specifications

Each distribution kind is a frozen dataclass carrying only its own parameters.
Specs validate themselves when constructed and raise InvalidSpecification
if any parameter is out of range, so a spec that exists is a valid spec.
Editing a parameter means building a new spec (see Distribution.replace()).

Use get_distribution(), given a distribution name, to return an instance
of one of the Distribution subclasses, or from_config() to rebuild one
from the dictionary returned by get_config().
'''

import logging
import dataclasses
from dataclasses import dataclass, fields
from typing import Tuple
import numpy as np
from scipy import stats, special


# Tolerance on sums of probabilities/weights
TOLERANCE = 1E-9

# Uniform variates are multiples of 2**-53, so no transformed unit variate exceeds
# -ln(2**-53) = 36.7 (exponential) or sqrt(2*36.7) = 8.6 (normal, Rayleigh).
MAX_EXPON_DEVIATE = 40
MAX_NORMAL_DEVIATE = 9


class InvalidSpecification(ValueError):
    ''' Distribution parameters violate the invariants of the distribution '''


def get_argnames(name):
    ''' Get argument names for the distribution '''
    try:
        return _aliases[name.lower()].argnames
    except (KeyError, AttributeError):
        raise InvalidSpecification(f'Unknown distribution `{name}`') from None


def get_distribution(name, **kwds):
    ''' Get an instance of a Distribution subclass.

        Parameters
        ----------
        name: string
            Name of the distribution
        kwds: keyword arguments
            Parameters of the distribution. Parameters not given
            take the distribution's defaults.
    '''
    argnames = get_argnames(name)
    unknown = [k for k in kwds if k not in argnames]
    if unknown:
        raise InvalidSpecification(f'Unknown parameter(s) {", ".join(unknown)} for distribution `{name}`. '
                                   f'Must be one of {", ".join(argnames)}.')
    return _aliases[name.lower()](**kwds)


def from_config(config):
    ''' Load a Distribution instance from a config dictionary. '''
    config = dict(config)
    name = config.pop('dist', 'normal')
    return get_distribution(name, **config)


def _isnumber(value):
    ''' Value is a real, finite number '''
    try:
        return bool(np.isfinite(value))
    except TypeError:
        return False


def _normalize(weights):
    ''' Renormalize weights to sum to 1 '''
    weights = np.asarray(weights, dtype=float)
    return weights / weights.sum()


class Distribution:
    ''' Base class for distribution specifications

        Subclasses are frozen dataclasses listing their parameters in
        `argnames`, and implement validate() and _frozen().

        Attributes:
            name (str): Registry name of the distribution
            displayname (str): Human-readable name
            domain (str): Kind of sample drawn: 'continuous', 'discrete',
                'boolean', or 'categorical'
    '''
    name = None
    displayname = None
    description = ''
    domain = 'continuous'
    argnames = []

    def __post_init__(self):
        self.validate()

    def _require_numbers(self, *names):
        ''' Check the named parameters are finite and store them as floats '''
        for pname in names:
            value = getattr(self, pname)
            if not _isnumber(value):
                raise InvalidSpecification(f'{self.displayname} parameter `{pname}` must be a finite number, '
                                           f'got {value!r}')
            object.__setattr__(self, pname, float(value))

    def _require_positive(self, *names):
        self._require_numbers(*names)
        for pname in names:
            if getattr(self, pname) <= 0:
                raise InvalidSpecification(f'{self.displayname} parameter `{pname}` must be > 0, '
                                           f'got {getattr(self, pname)}')

    def _require_representable(self, extent):
        ''' Check the largest sample magnitude, or span of samples, fits in a float '''
        if not np.isfinite(extent):
            raise InvalidSpecification(f'{self.displayname} parameters {self.get_config()} give samples '
                                       'too large to represent')

    def _require_probability(self, pname):
        self._require_numbers(pname)
        if not 0 <= getattr(self, pname) <= 1:
            raise InvalidSpecification(f'{self.displayname} parameter `{pname}` must be in [0, 1], '
                                       f'got {getattr(self, pname)}')

    def validate(self):
        ''' Check the parameters. Raises InvalidSpecification. Subclass this. '''

    def replace(self, **kwds):
        ''' Return a new (validated) spec with some parameters changed '''
        return dataclasses.replace(self, **kwds)

    def get_config(self):
        ''' Get configuration dictionary (args plus distribution name) '''
        d = {f.name: getattr(self, f.name) for f in fields(self)}
        d.update({'dist': self.name})
        return d

    def _frozen(self):
        ''' Equivalent frozen scipy.stats distribution '''
        raise NotImplementedError

    @property
    def labels(self):
        ''' Declared labels for boolean and categorical distributions '''
        return None

    def support(self):
        ''' Lower and upper limits of numeric samples '''
        lo, hi = self._frozen().support()
        return float(lo), float(hi)

    def expected(self):
        ''' Theoretical mean and standard deviation of the distribution '''
        dist = self._frozen()
        return float(dist.mean()), float(dist.std())

    def helpstr(self):
        ''' Get a help string for this Distribution. '''
        return self.description


@dataclass(frozen=True)
class DNormal(Distribution):
    ''' Normal distribution defined by mean and standard deviation '''
    mean: float = 0.0
    std: float = 1.0

    name = 'normal'
    displayname = 'Normal (Gaussian)'
    description = ('A bell-shaped continuous distribution defined by mean and standard deviation. '
                   'Common in natural phenomena due to the Central Limit Theorem.')
    argnames = ['mean', 'std']

    def validate(self):
        self._require_numbers('mean')
        self._require_positive('std')
        # Histogram bins span from the smallest to the largest sample
        self._require_representable(2 * (abs(self.mean) + MAX_NORMAL_DEVIATE * self.std))

    def _frozen(self):
        return stats.norm(loc=self.mean, scale=self.std)


@dataclass(frozen=True)
class DUniform(Distribution):
    ''' Uniform distribution from low to high '''
    low: float = 0.0
    high: float = 1.0

    name = 'uniform'
    displayname = 'Uniform'
    description = ('All values in a given range are equally likely. '
                   'Useful for modeling random choices within bounds.')
    argnames = ['low', 'high']

    def validate(self):
        self._require_numbers('low', 'high')
        if self.low >= self.high:
            raise InvalidSpecification(f'Uniform requires low < high, got low={self.low}, high={self.high}')
        self._require_representable(self.high - self.low)

    def _frozen(self):
        return stats.uniform(loc=self.low, scale=self.high-self.low)


@dataclass(frozen=True)
class DExpon(Distribution):
    ''' Exponential distribution defined by rate parameter '''
    rate: float = 1.0

    name = 'expon'
    displayname = 'Exponential'
    description = '''Models the time between events in a Poisson process. Commonly used for wait times and failure rates.

PDF(x) = rate * exp(-rate*x), rate > 0'''
    argnames = ['rate']

    def validate(self):
        self._require_positive('rate')
        self._require_representable(MAX_EXPON_DEVIATE / self.rate)

    def _frozen(self):
        return stats.expon(scale=1/self.rate)


@dataclass(frozen=True)
class DKumaraswamy(Distribution):
    ''' Kumaraswamy distribution on [0, 1] with shape parameters a and b.

        Scipy doesn't have this one. Moments come from the closed form
        E[X^n] = b * B(1 + n/a, b).
    '''
    a: float = 2.0
    b: float = 5.0

    name = 'kumaraswamy'
    displayname = 'Kumaraswamy'
    description = '''A flexible distribution on [0,1] with two shape parameters. Alternative to Beta distribution with simpler sampling.

CDF(x) = 1 - (1 - x^a)^b, a > 0, b > 0'''
    argnames = ['a', 'b']

    def validate(self):
        self._require_positive('a', 'b')

    def moment(self, n):
        ''' Raw moment E[X^n] '''
        return self.b * special.beta(1 + n/self.a, self.b)

    def support(self):
        return 0.0, 1.0

    def expected(self):
        m1, m2 = self.moment(1), self.moment(2)
        return float(m1), float(np.sqrt(max(m2 - m1**2, 0)))


@dataclass(frozen=True)
class DRayleigh(Distribution):
    ''' Rayleigh distribution with scale sigma '''
    sigma: float = 1.0

    name = 'rayleigh'
    displayname = 'Rayleigh'
    description = ('Magnitude of a two-dimensional vector whose components are independent normal '
                   'variables with standard deviation sigma.')
    argnames = ['sigma']

    def validate(self):
        self._require_positive('sigma')
        self._require_representable(MAX_NORMAL_DEVIATE * self.sigma)

    def _frozen(self):
        return stats.rayleigh(scale=self.sigma)


@dataclass(frozen=True)
class DBernoulli(Distribution):
    ''' Bernoulli distribution with probability of success p '''
    p: float = 0.5

    name = 'bernoulli'
    displayname = 'Bernoulli'
    description = ('Models a single yes/no trial with a given probability of success. '
                   'Foundation for other discrete distributions.')
    domain = 'boolean'
    argnames = ['p']

    def validate(self):
        self._require_probability('p')

    @property
    def labels(self):
        return ('False', 'True')

    def _frozen(self):
        return stats.bernoulli(self.p)


@dataclass(frozen=True)
class DBinom(Distribution):
    ''' Binomial distribution defined by "n" and "p". '''
    n: int = 10
    p: float = 0.5

    name = 'binom'
    displayname = 'Binomial'
    description = 'Models the number of successes in a fixed number of independent Bernoulli trials.'
    domain = 'discrete'
    argnames = ['n', 'p']

    def validate(self):
        self._require_numbers('n')
        if self.n != int(self.n) or self.n < 1:
            raise InvalidSpecification(f'Binomial trials `n` must be an integer >= 1, got {self.n}')
        object.__setattr__(self, 'n', int(self.n))
        self._require_probability('p')

    def support(self):
        return 0.0, float(self.n)

    def _frozen(self):
        return stats.binom(self.n, self.p)


@dataclass(frozen=True)
class DPoisson(Distribution):
    ''' Poisson discrete distribution defined by rate "lam". '''
    lam: float = 3.0

    name = 'poisson'
    displayname = 'Poisson'
    description = 'Models the number of events occurring in a fixed interval, given a known average rate.'
    domain = 'discrete'
    argnames = ['lam']

    def validate(self):
        self._require_positive('lam')

    def support(self):
        return 0.0, np.inf

    def _frozen(self):
        return stats.poisson(self.lam)


@dataclass(frozen=True)
class DMixture(Distribution):
    ''' Weighted mixture of other distributions. All components must draw the
        same kind of sample. Components may be given as Distribution instances
        or as config dictionaries.
    '''
    components: Tuple[Distribution, ...] = (DNormal(-1, 0.5), DNormal(2, 1))
    weights: Tuple[float, ...] = (0.5, 0.5)

    name = 'mixture'
    displayname = 'Mixture'
    description = ('Combines multiple distributions with specified weights. '
                   'Useful for modeling multi-modal data.')
    argnames = ['components', 'weights']

    def validate(self):
        try:
            components = tuple(c if isinstance(c, Distribution) else from_config(c) for c in self.components)
            weights = tuple(self.weights)
        except TypeError:
            raise InvalidSpecification('Mixture components and weights must be sequences') from None
        object.__setattr__(self, 'components', components)

        if len(components) == 0:
            raise InvalidSpecification('Mixture requires at least one component')
        if len(weights) != len(components):
            raise InvalidSpecification(f'Mixture has {len(components)} components but {len(weights)} weights')
        if not all(_isnumber(w) for w in weights):
            raise InvalidSpecification(f'Mixture weights must be finite numbers, got {weights}')
        weights = tuple(float(w) for w in weights)
        object.__setattr__(self, 'weights', weights)
        if any(w < 0 for w in weights):
            raise InvalidSpecification(f'Mixture weights must be >= 0, got {weights}')
        total = sum(weights)
        if total <= 0:
            raise InvalidSpecification('At least one mixture weight must be > 0')
        if abs(total - 1) > TOLERANCE:
            logging.info(f'Mixture weights sum to {total:.6g}. Renormalizing.')

        domains = set(c.domain for c in components)
        if len(domains) > 1:
            raise InvalidSpecification(f'Mixture components must all draw the same kind of sample, '
                                       f'got {", ".join(sorted(domains))}')

    @property
    def domain(self):
        return self.components[0].domain

    @property
    def probabilities(self):
        ''' Weights normalized to sum to 1 '''
        return _normalize(self.weights)

    @property
    def labels(self):
        if self.domain not in ['boolean', 'categorical']:
            return None
        labels = []
        for component in self.components:
            labels.extend(label for label in component.labels if label not in labels)
        return tuple(labels)

    def get_config(self):
        return {'dist': self.name,
                'components': [c.get_config() for c in self.components],
                'weights': list(self.weights)}

    def support(self):
        limits = np.array([c.support() for c in self.components])
        return float(limits[:, 0].min()), float(limits[:, 1].max())

    def expected(self):
        ''' Mean and standard deviation by the law of total variance '''
        if self.domain == 'categorical':
            return np.nan, np.nan
        moments = np.array([c.expected() for c in self.components])
        p = self.probabilities
        mean = np.dot(p, moments[:, 0])
        var = np.dot(p, moments[:, 1]**2 + moments[:, 0]**2) - mean**2
        return float(mean), float(np.sqrt(max(var, 0)))


@dataclass(frozen=True)
class DCategorical(Distribution):
    ''' Categorical distribution over string labels. Probabilities may be
        given as a {label: probability} mapping or a sequence of
        (label, probability) pairs, and are kept in the given label order.
    '''
    probs: Tuple[Tuple[str, float], ...] = (('A', 0.3), ('B', 0.4), ('C', 0.3))

    name = 'categorical'
    displayname = 'Categorical'
    description = ('Models discrete outcomes with different probabilities. '
                   'Like a weighted die with arbitrary labels.')
    domain = 'categorical'
    argnames = ['probs']

    def validate(self):
        probs = self.probs
        if hasattr(probs, 'items'):
            probs = probs.items()
        try:
            probs = tuple((str(label), p) for label, p in probs)
        except (TypeError, ValueError):
            raise InvalidSpecification('Categorical probabilities must be a mapping of label: probability') from None
        object.__setattr__(self, 'probs', probs)

        if len(probs) == 0:
            raise InvalidSpecification('Categorical distribution requires at least one label')
        if len(set(self.labels)) != len(probs):
            raise InvalidSpecification(f'Categorical labels must be unique, got {self.labels}')
        if not all(_isnumber(p) for _, p in probs):
            raise InvalidSpecification(f'Categorical probabilities must be finite numbers, got {dict(probs)}')
        probs = tuple((label, float(p)) for label, p in probs)
        object.__setattr__(self, 'probs', probs)
        if any(p < 0 for _, p in probs):
            raise InvalidSpecification(f'Categorical probabilities must be >= 0, got {dict(probs)}')
        total = sum(self.weights)
        if total <= 0:
            raise InvalidSpecification('At least one categorical probability must be > 0')
        if abs(total - 1) > TOLERANCE:
            logging.info(f'Categorical probabilities sum to {total:.6g}. Renormalizing.')

    @property
    def labels(self):
        return tuple(label for label, _ in self.probs)

    @property
    def weights(self):
        ''' Probabilities as given, in label order '''
        return tuple(p for _, p in self.probs)

    @property
    def probabilities(self):
        ''' Probabilities normalized to sum to 1 '''
        return _normalize(self.weights)

    def get_config(self):
        return {'dist': self.name, 'probs': dict(self.probs)}

    def support(self):
        return np.nan, np.nan

    def expected(self):
        return np.nan, np.nan


# Lookup Distribution subclass from name.
_aliases = {
    'normal': DNormal,
    'norm': DNormal,
    'uniform': DUniform,
    'expon': DExpon,
    'exponential': DExpon,
    'kumaraswamy': DKumaraswamy,
    'rayleigh': DRayleigh,
    'bernoulli': DBernoulli,
    'binom': DBinom,
    'binomial': DBinom,
    'poisson': DPoisson,
    'mixture': DMixture,
    'categorical': DCategorical,
    }

# One registry name per distribution, in display order
names = ['normal', 'uniform', 'expon', 'kumaraswamy', 'rayleigh',
         'bernoulli', 'binom', 'poisson', 'mixture', 'categorical']
