''' Test distribution specifications '''
import logging
import dataclasses
import pytest
import numpy as np
from scipy import stats, integrate

from distexplorer.common import distributions
from distexplorer.common.distributions import InvalidSpecification


def test_registry():
    ''' Every registry name and alias builds a spec with default parameters '''
    for name in distributions.names:
        d = distributions.get_distribution(name)
        assert d.name == name
        assert distributions.get_argnames(name) == d.argnames
    assert isinstance(distributions.get_distribution('norm'), distributions.DNormal)
    assert isinstance(distributions.get_distribution('Exponential'), distributions.DExpon)
    assert isinstance(distributions.get_distribution('binomial', n=4), distributions.DBinom)

    with pytest.raises(InvalidSpecification):
        distributions.get_distribution('gamma')
    with pytest.raises(InvalidSpecification):
        distributions.get_distribution('normal', loc=3)  # Parameter is "mean"


@pytest.mark.parametrize('name, kwds', [
    ('normal', {'std': 0}),
    ('normal', {'std': -1}),
    ('normal', {'mean': np.nan}),
    ('normal', {'mean': 'a'}),
    ('uniform', {'low': 1, 'high': 1}),
    ('uniform', {'low': 2, 'high': 1}),
    ('uniform', {'high': np.inf}),
    ('expon', {'rate': 0}),
    ('kumaraswamy', {'a': 0}),
    ('kumaraswamy', {'b': -2}),
    ('rayleigh', {'sigma': 0}),
    ('bernoulli', {'p': 1.5}),
    ('bernoulli', {'p': -.1}),
    ('binom', {'n': 0}),
    ('binom', {'n': 2.5}),
    ('binom', {'p': 2}),
    ('poisson', {'lam': 0}),
    ('poisson', {'lam': -3}),
    ('normal', {'std': 1E308}),
    ('normal', {'mean': 1.7E308}),
    ('uniform', {'low': -1E308, 'high': 1E308}),
    ('expon', {'rate': 1E-320}),
    ('rayleigh', {'sigma': 1E308}),
    ])
def test_invalid(name, kwds):
    ''' Out of range parameters are rejected when the distribution is built '''
    with pytest.raises(InvalidSpecification):
        distributions.get_distribution(name, **kwds)


def test_boundaries():
    ''' Edge values that are still valid '''
    assert distributions.DBernoulli(0).p == 0
    assert distributions.DBernoulli(1).p == 1
    assert distributions.DBinom(n=1, p=0).n == 1
    b = distributions.DBinom(n=10.0)
    assert b.n == 10 and isinstance(b.n, int)


def test_mixture_validate():
    n1 = distributions.DNormal(0, 1)
    n2 = distributions.DNormal(5, 1)
    with pytest.raises(InvalidSpecification):
        distributions.DMixture((n1, n2), (1,))  # Length mismatch
    with pytest.raises(InvalidSpecification):
        distributions.DMixture((n1, n2), (1, -1))
    with pytest.raises(InvalidSpecification):
        distributions.DMixture((n1, n2), (0, 0))
    with pytest.raises(InvalidSpecification):
        distributions.DMixture((), ())
    with pytest.raises(InvalidSpecification):
        distributions.DMixture((n1, distributions.DPoisson(2)), (.5, .5))  # Mixed domains

    m = distributions.DMixture([n1, {'dist': 'normal', 'mean': 5}], [1, 3])
    assert m.components == (n1, n2)
    assert m.weights == (1., 3.)
    assert np.allclose(m.probabilities, [.25, .75])
    assert m.domain == 'continuous'
    assert m.labels is None


def test_categorical_validate():
    with pytest.raises(InvalidSpecification):
        distributions.DCategorical({})
    with pytest.raises(InvalidSpecification):
        distributions.DCategorical({'A': .5, 'B': -.1})
    with pytest.raises(InvalidSpecification):
        distributions.DCategorical({'A': 0, 'B': 0})
    with pytest.raises(InvalidSpecification):
        distributions.DCategorical((('A', .5), ('A', .5)))
    with pytest.raises(InvalidSpecification):
        distributions.DCategorical({'A': np.nan})

    c = distributions.DCategorical({'heads': 1, 'tails': 0})
    assert c.labels == ('heads', 'tails')
    assert c.probs == (('heads', 1.), ('tails', 0.))
    assert c.domain == 'categorical'


def test_renormalize(caplog):
    ''' Weights that don't sum to 1 are accepted and normalized '''
    caplog.set_level(logging.INFO)
    c = distributions.DCategorical({'A': 2, 'B': 6})
    assert np.allclose(c.probabilities, [.25, .75])
    assert 'Renormalizing' in caplog.text
    assert c.weights == (2., 6.)


def test_expected():
    ''' Theoretical mean and standard deviation '''
    assert np.allclose(distributions.DNormal(2, .5).expected(), (2, .5))
    assert np.allclose(distributions.DUniform(-1, 3).expected(), (1, 4/np.sqrt(12)))
    assert np.allclose(distributions.DExpon(2).expected(), (.5, .5))
    assert np.allclose(distributions.DKumaraswamy(1, 1).expected(), (.5, np.sqrt(1/12)))
    mean, var = stats.rayleigh(scale=2).stats('mv')
    assert np.allclose(distributions.DRayleigh(2).expected(), (mean, np.sqrt(var)))
    assert np.allclose(distributions.DBernoulli(.3).expected(), (.3, np.sqrt(.21)))
    assert np.allclose(distributions.DBinom(10, .3).expected(), (3, np.sqrt(2.1)))
    assert np.allclose(distributions.DPoisson(4).expected(), (4, 2))

    m = distributions.DMixture((distributions.DNormal(-1, .5), distributions.DNormal(2, 1)), (.5, .5))
    assert np.allclose(m.expected(), (.5, np.sqrt(2.875)))
    assert all(np.isnan(distributions.DCategorical().expected()))


def test_kumaraswamy_moments():
    ''' Kumaraswamy moments against numerical integration of its pdf '''
    a, b = 2, 5
    k = distributions.DKumaraswamy(a, b)
    x = np.linspace(0, 1, 200001)
    pdf = a * b * x**(a-1) * (1-x**a)**(b-1)
    mean = integrate.trapezoid(x*pdf, x)
    var = integrate.trapezoid((x-mean)**2*pdf, x)
    assert np.allclose(k.expected(), (mean, np.sqrt(var)), rtol=1E-4)


def test_support():
    assert distributions.DUniform(2, 4).support() == (2, 4)
    assert distributions.DKumaraswamy().support() == (0, 1)
    assert distributions.DBinom(7, .5).support() == (0, 7)
    assert distributions.DPoisson(2).support()[1] == np.inf
    m = distributions.DMixture((distributions.DUniform(0, 1), distributions.DUniform(3, 5)), (1, 1))
    assert m.support() == (0, 5)


def test_config():
    ''' Config dictionaries rebuild an equal spec '''
    specs = [distributions.DNormal(1, 2),
             distributions.DUniform(-1, 1),
             distributions.DBinom(12, .25),
             distributions.DPoisson(3.5),
             distributions.DMixture((distributions.DBernoulli(.2), distributions.DBernoulli(.9)), (2, 1)),
             distributions.DCategorical({'x': .1, 'y': .9})]
    for spec in specs:
        config = spec.get_config()
        assert config['dist'] == spec.name
        assert distributions.from_config(config) == spec

    assert distributions.DCategorical({'x': .1, 'y': .9}).get_config() == {'dist': 'categorical', 'probs': {'x': .1, 'y': .9}}
    assert distributions.from_config({'mean': 3}) == distributions.DNormal(3, 1)


def test_replace():
    ''' Specs are immutable. Edits build a new, validated spec. '''
    d = distributions.DNormal(0, 1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        d.std = 2
    d2 = d.replace(std=2)
    assert d2.std == 2 and d.std == 1
    with pytest.raises(InvalidSpecification):
        d.replace(std=-1)
