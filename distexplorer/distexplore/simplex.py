''' Keep a set of probabilities on the simplex (non-negative, summing to 1)
    while one of them is edited at a time.
'''
import numpy as np

from ..common.distributions import DCategorical


def adjust(current, index, value):
    ''' Set one probability and rescale the others to keep the sum at 1.

        The others keep their relative proportions. If they were all zero, the
        remaining probability is split equally among them.

        Args:
            current (sequence): Current probabilities
            index (int): Index of the probability being edited
            value (float): New value, clipped to [0, 1]

        Returns:
            Array of adjusted probabilities. Entry `index` equals the clipped value.
    '''
    probs = np.asarray(current, dtype=float).copy()
    n = len(probs)
    if n == 0:
        raise ValueError('No probabilities to adjust')
    if index != int(index) or not 0 <= index < n:
        raise ValueError(f'Index {index} out of range for {n} probabilities')
    if not np.isfinite(value):
        raise ValueError(f'Probability must be finite, got {value}')
    if not np.all(np.isfinite(probs)):
        raise ValueError(f'Probabilities must be finite, got {probs}')
    index = int(index)

    if n == 1:
        # Only one point on the 1-simplex
        return np.ones(1)

    value = float(np.clip(value, 0, 1))
    remaining = 1 - value
    others = np.arange(n) != index
    probs[others] = np.clip(probs[others], 0, None)
    total = probs[others].sum()
    if total > 0:
        probs[others] = probs[others] / total * remaining
    else:
        probs[others] = remaining / (n-1)
    probs[index] = value
    return probs


def adjust_categorical(spec, label, value):
    ''' Return a new categorical distribution with the probability of label set
        to value, and the other probabilities rescaled to keep the sum at 1.
    '''
    labels = spec.labels
    try:
        index = labels.index(label)
    except ValueError:
        raise ValueError(f'Label `{label}` is not one of {list(labels)}') from None
    probs = adjust(spec.probabilities, index, value)
    return DCategorical(tuple(zip(labels, probs)))
