''' Reduce sampled values to frequency tables for display

    histogram: fixed number of equal-width bins over the sample range
    discrete_histogram: one entry per observed integer value
    categorical_counts: one entry per declared label
'''
from dataclasses import dataclass
import numpy as np


class InternalInconsistency(RuntimeError):
    ''' Samples don't match the domain of the distribution they were drawn from '''


@dataclass(frozen=True)
class HistogramBin:
    ''' One bin of a continuous histogram

    Attributes:
        midpoint: Center of the bin
        frequency: Number of samples falling in the bin
    '''
    midpoint: float
    frequency: int


@dataclass(frozen=True)
class DiscreteHistogramBin:
    ''' Number of times one integer value was observed

    Attributes:
        value: The observed integer
        frequency: Number of samples equal to value
    '''
    value: int
    frequency: int


def histogram(samples, bins=30):
    ''' Continuous histogram of the samples with bins equal-width bins
        spanning [min(samples), max(samples)].

        Args:
            samples (array): Sampled float values
            bins (int): Number of bins

        Returns:
            List of HistogramBin in ascending order, including empty bins.
            Empty list if there are no samples, and a single bin if all
            samples are equal.
    '''
    if bins != int(bins) or bins < 1:
        raise ValueError(f'Number of bins must be an integer >= 1, got {bins}')
    bins = int(bins)
    samples = np.asarray(samples, dtype=float)
    if len(samples) == 0:
        return []

    xmin, xmax = samples.min(), samples.max()
    if xmax == xmin:
        return [HistogramBin(float(xmin), len(samples))]

    binwidth = (xmax - xmin) / bins
    # Sample at xmax would land in bin index `bins`, clip it into the last bin
    index = np.clip(np.floor((samples - xmin) / binwidth).astype(int), 0, bins-1)
    counts = np.bincount(index, minlength=bins)
    return [HistogramBin(float(xmin + (i + 0.5) * binwidth), int(freq))
            for i, freq in enumerate(counts)]


def discrete_histogram(samples):
    ''' Count occurrences of each integer value in samples. Only observed values
        are included, sorted ascending.
    '''
    values, counts = np.unique(np.asarray(samples, dtype=np.int64), return_counts=True)
    return [DiscreteHistogramBin(int(v), int(c)) for v, c in zip(values, counts)]


def categorical_counts(samples, labels):
    ''' Count occurrences of each label

        Args:
            samples (array): Sampled string labels
            labels (sequence): The declared labels. Every one appears in
                the output, with 0 count if never sampled.

        Returns:
            Dictionary of label: count, in declared label order
    '''
    counts = dict.fromkeys(labels, 0)
    observed, freqs = np.unique(np.asarray(samples, dtype=str), return_counts=True)
    for label, freq in zip(observed, freqs):
        label = str(label)
        if label not in counts:
            raise InternalInconsistency(f'Sampled label `{label}` is not one of the declared labels {list(labels)}')
        counts[label] = int(freq)
    return counts
