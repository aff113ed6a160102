''' Summary statistics of sampled values '''
from dataclasses import dataclass
import numpy as np


@dataclass(frozen=True)
class SummaryStats:
    ''' Summary of a numeric sample set. All zero when there were no samples;
        check `count` to tell an empty set from real zeros.

    Attributes:
        mean: Sample mean
        std: Population (divide by n) standard deviation
        min: Minimum sample
        max: Maximum sample
        count: Number of samples
    '''
    mean: float = 0.
    std: float = 0.
    min: float = 0.
    max: float = 0.
    count: int = 0


def summarize(samples):
    ''' Calculate mean, population standard deviation, min and max of samples '''
    samples = np.asarray(samples, dtype=float)
    if len(samples) == 0:
        return SummaryStats()
    mean = samples.mean()
    std = np.sqrt(np.mean((samples - mean)**2))
    return SummaryStats(mean=float(mean),
                        std=float(std),
                        min=float(samples.min()),
                        max=float(samples.max()),
                        count=len(samples))
