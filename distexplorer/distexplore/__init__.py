''' Distribution Explorer samples named probability distributions and reduces
    the samples to histograms, outcome counts, and summary statistics.
    Mostly for educational/training purposes.
'''

from .dist_explore import DistExplore, ExploreResult, recompute
from .sampling import draw
from .aggregate import (histogram, discrete_histogram, categorical_counts,
                        HistogramBin, DiscreteHistogramBin, InternalInconsistency)
from .summary import summarize, SummaryStats
from .simplex import adjust, adjust_categorical
