'''
Distexplorer - Probability distribution explorer

Sample named probability distributions and summarize the samples as
histograms, outcome counts, and summary statistics.
'''

from .version import __version__, __date__

from .common import distributions
from .common.distributions import get_distribution, InvalidSpecification
from .distexplore import DistExplore, recompute, draw, InternalInconsistency
from . import project

__all__ = ['__version__', '__date__', 'distributions', 'get_distribution', 'InvalidSpecification',
           'DistExplore', 'recompute', 'draw', 'InternalInconsistency', 'project']
