''' Distribution Explorer project component '''

from .component import ProjectComponent
from ..common import distributions
from ..distexplore import DistExplore
from ..distexplore.dist_explore import DEFAULT_SAMPLES, DEFAULT_BINS


class ProjectDistExplore(ProjectComponent):
    ''' Distribution Explorer project component '''
    mode = 'distributions'

    def __init__(self, model=None, name='distributions'):
        super().__init__(name=name)
        if model is None:
            self.model = DistExplore()
        else:
            self.model = model

    @property
    def seed(self):
        return self.model.seed

    @seed.setter
    def seed(self, seed):
        self.model.seed = seed

    def calculate(self):
        ''' Run calculation '''
        self._result = self.model.calculate()
        return self._result

    def get_config(self):
        ''' Get configuration '''
        d = super().get_config()
        d['seed'] = self.model.seed
        d['samples'] = self.model.nsamples
        d['bins'] = self.model.bins
        d['distnames'] = list(self.model.dists)
        d['distributions'] = [x.get_config() for x in self.model.dists.values()]
        return d

    def load_config(self, config):
        ''' Load config into this project '''
        self.name = config.get('name', 'distributions')
        self.description = config.get('desc', '')
        self.model = DistExplore(samples=config.get('samples', DEFAULT_SAMPLES),
                                 bins=config.get('bins', DEFAULT_BINS),
                                 seed=config.get('seed', None))
        names = config.get('distnames', [])
        dists = [distributions.from_config(x) for x in config.get('distributions', [])]
        if len(names) != len(dists):
            raise ValueError(f'Project {self.name} has {len(names)} names for {len(dists)} distributions')
        for name, dist in zip(names, dists):
            self.model.set_dist(name, dist)
        self._result = None
