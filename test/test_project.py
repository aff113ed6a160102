''' Test project class - saving/loading config file for distribution explorer calculations '''
import os
from io import StringIO
import pytest
import numpy as np

from distexplorer.common import distributions
from distexplorer import project


EXAMPLE = os.path.join(os.path.dirname(__file__), 'ex_explore.yaml')


def _build():
    projexp = project.ProjectDistExplore(name='explore')
    projexp.seed = 8888
    projexp.model.set_numsamples(500)
    projexp.model.set_dist('a', distributions.DNormal(3, 2))
    projexp.model.set_dist('b', distributions.DUniform(0, 2))
    projexp.model.set_dist('c', distributions.DMixture((distributions.DPoisson(1), distributions.DBinom(5, .2)), (1, 2)))
    projexp.model.set_dist('d', distributions.DCategorical({'yes': .2, 'no': .8}))

    projexp2 = project.ProjectDistExplore(name='coins')
    projexp2.seed = 1
    projexp2.model.set_dist('coin', distributions.DBernoulli(.5))
    return project.Project([projexp, projexp2])


def _compare(proj, proj2):
    assert proj.get_names() == proj2.get_names()
    for item, item2 in zip(proj.items, proj2.items):
        assert item.get_config() == item2.get_config()
        assert item.model.dists == item2.model.dists
        out, out2 = item.calculate(), item2.calculate()
        for name in out.results:
            assert np.array_equal(out.results[name].samples, out2.results[name].samples)
    assert proj.report_summary().get_md(figfmt='text') == proj2.report_summary().get_md(figfmt='text')


def test_saveload_fname(tmpdir):
    proj = _build()
    fname = os.path.join(tmpdir, 'project.yaml')
    proj.save_config(fname)
    proj2 = project.Project.from_configfile(fname)
    assert proj2.count() == 2
    assert proj2.get_mode(0) == 'distributions'
    _compare(proj, proj2)


def test_saveload_fobj():
    proj = _build()
    f = StringIO()
    proj.save_config(f)
    f.seek(0)
    proj2 = project.Project.from_configfile(f)
    _compare(proj, proj2)


def test_component_saveload():
    proj = _build()
    f = StringIO()
    proj.items[0].save_config(f)
    f.seek(0)
    item = project.ProjectDistExplore.from_configfile(f)
    assert item.name == 'explore'
    assert item.seed == 8888
    assert item.model.nsamples == 500
    assert list(item.model.dists) == ['a', 'b', 'c', 'd']


def test_example_file():
    proj = project.Project.from_configfile(EXAMPLE)
    assert proj.get_names() == ['explorer']
    item = proj.items[0]
    assert item.description == 'Sampling each kind of distribution'
    assert item.model.bins == 20
    assert item.model.dists['die'].labels == ('one', 'two', 'three')
    assert item.model.dists['bimodal'].weights == (.7, .3)
    out = item.calculate()
    assert len(out.results['x'].aggregate) == 20
    r = proj.calculate()
    assert 'explorer' in r.get_md()


def test_items():
    proj = _build()
    proj.rename_item(1, 'flips')
    assert proj.get_names() == ['explore', 'flips']
    proj.rem_item('explore')
    assert proj.get_names() == ['flips']
    proj.rem_item(0)
    assert proj.count() == 0


def test_bad_files(tmpdir):
    fname = os.path.join(tmpdir, 'bad.yaml')
    with open(fname, 'w') as f:
        f.write('mode: [unclosed')
    assert project.Project.from_configfile(fname) is None

    with open(fname, 'w') as f:
        f.write('just some text')
    assert project.Project.from_configfile(fname) is None

    with open(fname, 'w') as f:
        f.write('- mode: uncertainty\n  name: x\n')
    with pytest.raises(ValueError):
        project.Project.from_configfile(fname)

    with open(fname, 'w') as f:
        f.write('- mode: distributions\n  distnames: [a, b]\n  distributions:\n  - dist: normal\n')
    with pytest.raises(ValueError):
        project.Project.from_configfile(fname)

    with open(fname, 'w') as f:
        f.write('- mode: distributions\n  distnames: [a]\n  distributions:\n  - dist: normal\n    std: -1\n')
    with pytest.raises(distributions.InvalidSpecification):
        project.Project.from_configfile(fname)
