''' Test command-line interface '''
import os
import pytest

from distexplorer.common import distributions
from distexplorer import project
from distexplorer import __main__ as cli


EXAMPLE = os.path.join(os.path.dirname(__file__), 'ex_explore.yaml')


def test_file(capsys):
    ''' Test running a yaml file '''
    u = project.Project.from_configfile(EXAMPLE)
    u.calculate()
    report = u.report_short().get_md(figfmt='text')
    cli.main_setup([EXAMPLE])
    report2, err = capsys.readouterr()
    assert report == report2

    report = u.report_summary().get_md(figfmt='text')
    cli.main_setup([EXAMPLE, '-v'])
    report2, err = capsys.readouterr()
    assert report == report2

    cli.main_setup([EXAMPLE, '-vv'])
    report2, err = capsys.readouterr()
    assert '```' in report2  # Text histograms


def _explore(name, dist, seed, samples=1000, bins=30):
    u = project.ProjectDistExplore(name=name)
    u.seed = seed
    u.model.set_numsamples(samples)
    u.model.bins = bins
    u.model.set_dist(name, dist)
    return u.calculate()


def test_explore(capsys):
    out = _explore('normal', distributions.DNormal(2, .5), seed=4848484)
    report = out.report.single('normal').get_md(figfmt='text')
    cli.main_explore(['normal', 'mean=2', 'std=.5', '--seed=4848484'])
    report2, err = capsys.readouterr()
    assert report == report2

    # HTML format
    reporthtml = out.report.single('normal').get_html(figfmt='svg')
    cli.main_explore(['normal', 'mean=2', 'std=.5', '--seed=4848484', '-f', 'html'])
    report2html, err = capsys.readouterr()
    assert reporthtml == report2html

    # Verbose includes the histogram table
    report = out.report.single('normal', detail=1).get_md(figfmt='text')
    cli.main_explore(['normal', 'mean=2', 'std=.5', '--seed=4848484', '-v'])
    report2, err = capsys.readouterr()
    assert report == report2


def test_explore_options(capsys):
    out = _explore('poisson', distributions.DPoisson(7), seed=1, samples=100)
    report = out.report.single('poisson').get_md(figfmt='text')
    cli.main_explore(['poisson', 'lam=7', '--seed=1', '--samples=100'])
    report2, err = capsys.readouterr()
    assert report == report2

    out = _explore('categorical', distributions.DCategorical({'A': .2, 'B': .5, 'C': .3}), seed=2)
    report = out.report.single('categorical').get_md(figfmt='text')
    cli.main_explore(['categorical', 'A=.2', 'B=.5', 'C=.3', '--seed=2'])
    report2, err = capsys.readouterr()
    assert report == report2


def test_output_file(tmpdir):
    fname = os.path.join(tmpdir, 'out.html')
    cli.main_explore(['bernoulli', 'p=.3', '--seed=5', '-o', fname])
    with open(fname, 'r', encoding='utf-8') as f:
        html = f.read()
    assert html.startswith('<style')
    assert 'Success Rate' in html


@pytest.mark.parametrize('args', [
    ['normal', 'std=-1'],
    ['normal', 'loc=3'],
    ['normal', 'std'],
    ['uniform', 'low=abc'],
    ['normal', '--samples=500'],
    ['normal', '--bins=0'],
    ['weibull'],
    ])
def test_bad_args(args, capsys):
    with pytest.raises(SystemExit):
        cli.main_explore(args)
