''' Test report formatting '''
import numpy as np

from distexplorer.common import report, distributions
from distexplorer.distexplore import recompute, DistExplore


def test_format():
    ''' Test significant figure formatter '''
    assert report.Number(0, n=1).string(fmt='decimal') == '0'      # Zeros are handled separately
    assert report.Number(0, n=2).string(fmt='decimal') == '0.0'
    assert report.Number(0, n=2).string(fmt='sci') == '0.0e+00'
    assert report.Number(1, n=1).string(fmt='decimal') == '1'
    assert report.Number(1, n=3).string(fmt='decimal') == '1.00'
    assert report.Number(1, n=2).string(fmt='sci') == '1.0e+00'
    assert report.Number(1.23456E6, n=2).string(fmt='sci') == '1.2e+06'
    assert report.Number(1.23456E6, n=4).string(fmt='sci') == '1.235e+06'   # note rounding
    assert report.Number(1.2E1, n=2).string(fmt='eng') == '12e+00'
    assert report.Number(1.2E3, n=2).string(fmt='eng') == '1.2e+03'
    assert report.Number(1.2E0, n=2).string(fmt='si') == '1.2'
    assert report.Number(1.2E3, n=2).string(fmt='si') == '1.2k'
    assert report.Number(1.2E-3, n=2).string(fmt='si') == '1.2m'
    assert report.Number(np.nan).string() == 'nan'
    assert report.Number(.25, fmin=3).string(fmt='decimal') == '0.250'
    assert report.Number(123456789, n=3).string() == '1.23e+08'   # auto switches to sci


def test_table():
    r = report.Report()
    r.table([['a', report.Number(1.5, n=2)], ['b', report.Number(2, n=2)]], hdr=['Name', 'Value'])
    md = r.get_md()
    assert '|Name' in md
    assert '1.5' in md
    assert '2.0' in md
    html = r.get_html()
    assert html.startswith('<style')
    assert '<table>' in html


def test_append():
    ''' Appended reports renumber their values '''
    r1 = report.Report()
    r1.num(1, n=2, end=' ')
    r2 = report.Report()
    r2.num(2, n=2)
    r1.append(r2)
    assert r1.get_md() == '1.0 2.0'


def test_result_report():
    r = recompute(distributions.DNormal(5, 1), 1000, rng=1)
    md = r.report.summary().get_md()
    assert 'Normal (Gaussian)' in md
    assert 'Samples: 1000' in md
    assert 'Standard Deviation' in md

    md = r.report.all().get_md(figfmt='text')
    assert '```' in md
    assert 'Bin Midpoint' in md

    md = r.report.all().get_md(figfmt='svg')
    assert 'data:image/svg+xml;base64' in md


def test_outcome_report():
    r = recompute(distributions.DBernoulli(.5), 100, rng=2)
    md = r.report.summary().get_md()
    assert 'Success Rate' in md
    assert 'True' in md and 'False' in md

    r = recompute(distributions.DCategorical({'red': .5, 'blue': .5}), 100, rng=2)
    md = r.report.all().get_md(figfmt='text')
    assert 'red' in md and 'blue' in md
    assert 'Standard Deviation' not in md


def test_explorer_report():
    dx = DistExplore(samples=100, seed=1)
    dx.set_dist('x', distributions.DNormal())
    dx.set_dist('y', distributions.DCategorical())
    dx.set_dist('z', distributions.DPoisson())
    md = dx.report.summary().get_md()
    assert md.count('N/A') == 12    # Not calculated yet
    dx.calculate()
    md = dx.report.summary().get_md()
    assert 'N/A' not in md
    assert 'A: ' in md
    md = dx.report.all(detail=1).get_md()
    assert '# x' in md and '# y' in md and '# z' in md
    assert dx.results['x']._repr_markdown_()


def test_textplot():
    ''' ASCII rendering of a bar plot '''
    r = recompute(distributions.DUniform(0, 1), 1000, rng=3)
    fig = r.report.plot.hist(fig=None)
    txt = report.Plot(fig).textplot()
    assert '#' in txt
    assert 'Uniform' in txt
