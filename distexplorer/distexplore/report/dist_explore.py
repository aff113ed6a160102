''' Report distribution explorer sampling results '''

from ...common import report, plotting


def _paramstr(spec):
    ''' Parameters of a distribution as "name=value" text '''
    config = spec.get_config()
    config.pop('dist')
    return ', '.join(f'{k}={v:.4g}' if isinstance(v, (int, float)) else f'{k}={v}' for k, v in config.items())


def _stats_rows(result):
    ''' Rows of observed vs expected statistics for one result '''
    if result.stats is None:
        return []
    mean, std = result.expected()
    return [['Mean', report.Number(result.stats.mean, fmin=3), report.Number(mean, fmin=3)],
            ['Standard Deviation', report.Number(result.stats.std, fmin=3), report.Number(std, fmin=3)],
            ['Minimum', report.Number(result.stats.min, fmin=3), '-'],
            ['Maximum', report.Number(result.stats.max, fmin=3), '-']]


class ReportExploreResult:
    ''' Report of one sampled distribution

        Args:
            result: ExploreResult instance
    '''
    def __init__(self, result):
        self.result = result
        self.plot = PlotExploreResult(result)

    def parameters(self, **kwargs):
        ''' Table of the distribution parameters '''
        config = self.result.spec.get_config()
        config.pop('dist')
        if self.result.spec.name == 'mixture':
            rows = [[c.displayname, _paramstr(c), report.Number(w, fmin=3)]
                    for c, w in zip(self.result.spec.components, self.result.spec.probabilities)]
            hdr = ['Component', 'Parameters', 'Weight']
        elif self.result.spec.name == 'categorical':
            rows = [[label, report.Number(p, fmin=3)] for label, p in
                    zip(self.result.spec.labels, self.result.spec.probabilities)]
            hdr = ['Label', 'Probability']
        else:
            rows = [[k, report.Number(v, fmin=3) if isinstance(v, float) else str(v)] for k, v in config.items()]
            hdr = ['Parameter', 'Value']
        r = report.Report(**kwargs)
        r.table(rows, hdr)
        return r

    def summary(self, **kwargs):
        ''' Report statistics of the samples '''
        spec = self.result.spec
        r = report.Report(**kwargs)
        r.hdr(spec.displayname, level=2)
        r.txt(f'{spec.helpstr()}\n\n')
        r.append(self.parameters(**kwargs))
        r.txt(f'Samples: {self.result.count:d}\n\n')

        if self.result.domain in ['boolean', 'categorical']:
            rows = [[label, f'{count:d}'] for label, count in self.result.aggregate.items()]
            r.table(rows, ['Outcome', 'Count'])
            if self.result.domain == 'boolean':
                r.txt('Success Rate: ')
                r.num(self.result.success_rate, fmt='decimal', fmin=3, end='\n\n')

        if self.result.stats is not None and self.result.count > 0:
            r.table(_stats_rows(self.result), ['Statistic', 'Observed', 'Expected'])
        return r

    def aggregate(self, **kwargs):
        ''' Table of the histogram or outcome counts '''
        agg = self.result.aggregate
        if self.result.domain == 'continuous':
            rows = [[report.Number(b.midpoint, n=4), f'{b.frequency:d}'] for b in agg]
            hdr = ['Bin Midpoint', 'Frequency']
        elif self.result.domain == 'discrete':
            rows = [[f'{b.value:d}', f'{b.frequency:d}'] for b in agg]
            hdr = ['Value', 'Frequency']
        else:
            rows = [[label, f'{count:d}'] for label, count in agg.items()]
            hdr = ['Outcome', 'Count']
        r = report.Report(**kwargs)
        if rows:
            r.table(rows, hdr)
        else:
            r.txt('No samples\n\n')
        return r

    def all(self, **kwargs):
        ''' Report summary, histogram table, and histogram plot '''
        r = self.summary(**kwargs)
        r.hdr('Histogram', level=3)
        with plotting.plot_figure() as fig:
            self.plot.hist(fig=fig)
            r.plot(fig)
        r.append(self.aggregate(**kwargs))
        return r


class PlotExploreResult:
    ''' Plot histogram of one sampled distribution

        Args:
            result: ExploreResult instance
    '''
    def __init__(self, result):
        self.result = result

    def hist(self, fig=None):
        ''' Plot the aggregated samples as bars

            Args:
                fig (plt.Figure): maptlotlib figure to plot on
        '''
        fig, ax = plotting.initplot(fig)
        color = plotting.colors.get(self.result.spec.name, 'C0')
        if self.result.domain == 'continuous':
            plotting.bars_histogram(ax, self.result.aggregate, color=color)
        elif self.result.domain == 'discrete':
            plotting.bars_discrete(ax, self.result.aggregate, color=color)
        else:
            plotting.bars_categorical(ax, self.result.aggregate, color=color)
        ax.set_title(self.result.spec.displayname)
        return fig


class ReportDistExplore:
    ''' Output for distribution explorer

        Args:
            model: DistExplore instance
    '''
    def __init__(self, model):
        self.model = model

    @property
    def results(self):
        ''' Dictionary of name: ExploreResult '''
        return self.model.results

    def summary(self, **kwargs):
        ''' Generate table of statistics for all sampled distributions '''
        hdr = ['Name', 'Distribution', 'Mean', 'Standard Deviation', 'Minimum', 'Maximum']
        rows = []
        for name in self.model.dists:
            result = self.results.get(name)
            if result is not None and result.stats is not None and result.count > 0:
                rows.append([name, result.spec.displayname,
                             report.Number(result.stats.mean, fmin=3),
                             report.Number(result.stats.std, fmin=3),
                             report.Number(result.stats.min, fmin=3),
                             report.Number(result.stats.max, fmin=3)])
            elif result is not None and isinstance(result.aggregate, dict):
                counts = ', '.join(f'{k}: {v}' for k, v in result.aggregate.items())
                rows.append([name, result.spec.displayname, counts, '-', '-', '-'])
            else:
                rows.append([name, self.model.dists[name].displayname, 'N/A', 'N/A', 'N/A', 'N/A'])
        r = report.Report(**kwargs)
        r.table(rows, hdr)
        return r

    def single(self, name, detail=0, **kwargs):
        ''' Report one distribution. Adds the histogram table with detail=1,
            and the histogram plot with detail=2.
        '''
        result = self.results.get(name)
        if result is None:
            r = report.Report(**kwargs)
            r.txt(f'{name}: not sampled\n\n')
            return r
        if detail > 1:
            r = result.report.all(**kwargs)
        else:
            r = result.report.summary(**kwargs)
            if detail > 0:
                r.append(result.report.aggregate(**kwargs))
        return r

    def all(self, detail=2, **kwargs):
        ''' Report every distribution '''
        r = report.Report(**kwargs)
        for name in self.model.dists:
            r.hdr(name, level=1)
            r.append(self.single(name, detail=detail, **kwargs))
        return r

