''' Common functions for plotting sampled distributions '''

from contextlib import contextmanager
import numpy as np
import matplotlib.pyplot as plt


# Common plot parameters, usage: "with mpl.style.context(plotstyle):"
plotstyle = {'figure.figsize': (8, 5), 'font.size': 12}

# Bar colors by distribution name
colors = {
    'normal': 'C0',
    'uniform': 'C2',
    'expon': 'C1',
    'kumaraswamy': 'C4',
    'rayleigh': 'C3',
    'bernoulli': 'C5',
    'binom': 'C9',
    'poisson': 'C8',
    'mixture': 'C6',
    'categorical': 'C0',
    }


class ReportPlot:
    ''' Context manager for adding figures to report. Ensures figure is closed
        so it doesn't display twice in Jupyter and is properly garbage collected.

        Use via plot_figure() function to chain with plt.style.context.
    '''
    def __enter__(self):
        self._fig = plt.figure()
        return self._fig

    def __exit__(self, exc_type, exc_val, exc_trace):
        plt.close(self._fig)


@contextmanager
def plot_figure():
    ''' Context manager for adding plots to Reports with the defined style.

        Usage:
            with plot_figure() as fig:
                ... # Plot stuff to figure
    '''
    with plt.style.context(plotstyle), ReportPlot() as fig:
        yield fig


def initplot(plot=None):
    ''' Initialize a Figure and Axis to plot on.

        Args:
            plot: plt.Figure, plt.Axis, or None. If None, new figure and
                axis will be created. If Figure or Axis, the Figure AND Axis
                will be returned.

        Returns:
            fig: plt.Figure instance
            ax: plt.Axis instance
    '''
    if plot is None:
        fig = plt.gcf()
        ax = plt.gca()
    elif hasattr(plot, 'gca'):
        fig, ax = plot, plot.gca()
    elif hasattr(plot, 'figure'):
        fig, ax = plot.figure, plot
    else:
        raise ValueError('Undefined plot type')
    return fig, ax


def bars_histogram(ax, bins, color='C0'):
    ''' Plot continuous histogram bins (list of HistogramBin) as touching bars '''
    midpoints = np.array([b.midpoint for b in bins])
    freqs = [b.frequency for b in bins]
    width = np.diff(midpoints).mean() if len(bins) > 1 else 1
    ax.bar(midpoints, freqs, width=width, color=color, alpha=.7)
    ax.set_xlabel('Value')
    ax.set_ylabel('Frequency')


def bars_discrete(ax, bins, color='C0'):
    ''' Plot discrete histogram bins (list of DiscreteHistogramBin), one bar per value '''
    ax.bar([b.value for b in bins], [b.frequency for b in bins], width=.8, color=color, alpha=.7)
    ax.set_xlabel('Value')
    ax.set_ylabel('Frequency')


def bars_categorical(ax, counts, color='C0'):
    ''' Plot dictionary of label: count as one bar per label '''
    positions = np.arange(len(counts))
    ax.bar(positions, list(counts.values()), width=.6, color=color, alpha=.7)
    ax.set_xticks(positions, list(counts.keys()))
    ax.set_xlabel('Outcome')
    ax.set_ylabel('Count')
