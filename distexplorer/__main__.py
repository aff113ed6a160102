#!/usr/bin/env python
''' Distribution Explorer command line interface.

    Commands installed:
        distexplore: Sample one distribution and report the results
        distexploref: Sample the distributions defined in a project (yaml) file
'''
import os
import sys
import logging
import argparse

from distexplorer.common import distributions
from distexplorer.distexplore.dist_explore import SAMPLE_COUNTS, DEFAULT_SAMPLES, DEFAULT_BINS
from distexplorer.project import Project, ProjectDistExplore


def _add_output_args(parser):
    ''' Arguments shared by all commands '''
    parser.add_argument('-o', help='Output filename. Extension determines file format.',
                        type=argparse.FileType('w', encoding='UTF-8'), default=sys.stdout)
    parser.add_argument('-f', help="Output format for when output filename not provided ['txt', 'html', 'md']",
                        type=str, choices=['html', 'txt', 'md'])
    parser.add_argument('--verbose', '-v', action='count', default=0,
                        help='Verbose mode. Include histogram table with one v, histogram plot with two.')
    parser.add_argument('--loglevel', help='Logging level', type=str.upper, default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])


def _write_report(r, args):
    ''' Write the report in the format requested by the arguments '''
    fmt = args.f
    if args.o and hasattr(args.o, 'name') and args.o.name not in ['<stdout>', '-']:
        _, fmt = os.path.splitext(str(args.o.name))
        fmt = fmt[1:]  # remove '.'

    if fmt in ['html', 'htm']:
        strreport = r.get_html(figfmt='svg')
    elif fmt == 'md':
        strreport = r.get_md(figfmt='svg')
    else:
        strreport = r.get_md(figfmt='text')
    args.o.write(strreport)
    if args.o is not sys.stdout:
        args.o.close()


def parse_params(name, params):
    ''' Convert list of "key=value" strings into distribution keyword arguments.
        For categorical distributions, each key is a label and each value its probability.
    '''
    kwds = {}
    for param in params:
        key, sep, value = param.partition('=')
        if not sep:
            raise distributions.InvalidSpecification(f'Parameter `{param}` must be in key=value form')
        try:
            kwds[key.strip()] = float(value)
        except ValueError:
            raise distributions.InvalidSpecification(f'Parameter `{key.strip()}` value `{value}` is not a number') from None
    if distributions.get_argnames(name) == ['probs']:
        kwds = {'probs': kwds}
    return kwds


def main_explore(args=None):
    ''' Sample one distribution '''
    parser = argparse.ArgumentParser(prog='distexplore', description='Sample a probability distribution.')
    parser.add_argument('dist', help='Distribution name', type=str,
                        choices=[n for n in distributions.names if n != 'mixture'])
    parser.add_argument('params', nargs='*', type=str,
                        help='Distribution parameters (e.g. "mean=0 std=1"). For categorical, '
                             'label and probability (e.g. "A=.3 B=.7")')
    parser.add_argument('--samples', help='Number of samples', type=int,
                        choices=SAMPLE_COUNTS, default=DEFAULT_SAMPLES)
    parser.add_argument('--bins', help='Number of histogram bins', type=int, default=DEFAULT_BINS)
    parser.add_argument('--seed', help='Random Generator Seed', type=int, default=None)
    _add_output_args(parser)
    args = parser.parse_args(args=args)
    logging.basicConfig(level=args.loglevel)

    if args.bins < 1:
        parser.error('--bins must be >= 1')
    try:
        dist = distributions.get_distribution(args.dist, **parse_params(args.dist, args.params))
    except distributions.InvalidSpecification as err:
        parser.error(str(err))

    proj = ProjectDistExplore(name=args.dist)
    proj.model.set_numsamples(args.samples)
    proj.model.bins = args.bins
    proj.seed = args.seed
    proj.model.set_dist(args.dist, dist)
    out = proj.calculate()
    _write_report(out.report.single(args.dist, detail=args.verbose), args)


def main_setup(args=None):
    ''' Run calculations defined in YAML setup file '''
    parser = argparse.ArgumentParser(prog='distexploref', description='Sample distributions defined in a project file.')
    parser.add_argument('filename', help='Project (yaml) file.', type=str)
    _add_output_args(parser)
    args = parser.parse_args(args=args)
    logging.basicConfig(level=args.loglevel)

    try:
        u = Project.from_configfile(args.filename)
    except (ValueError, OSError) as err:
        parser.error(str(err))
    if u is None:
        parser.error(f'Unable to read project file {args.filename}')
    u.calculate()

    if args.verbose > 0:
        r = u.report_all() if args.verbose > 1 else u.report_summary()
    else:
        r = u.report_short()
    _write_report(r, args)


if __name__ == '__main__':
    main_explore()
