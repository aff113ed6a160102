''' Class for managing a project, a list of calculator objects. '''

import logging
from contextlib import suppress
from io import StringIO
import shutil

from .component import read_yaml
from .proj_explore import ProjectDistExplore
from ..common import report


# Project component class by config "mode"
_modes = {
    'distributions': ProjectDistExplore,
    }


class Project:
    ''' Project container. Holds a list of calculation objects '''
    def __init__(self, items=None):
        self.items = []
        if items is not None:
            for item in items:
                self.add_item(item)

    def count(self):
        ''' Get number of items in project '''
        return len(self.items)

    def get_mode(self, index):
        ''' Get calculation mode for the index '''
        item = self.items[index]
        if item.mode not in _modes:
            raise ValueError(f'Unknown item {item}')
        return item.mode

    def add_item(self, item):
        ''' Add calculator item to project.

            Args:
                item: ProjectComponent item to add.
        '''
        item.project = self  # Add reference to project the item is in
        self.items.append(item)

    def rem_item(self, item):
        ''' Remove item from project

            Args:
                item (int or string): If int, will remove item at index[int]. If string, will remove
                first item with that name.
        '''
        try:
            removed = self.items.pop(item)
        except TypeError:
            names = self.get_names()
            removed = self.items.pop(names.index(item))

        with suppress(AttributeError):
            removed.project = None

    def rename_item(self, index, name):
        ''' Rename an item '''
        self.items[index].name = name

    def get_names(self):
        ''' Get names of all project components '''
        return [item.name for item in self.items]

    def save_config(self, fname):
        ''' Save project config file '''
        fstr = StringIO()
        for item in self.items:
            item.save_config(fstr)
        fstr.seek(0)
        try:
            shutil.copyfileobj(fstr, fname)  # fname is file object
        except AttributeError:  # fname is string name of file
            fstr.seek(0)
            with open(fname, 'w', encoding='utf-8') as f:
                shutil.copyfileobj(fstr, f)

    @classmethod
    def from_configfile(cls, fname):
        ''' Load project from config file.

        Args:
            fname: File name or file object to read from

        Returns:
            Project instance loaded from config, or None if the file
            isn't a readable project.
        '''
        config = read_yaml(fname)
        if config is None:
            return None
        if not isinstance(config, list):
            config = [config]

        newproj = cls()
        for configdict in config:
            if not hasattr(configdict, 'get'):  # Something not right with file
                return None

            mode = configdict.get('mode', 'distributions')
            if mode not in _modes:
                raise ValueError(f'Unsupported project mode {mode}')
            newproj.add_item(_modes[mode].from_config(configdict))
        logging.info(f'Loaded project with {newproj.count()} item(s)')
        return newproj

    def calculate(self):
        ''' Run calculate() method on all items and append all reports '''
        r = report.Report()
        for item in self.items:
            r.hdr(item.name, level=1)
            r.append(item.calculate().report.summary())
            r.div()
        return r

    def report_short(self):
        ''' Summary table for every project component '''
        return self._report(detail=None)

    def report_summary(self):
        ''' Summary of each distribution in every project component '''
        return self._report(detail=0)

    def report_all(self):
        ''' Full report, with histograms, for every project component '''
        return self._report(detail=2)

    def _report(self, detail=None):
        r = report.Report()
        for item in self.items:
            r.hdr(item.name, level=1)
            out = item.result.report
            if detail is None:
                r.append(out.summary())
            else:
                r.append(out.all(detail=detail))
            r.div()
        return r
