''' Markdown report formatting and rendering '''

from io import BytesIO
import base64
from collections import ChainMap
from contextlib import suppress
import numpy as np
import markdown
import matplotlib.pyplot as plt

from .style import css


# Defaults if kwargs aren't provided
default_sigfigs = 2
default_numformat = 'auto'
default_thresh = 5
default_E = True


class Number:
    ''' A formatted numeric value for use in a report

        Args:
            value (float): The value to report
            n (int): Number of significant figures
            fmt (string): Format for the number - auto, decimal, scientific,
                engineering, si
            fmin (int): Minimum number of decimal places, as override to n to
                prevent rounding too much.
            thresh (int): Exponent threshold for converting to scientific notation when in
                "auto" format. Numbers above 10**thresh will be printed in scientific
                notation.
            elower (bool): Dispaly scientific notation with lowercase "e"
    '''
    numfmts = ['auto', 'decimal', 'scientific', 'sci', 'engineering', 'eng', 'si']

    def __init__(self, value, **kwargs):
        self.value = value
        self.kwargs = kwargs

    def __str__(self):
        return self.string()

    def _repr_markdown_(self):
        ''' Markdown representation for Jupyter '''
        return self.string()

    def string(self, **kwargs):
        ''' Get string representation of the number.

            Args:
                See Number arguments. Anything defined in
                Number __init__ kwargs override the string() kwargs
        '''
        kargs = ChainMap(self.kwargs, kwargs)
        figs = kargs.get('n', default_sigfigs)
        fmin = kargs.get('fmin', None)
        fmt = kargs.get('fmt', default_numformat).lower()
        thresh = kargs.get('thresh', default_thresh)
        echr = 'e' if kargs.get('elower', default_E) else 'E'
        value = self.value

        if fmt not in self.numfmts:
            raise ValueError(f'Number Format must be one of {", ".join(self.numfmts)}')
        if figs < 1:
            raise ValueError('Significant Figures must be >= 1')

        if value is None:
            return 'nan'
        elif not np.isfinite(value):
            return format(value)  # 'nan' or 'inf'
        elif value == 0:
            numstr = '0' if figs == 1 else '0.' + '0'*(figs-1)
            if fmt in ['sci', 'scientific', 'eng', 'engineering']:
                numstr = numstr + 'e+00'
            return numstr

        if fmt == 'auto':
            fmt = 'sci' if abs(value) > 10**thresh or abs(value) < 10**-thresh else 'decimal'

        exp = int(np.floor(np.log10(abs(value))))   # Exponent if written in exp. notation.
        roundto = -(exp - (figs-1))
        if fmin is not None:
            roundto = max(fmin, roundto)
            figs = roundto + exp + 1

        if fmt == 'decimal':
            numstr = f'{np.round(value, roundto):.{max(0, roundto)}f}'

        elif fmt in ('sci', 'scientific'):
            numstr = f'{value:.{max(figs, 1)-1}{echr}}'

        else:  # eng, engineering, si
            exp3 = exp - (exp % 3)  # Exponent as multiple of 3
            value = value/(10**exp3)
            roundto = -int((np.floor(np.log10(abs(value)))) - (figs-1))
            value = np.round(value, roundto)
            roundto = max(0, roundto)
            if fmt == 'si' and -24 <= exp3 <= 24:
                suffix = 'yzafpnum kMGTPEZY'[exp3 // 3 + 8]
                numstr = f'{value:.{roundto}f}{suffix}'.rstrip()
            else:
                numstr = f'{value:.{roundto}f}{echr}{exp3:+03d}'
        return numstr


class Plot:
    ''' A matplotlib figure for use in a report.

        Args:
            fig (plt.Figure): The figure to format
    '''
    def __init__(self, fig=None):
        self.fig = fig  # MPL figure

    def __del__(self):
        plt.close(self.fig)

    def _repr_markdown_(self):
        ''' Markdown representation for Jupyter '''
        return f'![]({self.svg_b64()})'

    def png_b64(self, dpi=120):
        ''' Render to base-64 encoded PNG

            Args:
                dpi (int): Dots per inch for PNG
        '''
        buf = BytesIO()
        self.fig.savefig(buf, format='png', dpi=dpi)
        b64 = base64.b64encode(buf.getvalue()).decode('utf-8')
        return f'data:image/png;base64,{b64}'

    def svg_str(self):
        ''' Render to SVG string '''
        buf = BytesIO()
        self.fig.savefig(buf, bbox_inches='tight', format='svg')
        svg = buf.getvalue().decode('utf-8')
        return svg[svg.find('<svg'):]  # Strip XML header stuff

    def svg_b64(self):
        ''' Render base-64 encoded SVG string, prefixed for use in markdown or html image tag '''
        b64 = base64.b64encode(self.svg_str().encode('utf-8')).decode('utf-8')
        return f'data:image/svg+xml;base64,{b64}'

    def textplot(self, char='#', H=16, W=60):
        ''' Plot the bars in the figure as plain text/ascii

            Args:
                char (string): Character to fill the bars with
                H (int): Character height of plot
                W (int): Character width of plot
        '''
        margin = 7
        allplotstrs = []
        for ax in self.fig.axes:
            if len(ax.patches) == 0:
                continue

            xmin, xmax = ax.get_xlim()
            _, ymax = ax.get_ylim()
            s = np.full((H, W), ' ')
            for p in ax.patches:
                with suppress(ValueError):
                    # ValueError when patch height is nan or ymax is nan, ignore
                    height = int(np.round(p.get_height()/ymax * H))
                    x1 = int((p.get_x()-xmin)/(xmax-xmin) * (W-1))
                    x2 = max(x1+1, int((p.get_x()+p.get_width()-xmin)/(xmax-xmin) * (W-1)))
                    s[H-min(height, H):, x1:x2] = char

            lines = []
            for h, line in enumerate(s):
                if h == 0:
                    prefix = f'{ymax:.4g}'.rjust(margin)[:margin]
                elif h == H-1:
                    prefix = '0'.rjust(margin)
                else:
                    prefix = ' ' * margin
                lines.append(prefix + '|' + ''.join(line))
            lines.append(' ' * margin + '-'*W)

            labels = [(t.get_position()[0], t.get_text()) for t in ax.get_xticklabels() if t.get_text()]
            if labels:
                # Explicit tick labels, such as category names
                bottom = np.full(W + margin + 1, ' ')
                for x, text in labels:
                    col = margin + 1 + int((x-xmin)/(xmax-xmin) * (W-1)) - len(text)//2
                    col = min(max(col, 0), len(bottom)-len(text))
                    bottom[col:col+len(text)] = list(text)
                lines.append(''.join(bottom).rstrip())
            else:
                bottom = ' ' * (margin + 1)
                bottom += f'{xmin:.4g}'.ljust(W//2 - 3)
                bottom += f'{(xmin+xmax)/2:.4g}'.ljust(W//2 - 3)
                bottom += f'{xmax:.4g}'
                lines.append(bottom)

            plotstr = '\n'.join(lines)
            title = ax.get_title()
            if title:
                plotstr = f'{title:^{W+margin}}\n{plotstr}'
            allplotstrs.append(plotstr)
        return '\n\n\n'.join(allplotstrs) + '\n\n'


class Report:
    ''' A Report consisting of text, plots, and values for formatting
        in different formats.

        Args:
            figfmt (string): Format for matplotlib figures - svg, png, or text
            pngdpi (int): Dots per inch for PNG images
            inline (bool): Render Mardkown images inline (True) or as references in footer
            n (int): Significant figures for Numbers
    '''
    def __init__(self, **kwargs):
        self._s = ''
        self._plots = []
        self._values = []
        self.kwargs = kwargs

    def __str__(self):
        return self.get_md()

    def _repr_markdown_(self):
        ''' Markdown representation for Jupyter '''
        return self.get_md()

    def hdr(self, text, level=1):
        ''' Add a header to the report

            Args:
                text (string): Text of the header
                level (int): Header level. 1 is top level (# HEADER) in markdown.
        '''
        self._s += f'{"#"*level} {text}\n\n'

    def txt(self, text):
        ''' Add text to the report '''
        self._s += text

    def div(self):
        ''' Add a horizontal divider to the report '''
        self._s += '\n---\n\n'

    def plot(self, fig, end='\n\n'):
        ''' Add matplotlib figure to the report

            Args:
                fig (plt.Figure): Figure to add
                end (string): Characters to print (such as newline) after the figure
        '''
        self._s += self._insert_obj(Plot(fig), end=end)

    def num(self, value, end='', **kwargs):
        ''' Add a Numeric value to the report

            Args:
                value (float): Value to represent
                end (string): Characters to print after the value
                **kwargs: passed to Number class
        '''
        self._s += self._insert_obj(Number(value, **kwargs), end=end)

    def _insert_obj(self, obj, end=''):
        ''' Insert an object and return the string to add to _s '''
        if isinstance(obj, Number):
            s = f'[[VAL{len(self._values)}]]{end}'
            self._values.append(obj)
        elif isinstance(obj, Plot):
            s = f'[[PLT{len(self._plots)}]]{end}'
            self._plots.append(obj)
        elif isinstance(obj, (list, tuple)):
            s = ''
            for childobject in obj:
                s += self._insert_obj(childobject)
            s += end
        else:  # Text
            s = f'{obj}{end}'
        return s

    def table(self, rows, hdr):
        ''' Add a table to the report

            Args:
                rows (list): List of lists for each row. Each list item may be a
                    string, Number, or a tuple of strings and Numbers for the cell.
                hdr (list): List of items for the table header.
        '''
        s = '\n'
        widths = np.array([len(str(h))+1 for h in hdr], dtype=int)
        for row in rows:
            widths = np.maximum(widths, np.array([len(c) if isinstance(c, str) else 1 for c in row]))
        widths = np.maximum(widths + 1, 9)

        for i, row in enumerate([hdr] + list(rows)):
            line = [self._insert_obj(col) for col in row]
            s += ' | '.join(f'{val:{w}}' for w, val in zip(widths, line)) + '\n'
            if i == 0:
                s += '|'.join(f'{w*"-"}' for w in widths) + '\n'

        # Add | at beginning and end
        lines = ''
        for line in s.splitlines():
            lines += (('|' + line + '|\n') if len(line) > 0 else '\n')
        self._s += lines + '\n\n'

    def append(self, report, end=''):
        ''' Append another report onto this one

            Args:
                report: Another Report instance
                end (str): String to append after the report
        '''
        appendstring = report._s

        # Go backwards through the tagged objects to renumber them
        for i in range(len(report._plots)-1, -1, -1):
            appendstring = appendstring.replace(f'[[PLT{i}]]', f'[[PLT{i+len(self._plots)}]]')
        for i in range(len(report._values)-1, -1, -1):
            appendstring = appendstring.replace(f'[[VAL{i}]]', f'[[VAL{i+len(self._values)}]]')
        self._plots.extend(report._plots)
        self._values.extend(report._values)
        self._s += appendstring
        self._s += end

    def get_md(self, **kwargs):
        ''' Get the report in markdown format.

            Args:
                **kwargs: See Report class. Arguments specified at Report
                instantiation override arguments given here.
        '''
        kargs = ChainMap(self.kwargs, kwargs)
        figfmt = kargs.get('figfmt', 'svg')   # svg, png, text
        pngdpi = kargs.get('pngdpi', 120)
        inline = kargs.get('inline', False)

        footer = '\n\n'
        imagecnt = 0
        s = self._s
        start = s.find('[[')
        while start > -1:
            end = s.find(']]', start) + 2
            tag = s[start:end]
            obj = tag[2:5]  # Skip [[ and 3-letter type designator
            idx = int(tag[5:-2])

            if obj == 'VAL':
                s = s.replace(tag, self._values[idx].string(**kargs))

            elif obj == 'PLT':
                p = self._plots[idx]
                if figfmt in ['text', 'txt']:
                    pstr = '```\n' + p.textplot() + '```'
                else:
                    b64 = p.svg_b64() if figfmt == 'svg' else p.png_b64(dpi=pngdpi)
                    if inline:
                        pstr = f'![]({b64})'
                    else:
                        pstr = f'![IMG{imagecnt}][]\n\n'
                        footer += f'[IMG{imagecnt}]: {b64}\n'
                s = s.replace(tag, pstr)
                imagecnt += 1

            else:
                raise ValueError(f'Unknown report tag {tag}')

            start = s.find('[[')
        s += footer
        return s.strip()

    def get_html(self, **kwargs):
        ''' Get report in HTML format, including CSS header.

            Args:
                **kwargs: See Report class. Arguments specified at Report
                instantiation override arguments given here.
        '''
        style = '<style type="text/css">' + css.css + '</style>'
        html = markdown.markdown(self.get_md(**kwargs), extensions=['markdown.extensions.tables',
                                                                    'markdown.extensions.fenced_code'])
        html = html.encode('ascii', 'xmlcharrefreplace').decode('utf-8')
        return style + '\n' + html
