''' Decorator for attaching a Report class to a result dataclass

    Adds a `report` property returning reportclass(result), and a Markdown
    representer for Jupyter.

    Usage:

        @reporter.reporter(ReportExploreResult)
        @dataclass
        class ExploreResult:
            ...
'''


def reporter(reportclass):
    def decorator(resultclass):

        @property
        def report(self):
            return reportclass(self)

        def _repr_markdown_(self):
            return self.report.summary().get_md(figfmt='svg')

        setattr(resultclass, 'report', report)
        setattr(resultclass, '_repr_markdown_', _repr_markdown_)
        return resultclass
    return decorator
