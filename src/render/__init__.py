"""Response rendering: charts and tables derived from Query Service answers.

Responsibilities:
    - Chart dispatch by chart type into Plotly traces and layout
    - Label and title formatting
    - Table shaping tolerant of ragged rows

Pure data mapping. The NiceGUI widgets in ``src.ui`` draw the results.
"""

from src.render.charts import ChartFigure, build_figure, format_label
from src.render.tables import TableView, build_table

__all__ = ["ChartFigure", "TableView", "build_figure", "build_table", "format_label"]
