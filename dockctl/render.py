from typing import Optional, Sequence

from rich.console import Console
from rich.measure import Measurement
from rich.table import Table
from rich.text import Text

from dockctl.schemas import DisplayRow

# Upper bound used only to measure a table's natural width
MEASURE_WIDTH = 100_000


class TableRenderer:
    """Prints display rows as a table with a bold header row. Cells are never cut short."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def build(self, headers: Sequence[str], rows: Sequence[DisplayRow]) -> Table:
        table = Table(header_style="bold", show_lines=False)
        for header in headers:
            table.add_column(header, no_wrap=True)
        for row in rows:
            # Text() so ids and names are never read as console markup
            table.add_row(*(Text(cell) for cell in row.as_tuple()))
        return table

    def natural_width(self, table: Table) -> int:
        options = self.console.options.update_width(MEASURE_WIDTH)
        return Measurement.get(self.console, options, table).maximum

    def render(self, headers: Sequence[str], rows: Sequence[DisplayRow]) -> None:
        table = self.build(headers, rows)
        width = self.console.width
        needed = self.natural_width(table)
        if needed <= width:
            self.console.print(table)
            return

        # Widen for this table instead of letting rich ellipsize cells
        self.console.width = needed
        try:
            self.console.print(table)
        finally:
            self.console.width = width

    def print(self, message: str) -> None:
        self.console.print(message)
