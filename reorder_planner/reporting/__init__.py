"""
reorder_planner.reporting: Report shaping, order-file export, and CLI display.

Modules:
  assembler : ReportLine projection, export rows, summary totals.
  export    : Headerless ISBN,Quantity CSV text and dated order files.
  formatters: ASCII terminal formatters for Typer CLI commands.
"""
