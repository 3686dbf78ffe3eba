"""
Input readers.

Modules
-------
spreadsheet : read_first_sheet(): first worksheet of an .xlsx workbook
              as header-keyed row dicts (openpyxl, read-only mode).
"""
