"""
Reporting app: sales totals, recent history and the spreadsheet export.
"""
