"""
A small client for the Google Sheets values API built around A1 notation.
The goal is to simplify the fiddly parts: authentication, turning
zero-indexed row/column coordinates into A1 ranges, and the structures
for JSON requests/responses.

Python dataclasses are used for the resource structs and most of the logic is
translating between those and the raw dicts.

    from a1sheets.sheets import GoogleSpreadSheet, GoogleSheetsRange

    ss = GoogleSpreadSheet.initialize("<spreadsheet id>")
    ss.append(["a", "b", "c"])
    ss.getValues(GoogleSheetsRange(0, 0, 2, 9, sheet="Sheet1"))
"""

__version__ = "0.1.0"
