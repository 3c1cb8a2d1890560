from typing import Self
from collections.abc import Sequence

from googleapiclient.discovery import Resource

from .a1 import GoogleSheetsRange, sheet_range
from .resources import *
from . import ops
from ..access import gws
from ..errors import AuthenticationError

class GoogleSpreadSheet():
    """
    A spreadsheet addressed by its ID, with the values operations bound to it.
    Ranges can be plain A1 strings or GoogleSheetsRange objects.  Without a
    sheet title the service applies a range to the first sheet.

    service is normally left as None to go through the shared gws access,
    passing one in is for when you've built your own.
    """
    DEFAULT_SHEET = "Sheet1"

    def __init__(self, spreadsheet_id: str, service: Resource|None = None) -> None:
        if not spreadsheet_id:
            raise ValueError("A spreadsheet ID is required")
        self._spreadsheet_id = str(spreadsheet_id)
        self._service = service

    @classmethod
    def initialize(cls, spreadsheet_id: str) -> Self:
        """
        Authenticate through the shared access and return the spreadsheet.

        raises: AuthenticationError if there are no usable credentials.
        """
        if not gws.connected and not gws.connect():
            raise AuthenticationError("Could not authenticate with Google, no usable credentials",
                                      {'secrets': str(gws.client_secrets), 'cache': str(gws.cred_cache)})
        return cls(spreadsheet_id)

    def __str__(self) -> str:
        return self._spreadsheet_id

    def __repr__(self) -> str:
        return f"{self.__class__}:{str(self)}"

    @property
    def id(self) -> str:
        return self._spreadsheet_id

    @property
    def link(self) -> str:
        """URL to open the spreadsheet in a browser"""
        return f"https://docs.google.com/spreadsheets/d/{self._spreadsheet_id}/"

    def append(self, values: Sequence,
               range: str|GoogleSheetsRange|None = None) -> AppendValuesResponse:
        """
        Append a row (or rows) under the existing data, entered as if
        typed by a user and inserting new rows rather than overwriting.
        """
        return ops.append(self._spreadsheet_id, values, range,
                          valueInputOption="USER_ENTERED", insertDataOption="INSERT_ROWS",
                          service=self._service)

    def batchUpdate(self, data: ValueRange|Sequence[ValueRange]) -> BatchUpdateValuesResponse:
        """Write several ranges in one request"""
        return ops.batchUpdate(self._spreadsheet_id, data,
                               valueInputOption="USER_ENTERED", service=self._service)

    def clearSheet(self, sheet: str = DEFAULT_SHEET) -> ClearValuesResponse:
        """
        Clear every value on a sheet, formatting is left alone.
        A title is required, there is no 'first sheet' default for a clear.
        """
        if not sheet:
            raise ValueError("clearSheet() needs a sheet title")
        return ops.clear(self._spreadsheet_id, sheet_range(sheet, ""), service=self._service)

    def updateValues(self, range: str|GoogleSheetsRange, values: Sequence) -> UpdateValuesResponse:
        """
        Overwrite values starting at range, responses rendered as formatted
        values and strings.
        """
        return ops.updateValues(self._spreadsheet_id, range, values,
                                valueInputOption="USER_ENTERED",
                                valueRenderOption="FORMATTED_VALUE",
                                dateTimeRenderOption="FORMATTED_STRING",
                                service=self._service)

    def refreshEntireSheet(self, values: Sequence, sheet: str = DEFAULT_SHEET) -> UpdateValuesResponse:
        """Replace everything on the sheet with values, written from A1"""
        self.clearSheet(sheet)
        return self.updateValues(sheet_range(sheet, "A1"), values)

    def getValues(self, range: str|GoogleSheetsRange,
                  dimension: str = "ROWS") -> ValueRange:
        return ops.getValues(self._spreadsheet_id, range, dimension, service=self._service)
