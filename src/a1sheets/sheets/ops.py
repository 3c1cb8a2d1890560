import logging
from collections.abc import Sequence

from googleapiclient.errors import HttpError

from .resources import *
from .a1 import GoogleSheetsRange, a1_notation
from ..access import service
from ..errors import GoogleSheetsApiError

logger = logging.getLogger(__name__)

# all the ops here are against the values resource of sheets v4
_sheets_service = service("sheets", "v4")


def _execute(request, what: str) -> dict:
    """
    Run a built request, turning an HTTP failure into a GoogleSheetsApiError
    so callers don't have to know about the client library.
    """
    try:
        response = request.execute()
    except HttpError as e:
        body = e.content.decode('utf-8', errors='replace') if isinstance(e.content, bytes) else str(e.content)
        logger.error("%s failed with %s: %s", what, e.resp.status, body)
        raise GoogleSheetsApiError(int(e.resp.status), body, {'reason': str(e.reason)}) from e
    return response or {}


def _option(lookup, value: str, name: str) -> str:
    option = lookup(value)
    if not option:
        raise ValueError(f"Invalid {name} value: {value}")
    return option


def _rows(values: Sequence) -> list[list]:
    """A single row is allowed anywhere a list of rows is, normalize to rows"""
    vals = list(values)
    if vals and all(isinstance(v, (list, tuple)) for v in vals):
        return [list(v) for v in vals]
    return [vals]


@_sheets_service
def append(spreadsheetId: str, values: Sequence,
           range: str|GoogleSheetsRange|None = None,
           valueInputOption: str = "USER",
           insertDataOption: str = "INSERT",
           service=None) -> AppendValuesResponse:
    """
    Wrapper for calling the append() method on the values resource.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/append
    Appends values as new rows under the table found in range.  Without a range
    the table is searched for in columns A through however many columns the
    widest row needs, as in 'A:C' for three values.
    values can be a single row or a list of rows.
    """
    rows = _rows(values)
    width = max(len(row) for row in rows)
    if not width:
        raise ValueError("append() needs at least one value")
    r = str(range) if range else a1_notation(0, None, width - 1, None)
    body = ValueRange(range=r, majorDimension="ROWS", values=rows).trim()
    logger.debug("appending %d rows to %s!%s", len(rows), spreadsheetId, r)
    request = service.spreadsheets().values().append(
        spreadsheetId=spreadsheetId, range=r,
        valueInputOption=_option(GoogleSheetsEnum.valueInputOption, valueInputOption, "valueInputOption"),
        insertDataOption=_option(GoogleSheetsEnum.insertDataOption, insertDataOption, "insertDataOption"),
        body=body)
    return AppendValuesResponse.from_base(_execute(request, "append"))


@_sheets_service
def batchUpdate(spreadsheetId: str, data: ValueRange|Sequence[ValueRange],
                valueInputOption: str = "USER",
                includeValuesInResponse: bool = False,
                valueRenderOption: str = "FORMATTED",
                dateTimeRenderOption: str = "SERIAL",
                service=None) -> BatchUpdateValuesResponse:
    """
    Wrapper for calling the batchUpdate() method on the values resource.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/batchUpdate
    Write the cell data to the specified ranges in one request.
    """
    dlist = [data] if isinstance(data, ValueRange) else list(data)
    for d in dlist:
        if not d:
            raise ValueError("Invalid range value detected")
    value_render = _option(GoogleSheetsEnum.valueRenderOption, valueRenderOption, "valueRenderOption")
    body = {
        "valueInputOption": _option(GoogleSheetsEnum.valueInputOption, valueInputOption, "valueInputOption"),
        "data": [d.trim() for d in dlist],
        "includeValuesInResponse": includeValuesInResponse,
        "responseValueRenderOption": value_render,
    }
    # date time rendering is ignored by the service for formatted values
    if value_render != "FORMATTED_VALUE":
        body["responseDateTimeRenderOption"] = _option(GoogleSheetsEnum.dateTimeRenderOption,
                                                       dateTimeRenderOption, "dateTimeRenderOption")
    if not dlist:
        return BatchUpdateValuesResponse(spreadsheetId)
    logger.debug("batch updating %d ranges in %s", len(dlist), spreadsheetId)
    request = service.spreadsheets().values().batchUpdate(spreadsheetId=spreadsheetId, body=body)
    return BatchUpdateValuesResponse.from_base(_execute(request, "batchUpdate"))


@_sheets_service
def clear(spreadsheetId: str, range: str|GoogleSheetsRange,
          service=None) -> ClearValuesResponse:
    """
    Wrapper for calling the clear() method on the values resource.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/clear
    Only values are cleared, formatting and validation stay put.
    """
    r = str(range)
    if not r:
        raise ValueError("clear() needs a range")
    logger.debug("clearing %s!%s", spreadsheetId, r)
    request = service.spreadsheets().values().clear(spreadsheetId=spreadsheetId, range=r, body={})
    return ClearValuesResponse.from_base(_execute(request, "clear"))


@_sheets_service
def getValues(spreadsheetId: str, range: str|GoogleSheetsRange,
              dimension: str = "ROWS",
              valueRenderOption: str = "FORMATTED",
              dateTimeRenderOption: str = "SERIAL",
              service=None) -> ValueRange:
    """
    Wrapper for calling the get() method on the values resource.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/get
    Empty trailing rows and columns are not returned, so asking for A1:C5
    when only A1 and A2 have data gives back two rows of one value.
    """
    r = str(range)
    request = service.spreadsheets().values().get(
        spreadsheetId=spreadsheetId, range=r,
        majorDimension=_option(GoogleSheetsEnum.dimension, dimension, "majorDimension"),
        valueRenderOption=_option(GoogleSheetsEnum.valueRenderOption, valueRenderOption, "valueRenderOption"),
        dateTimeRenderOption=_option(GoogleSheetsEnum.dateTimeRenderOption, dateTimeRenderOption, "dateTimeRenderOption"))
    return ValueRange.from_base(_execute(request, "get"))


@_sheets_service
def updateValues(spreadsheetId: str, range: str|GoogleSheetsRange, values: Sequence,
                 valueInputOption: str = "USER",
                 includeValuesInResponse: bool = False,
                 valueRenderOption: str = "FORMATTED",
                 dateTimeRenderOption: str = "FORMATTED",
                 service=None) -> UpdateValuesResponse:
    """
    Wrapper for calling the update() method on the values resource.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/update
    Values are always sent as rows.
    """
    r = str(range)
    body = ValueRange(range=r, majorDimension="ROWS", values=_rows(values)).trim()
    logger.debug("updating %s!%s", spreadsheetId, r)
    request = service.spreadsheets().values().update(
        spreadsheetId=spreadsheetId, range=r, body=body,
        valueInputOption=_option(GoogleSheetsEnum.valueInputOption, valueInputOption, "valueInputOption"),
        includeValuesInResponse=includeValuesInResponse,
        responseValueRenderOption=_option(GoogleSheetsEnum.valueRenderOption, valueRenderOption, "valueRenderOption"),
        responseDateTimeRenderOption=_option(GoogleSheetsEnum.dateTimeRenderOption, dateTimeRenderOption,
                                             "dateTimeRenderOption"))
    return UpdateValuesResponse.from_base(_execute(request, "update"))
