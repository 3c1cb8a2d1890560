import json

import httplib2
import pytest
from googleapiclient.errors import HttpError


def http_error(status: int, message: str = "error") -> HttpError:
    content = json.dumps({"error": {"code": status, "message": message}}).encode("utf-8")
    return HttpError(httplib2.Response({"status": status}), content)


class FakeRequest:
    """Stands in for googleapiclient.http.HttpRequest, execute() does the work"""
    def __init__(self, func, error: HttpError|None = None):
        self._func = func
        self._error = error

    def execute(self):
        if self._error is not None:
            raise self._error
        return self._func()


class FakeValues:
    """
    In memory spreadsheets().values() resource.  Every call is recorded as
    (method, kwargs) and values written by update/batchUpdate are kept by
    range string so get can hand them back.
    """
    def __init__(self, service):
        self._service = service

    def _request(self, method, kwargs, func):
        self._service.calls.append((method, kwargs))
        return FakeRequest(func, self._service.error)

    @staticmethod
    def _update_response(spreadsheetId, range_, values):
        return {
            "spreadsheetId": spreadsheetId,
            "updatedRange": range_,
            "updatedRows": len(values),
            "updatedColumns": max((len(r) for r in values), default=0),
            "updatedCells": sum(len(r) for r in values),
        }

    def append(self, *, spreadsheetId, range, valueInputOption, insertDataOption, body):
        def func():
            values = body.get("values", [])
            return {
                "spreadsheetId": spreadsheetId,
                "tableRange": "Sheet1!A1:C3",
                "updates": self._update_response(spreadsheetId, "Sheet1!A4:C4", values),
            }
        return self._request("append", dict(spreadsheetId=spreadsheetId, range=range,
                                            valueInputOption=valueInputOption,
                                            insertDataOption=insertDataOption, body=body), func)

    def batchUpdate(self, *, spreadsheetId, body):
        def func():
            responses = []
            for d in body["data"]:
                self._service.store[d["range"]] = d.get("values", [])
                responses.append(self._update_response(spreadsheetId, d["range"], d.get("values", [])))
            return {
                "spreadsheetId": spreadsheetId,
                "totalUpdatedRows": sum(r["updatedRows"] for r in responses),
                "totalUpdatedColumns": max((r["updatedColumns"] for r in responses), default=0),
                "totalUpdatedCells": sum(r["updatedCells"] for r in responses),
                "totalUpdatedSheets": 1,
                "responses": responses,
            }
        return self._request("batchUpdate", dict(spreadsheetId=spreadsheetId, body=body), func)

    def clear(self, *, spreadsheetId, range, body):
        def func():
            for k in list(self._service.store):
                if k == range or k.startswith(range + "!"):
                    del self._service.store[k]
            return {"spreadsheetId": spreadsheetId, "clearedRange": f"{range}!A1:Z1000"}
        return self._request("clear", dict(spreadsheetId=spreadsheetId, range=range, body=body), func)

    def get(self, *, spreadsheetId, range, majorDimension, valueRenderOption, dateTimeRenderOption):
        def func():
            response = {"range": range, "majorDimension": majorDimension}
            values = self._service.store.get(range, [])
            if values:
                response["values"] = values
            return response
        return self._request("get", dict(spreadsheetId=spreadsheetId, range=range,
                                         majorDimension=majorDimension,
                                         valueRenderOption=valueRenderOption,
                                         dateTimeRenderOption=dateTimeRenderOption), func)

    def update(self, *, spreadsheetId, range, body, valueInputOption, includeValuesInResponse,
               responseValueRenderOption, responseDateTimeRenderOption):
        def func():
            values = body.get("values", [])
            self._service.store[range] = values
            response = self._update_response(spreadsheetId, range, values)
            # the real service echoes unknown fields like this one, they should be ignored
            response["someNewField"] = True
            return response
        return self._request("update", dict(spreadsheetId=spreadsheetId, range=range, body=body,
                                            valueInputOption=valueInputOption,
                                            includeValuesInResponse=includeValuesInResponse,
                                            responseValueRenderOption=responseValueRenderOption,
                                            responseDateTimeRenderOption=responseDateTimeRenderOption), func)


class FakeSpreadsheets:
    def __init__(self, service):
        self._service = service

    def values(self):
        return FakeValues(self._service)


class FakeSheetsService:
    """Minimal stand in for build('sheets', 'v4')"""
    def __init__(self):
        self.calls = []
        self.store = {}
        self.error = None

    def spreadsheets(self):
        return FakeSpreadsheets(self)

    def last_call(self, method):
        for m, kwargs in reversed(self.calls):
            if m == method:
                return kwargs
        raise AssertionError(f"{method} was never called")


@pytest.fixture
def sheets_service():
    return FakeSheetsService()
