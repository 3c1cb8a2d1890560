import pytest

from a1sheets.sheets.resources import (GoogleSheetsEnum, ValueRange, UpdateValuesResponse,
                                       AppendValuesResponse, BatchUpdateValuesResponse,
                                       ClearValuesResponse)

def test_enums():
    assert(GoogleSheetsEnum.dimension("rows") == "ROWS")
    assert(GoogleSheetsEnum.dimension("C") == "COLUMNS")
    assert(GoogleSheetsEnum.dimension("sideways") == "")
    assert(GoogleSheetsEnum.valueInputOption("user") == "USER_ENTERED")
    assert(GoogleSheetsEnum.valueRenderOption("FORMULA") == "FORMULA")
    assert(GoogleSheetsEnum.dateTimeRenderOption("formatted") == "FORMATTED_STRING")
    assert(GoogleSheetsEnum.insertDataOption("insert") == "INSERT_ROWS")
    assert(GoogleSheetsEnum.insertDataOption("append") == "")

def test_value_range():
    vr = ValueRange("A1:B2", "R", [[1, 2]])
    assert(vr)
    assert(vr.majorDimension == "ROWS")
    assert(vr.trim() == {"range": "A1:B2", "majorDimension": "ROWS", "values": [[1, 2]]})
    assert(not ValueRange())
    assert(ValueRange("A1").trim() == {"range": "A1"})
    with pytest.raises(ValueError):
        ValueRange("A1", "DIAGONAL")

def test_update_values_response_from_base():
    r = UpdateValuesResponse.from_base({
        "spreadsheetId": "abc",
        "updatedRange": "Sheet1!A1:C2",
        "updatedRows": 2,
        "updatedColumns": 3,
        "updatedCells": 6,
        "updatedData": {"range": "Sheet1!A1:C2", "majorDimension": "ROWS", "values": [[1, 2, 3]]},
        "notAFieldYet": 1,
    })
    assert(r)
    assert(isinstance(r.updatedData, ValueRange))
    assert(r.updatedData.values == [[1, 2, 3]])
    assert(str(r) == "3 columns; 2 rows; and 6 total cells updated")
    b = r.to_base()
    assert(b["updatedData"]["range"] == "Sheet1!A1:C2")
    assert("notAFieldYet" not in b)

def test_empty_responses():
    r = UpdateValuesResponse()
    assert(not r)
    assert(str(r) == "0 columns; 0 rows; and 0 total cells updated")
    assert(not AppendValuesResponse.from_base(None))
    assert(not BatchUpdateValuesResponse.from_base({}))
    assert(not ClearValuesResponse())

def test_append_values_response():
    r = AppendValuesResponse.from_base({
        "spreadsheetId": "abc",
        "tableRange": "Sheet1!A1:C3",
        "updates": {"spreadsheetId": "abc", "updatedRange": "Sheet1!A4:C4",
                    "updatedRows": 1, "updatedColumns": 3, "updatedCells": 3},
    })
    assert(r)
    assert(isinstance(r.updates, UpdateValuesResponse))
    assert(r.updates.updatedRange == "Sheet1!A4:C4")
    assert(r.to_base()["updates"]["updatedCells"] == 3)

def test_batch_update_values_response():
    r = BatchUpdateValuesResponse.from_base({
        "spreadsheetId": "abc",
        "totalUpdatedRows": 3,
        "totalUpdatedColumns": 2,
        "totalUpdatedCells": 4,
        "totalUpdatedSheets": 1,
        "responses": [{"spreadsheetId": "abc", "updatedRange": "A1:B1", "updatedCells": 2},
                      {"spreadsheetId": "abc", "updatedRange": "A2:A3", "updatedCells": 2}],
    })
    assert(r)
    assert(all(isinstance(u, UpdateValuesResponse) for u in r.responses))
    assert(str(r) == "2 columns; 3 rows; and 4 total cells updated across 1 sheets")
    assert([u["updatedRange"] for u in r.to_base()["responses"]] == ["A1:B1", "A2:A3"])
