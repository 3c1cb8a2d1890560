"""
Class implementations of sheets values request and response resources.
As these are just logical groupings of data fields we use dataclasses
to implement.  Field names match the JSON bodies exactly so asdict()
gives what the client needs, and from_base() goes the other way,
with fixup() turning nested dicts back into their dataclasses.
Only the values resources this client calls are implemented.
"""
from dataclasses import dataclass, field, asdict
from typing import List

from ..resources import GoogleWorkSpaceResourceBase

__all__ = ["GoogleSheetsEnum", "ValueRange", "UpdateValuesResponse",
           "AppendValuesResponse", "BatchUpdateValuesResponse", "ClearValuesResponse"]

class GoogleSheetsEnum():
    """
    An 'enum' in the sheets client is just a string so this is
    just to translate and validate input.
    """
    _VALID_VALUE_RENDER_OPTIONS = {
        "FORMATTED": "FORMATTED_VALUE",
        "FORMATTED_VALUE": "FORMATTED_VALUE",
        "UNFORMATTED": "UNFORMATTED_VALUE",
        "UNFORMATTED_VALUE": "UNFORMATTED_VALUE",
        "FORMULA": "FORMULA"
    }
    _VALID_DATE_TIME_RENDER_OPTIONS = {
        "SERIAL": "SERIAL_NUMBER",
        "SERIAL_NUMBER": "SERIAL_NUMBER",
        "FORMATTED": "FORMATTED_STRING",
        "FORMATTED_STRING": "FORMATTED_STRING"
    }
    _VALID_DIMENSION_OPTIONS = {
        "ROWS": "ROWS",
        "R": "ROWS",
        "C": "COLUMNS",
        "COLS": "COLUMNS",
        "COLUMNS": "COLUMNS"
    }
    _VALID_VALUE_INPUT_OPTIONS = {
        "RAW": "RAW",
        "USER": "USER_ENTERED",
        "USER_ENTERED": "USER_ENTERED"
    }
    _VALID_INSERT_DATA_OPTIONS = {
        "OVERWRITE": "OVERWRITE",
        "INSERT": "INSERT_ROWS",
        "INSERT_ROWS": "INSERT_ROWS"
    }

    @classmethod
    def valueRenderOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/ValueRenderOption"""
        return cls._VALID_VALUE_RENDER_OPTIONS.get(str(option).upper(), "")

    @classmethod
    def dateTimeRenderOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/DateTimeRenderOption"""
        return cls._VALID_DATE_TIME_RENDER_OPTIONS.get(str(option).upper(), "")

    @classmethod
    def dimension(cls, dim: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/Dimension"""
        return cls._VALID_DIMENSION_OPTIONS.get(str(dim).upper(), "")

    @classmethod
    def valueInputOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/ValueInputOption"""
        return cls._VALID_VALUE_INPUT_OPTIONS.get(str(option).upper(), "")

    @classmethod
    def insertDataOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/append#InsertDataOption"""
        return cls._VALID_INSERT_DATA_OPTIONS.get(str(option).upper(), "")

@dataclass
class ValueRange(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values#resource:-valuerange
    range is A1 notation, which on output covers the whole requested range
    even though trailing empty rows and columns are left out of values.
    majorDimension defaults to ROWS on the service side when empty.
    """
    range: str = field(default="")
    majorDimension: str = field(default="")
    values: List[list] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.range = str(self.range)
        if self.majorDimension:
            d = str(self.majorDimension)
            self.majorDimension = GoogleSheetsEnum.dimension(d)
            if not self.majorDimension:
                raise ValueError(f"Invalid majorDimension value: {d}")

    def __bool__(self) -> bool:
        """A ValueRange is valid if it addresses a range"""
        return bool(self.range)

@dataclass
class UpdateValuesResponse(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/UpdateValuesResponse
    """
    spreadsheetId: str = field(default="")
    updatedRange: str = field(default="")
    updatedRows: int = field(default=0)
    updatedColumns: int = field(default=0)
    updatedCells: int = field(default=0)
    updatedData: ValueRange|dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.updatedData = self.updatedData if isinstance(self.updatedData,ValueRange) else ValueRange.from_base(self.updatedData)

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId) and bool(self.updatedRange)

    def __str__(self) -> str:
        return (f"{self.updatedColumns} columns; {self.updatedRows} rows; "
                f"and {self.updatedCells} total cells updated")

    def to_base(self) -> dict:
        self.fixup()
        b = asdict(self)
        b['updatedData'] = self.updatedData.to_base()
        return b

@dataclass
class AppendValuesResponse(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/append#response-body
    tableRange is the table the values were appended after, empty if
    no table was found.
    """
    spreadsheetId: str = field(default="")
    tableRange: str = field(default="")
    updates: UpdateValuesResponse|dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.updates = self.updates if isinstance(self.updates,UpdateValuesResponse) else UpdateValuesResponse.from_base(self.updates)

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)

    def __str__(self) -> str:
        return str(self.updates)

    def to_base(self) -> dict:
        self.fixup()
        return {'spreadsheetId': self.spreadsheetId, 'tableRange': self.tableRange,
                'updates': self.updates.to_base()}

@dataclass
class BatchUpdateValuesResponse(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/batchUpdate#response-body
    One UpdateValuesResponse per requested range, in request order.
    """
    spreadsheetId: str = field(default="")
    totalUpdatedRows: int = field(default=0)
    totalUpdatedColumns: int = field(default=0)
    totalUpdatedCells: int = field(default=0)
    totalUpdatedSheets: int = field(default=0)
    responses: List[UpdateValuesResponse|dict] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.responses = [r if isinstance(r,UpdateValuesResponse) else UpdateValuesResponse.from_base(r) for r in self.responses]

    def __bool__(self) -> bool:
        """Response is valid if an ID came back"""
        return bool(self.spreadsheetId)

    def __str__(self) -> str:
        return (f"{self.totalUpdatedColumns} columns; {self.totalUpdatedRows} rows; "
                f"and {self.totalUpdatedCells} total cells updated "
                f"across {self.totalUpdatedSheets} sheets")

    def to_base(self) -> dict:
        self.fixup()
        b = asdict(self)
        b['responses'] = [r.to_base() for r in self.responses]
        return b

@dataclass
class ClearValuesResponse(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/clear#response-body
    """
    spreadsheetId: str = field(default="")
    clearedRange: str = field(default="")

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)
