from dataclasses import asdict,fields,is_dataclass
from typing import Self

class GoogleWorkSpaceResourceBase():
    """
    Intended to be subclassed by a dataclass but isnt actually a dataclass.
    Subclasses mirror the JSON bodies of the API so field names stay camelCase.
    """
    @classmethod
    def from_base(cls, base: dict|None) -> Self:
        """
        Build from a response dict.  The API adds fields over time so
        anything that isn't a field here is dropped rather than blowing
        up the initializer.
        """
        b = dict(base or {})
        if is_dataclass(cls):
            names = {f.name for f in fields(cls) if f.init}
            b = {k: v for k,v in b.items() if k in names}
        return cls(**b)

    def to_base(self) -> dict:
        """
        Default just return the dict representation of the object as needed by
        the GWS client.  Something more complicated can override.
        Call fixup() first to ensure all fields are in correct format.
        """
        self.fixup()
        return asdict(self)

    def trim(self) -> dict:
        """
        Return a 'trimmed' dict of the resource.  That is, removing any top level attributes
        that are an empty or None.  For empty needs to be a string, or container. For None
        needs to be a value like int or bool where 'not' could be a valid value.  This is
        for GWS requests that only want filled-in fields.
        """
        b = self.to_base()
        return {k: v for k,v in b.items()
                if not (v is None or (type(v) not in [int,bool,float] and not v))}

    def fixup(self) -> None:
        """
        notify a subclass to do any field adjustments
        """
        pass
