"""Request bodies accepted by the patcher endpoints.

Fields are optional at the schema level so handlers can report every
missing field at once with a 400 instead of FastAPI's 422.
"""

from __future__ import annotations

from typing import Annotated, Any, List, Optional, Sequence, Union

from pydantic import BaseModel, Field

from patchbridge.core.exceptions import MissingFieldsError
from patchbridge.patcher.geometry import Number


class RequiredFieldsModel(BaseModel):
    def require(
        self,
        *,
        truthy: Sequence[str] = (),
        present: Sequence[str] = (),
        non_null: Sequence[str] = (),
    ) -> None:
        """Raise `MissingFieldsError` naming each absent field.

        `truthy` fields must be non-empty; `present` fields only need to
        appear in the body, so an explicit null is accepted; `non_null`
        fields may be falsy (0, "") but not null.
        """

        missing = [name for name in truthy if not getattr(self, name)]
        missing += [name for name in present if name not in self.model_fields_set]
        missing += [name for name in non_null if getattr(self, name) is None]
        if missing:
            raise MissingFieldsError(missing)


class NewObjectRequest(RequiredFieldsModel):
    obj_type: Optional[str] = None
    position: Optional[Annotated[List[Number], Field(min_length=2, max_length=2)]] = None
    varname: Optional[str] = None
    args: Optional[Union[str, List[Any]]] = None


class ConnectionRequest(RequiredFieldsModel):
    src_varname: Optional[str] = None
    dst_varname: Optional[str] = None
    outlet_idx: Optional[Annotated[int, Field(ge=0)]] = None
    inlet_idx: Optional[Annotated[int, Field(ge=0)]] = None

    @property
    def outlet(self) -> int:
        return self.outlet_idx if self.outlet_idx is not None else 0

    @property
    def inlet(self) -> int:
        return self.inlet_idx if self.inlet_idx is not None else 0


class AttributeRequest(RequiredFieldsModel):
    attr_name: Optional[str] = None
    attr_value: Any = None


class TextRequest(RequiredFieldsModel):
    new_text: Optional[str] = None


class MessageRequest(RequiredFieldsModel):
    message: Any = None


class NumberRequest(RequiredFieldsModel):
    num: Optional[Number] = None
