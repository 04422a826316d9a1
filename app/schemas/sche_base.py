from typing import Optional, TypeVar, Generic

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class ResponseSchemaBase(BaseModel):
    code: str = '000'
    success: bool = True
    message: str = ''

    def custom_response(self, code: str, success: bool, message: str):
        self.code = code
        self.success = success
        self.message = message
        return self

    def success_response(self):
        self.code = '000'
        self.success = True
        self.message = 'Success'
        return self


class DataResponse(BaseModel, Generic[T]):
    code: str = '000'
    success: bool = True
    message: str = ''
    data: Optional[T] = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def custom_response(self, code: str, success: bool, message: str, data: T):
        self.code = code
        self.success = success
        self.message = message
        self.data = data
        return self

    def success_response(self, data: T):
        self.code = '000'
        self.success = True
        self.message = 'Success'
        self.data = data
        return self
