from pydantic import BaseModel, Field


class AssetWriteRequest(BaseModel):
    # ID jamais fourni : dérivé de owner + ":" + code
    owner: str = Field(alias="Owner")
    status: str = Field(alias="Status")
    asset_type: str = Field(alias="Type")
    department: str = Field(alias="Department")
    code: str = Field(alias="Code")
    value: int = Field(alias="Value", strict=True)
    date: str = Field(alias="Date")


class AssetResponse(BaseModel):
    ID: str
    Owner: str
    Status: str
    Type: str
    Department: str
    Code: str
    Value: int
    Date: str


class AssetExistsResponse(BaseModel):
    asset_id: str
    exists: bool
