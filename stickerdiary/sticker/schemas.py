from pydantic import BaseModel, ConfigDict, Field


# Request
class StickerRequest(BaseModel):
    type: str = Field(min_length=1, max_length=50)
    src: str = Field(min_length=1, max_length=500)
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    rotation: float = 0.0
    z_index: int = 1

# Response
class StickerResponse(BaseModel):
    id: int
    type: str
    src: str
    x: int
    y: int
    width: int
    height: int
    rotation: float
    z_index: int

    model_config = ConfigDict(from_attributes=True)
