from pydantic import BaseModel, Field, StrictInt


class CartAddRequest(BaseModel):
    bookId: str
    # strict: "2", 2.0 and true are rejected instead of coerced
    quantity: StrictInt


class CartUpdateRequest(BaseModel):
    cartItemId: str
    quantity: StrictInt = Field(..., ge=0)
