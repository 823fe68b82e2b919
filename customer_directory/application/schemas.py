from pydantic import BaseModel
from typing import Optional

class CustomerCreate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None

class CustomerCreated(BaseModel):
    id: int

class CustomerRead(BaseModel):
    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None

    class Config:
        from_attributes = True

class CustomerSummary(BaseModel):
    """One row of the customer list; city comes from an arbitrary joined address."""
    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    city: Optional[str] = None

    class Config:
        from_attributes = True

class CustomerPage(BaseModel):
    customers: list[CustomerSummary]
    # Count of every customer in the store, filters are not applied
    total: int

class AddressCreate(BaseModel):
    customer_id: Optional[int] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None

class AddressUpdate(BaseModel):
    address: Optional[str] = None

class AddressRead(BaseModel):
    id: int
    customer_id: Optional[int] = None
    address: str
    city: Optional[str] = None
    state: Optional[str] = None

    class Config:
        from_attributes = True
