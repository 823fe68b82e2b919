from typing import Awaitable, Callable, Type, TypeVar
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from customer_directory.infrastructure.db import get_db
from customer_directory.application.service import CustomerService, AddressService
from customer_directory.application.schemas import (
    CustomerCreate,
    CustomerCreated,
    CustomerRead,
    CustomerPage,
    AddressCreate,
    AddressUpdate,
    AddressRead,
)
from shared.core import get_logger

logger = get_logger(__name__)

Model = TypeVar("Model", bound=BaseModel)

customers_router = APIRouter(prefix="/customers", tags=["customers"])
addresses_router = APIRouter(prefix="/addresses", tags=["addresses"])

def _store_failure(db: Session, message: str, error: SQLAlchemyError) -> HTTPException:
    db.rollback()
    logger.error(f"{message} {error}")
    return HTTPException(status_code=500, detail=message)

def json_body(model: Type[Model]) -> Callable[[Request], Awaitable[Model]]:
    """Dependency parsing the request body into ``model``.

    A missing body, or one not sent as JSON, reads as ``{}`` so every field
    takes its default. Fields of the wrong type still fail with 422.
    """
    async def parse(request: Request) -> Model:
        data = {}
        content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
        if content_type == "application/json" or content_type.endswith("+json"):
            if await request.body():
                try:
                    data = await request.json()
                except ValueError:
                    raise HTTPException(status_code=400, detail="Invalid JSON body.")
        if not isinstance(data, dict):
            data = {}
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise RequestValidationError(
                [{**error, "loc": ("body", *error["loc"])} for error in e.errors()]
            )
    return parse

@customers_router.post("", response_model=CustomerCreated)
def create_customer(payload: CustomerCreate = Depends(json_body(CustomerCreate)), db: Session = Depends(get_db)):
    try:
        customer_id = CustomerService(db).create(payload)
    except SQLAlchemyError as e:
        raise _store_failure(db, "Error creating customer.", e)
    return {"id": customer_id}

@customers_router.get("", response_model=CustomerPage)
def list_customers(
    db: Session = Depends(get_db),
    page: int = Query(1, alias="_page", ge=1, description="1-based page number"),
    limit: int = Query(10, alias="_limit", ge=1, description="Page size"),
    search: str = Query("", description="Substring of first or last name"),
    filter_name: str = Query("", alias="filterName", description="Substring of first or last name"),
    filter_city: str = Query("", alias="filterCity", description="Substring of any address city"),
):
    """List customers with optional filtering and pagination.

    `total` counts every customer in the store and ignores the filters.
    """
    service = CustomerService(db)
    try:
        customers = service.list(
            page=page,
            limit=limit,
            search=search,
            filter_name=filter_name,
            filter_city=filter_city,
        )
        total = service.count()
    except SQLAlchemyError as e:
        raise _store_failure(db, "Error fetching customers.", e)
    return {"customers": customers, "total": total}

@customers_router.get("/{customer_id}", response_model=CustomerRead)
def get_customer(customer_id: int, db: Session = Depends(get_db)):
    try:
        customer = CustomerService(db).get(customer_id)
    except SQLAlchemyError as e:
        raise _store_failure(db, "Error fetching customer.", e)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found.")
    return customer

@customers_router.put("/{customer_id}", response_class=PlainTextResponse)
def update_customer(customer_id: int, payload: CustomerCreate = Depends(json_body(CustomerCreate)), db: Session = Depends(get_db)):
    try:
        updated = CustomerService(db).update(customer_id, payload)
    except SQLAlchemyError as e:
        raise _store_failure(db, "Error updating customer.", e)
    logger.info(f"Updated customer {customer_id} ({updated} row(s))")
    return "Customer updated successfully."

@customers_router.delete("/{customer_id}", response_class=PlainTextResponse)
def delete_customer(customer_id: int, db: Session = Depends(get_db)):
    try:
        deleted = CustomerService(db).delete(customer_id)
    except SQLAlchemyError as e:
        raise _store_failure(db, "Error deleting customer.", e)
    logger.info(f"Deleted customer {customer_id} ({deleted} row(s))")
    return "Customer deleted successfully."

@addresses_router.post("", response_class=PlainTextResponse)
def create_address(payload: AddressCreate = Depends(json_body(AddressCreate)), db: Session = Depends(get_db)):
    if not payload.address:
        raise HTTPException(status_code=400, detail="Address is required.")
    try:
        AddressService(db).create(payload)
    except SQLAlchemyError as e:
        raise _store_failure(db, "Error creating address.", e)
    return "Address created successfully."

@addresses_router.get("/{customer_id}", response_model=list[AddressRead])
def list_addresses(customer_id: int, db: Session = Depends(get_db)):
    try:
        return AddressService(db).list_for_customer(customer_id)
    except SQLAlchemyError as e:
        raise _store_failure(db, "Error fetching addresses.", e)

@addresses_router.put("/{address_id}", response_class=PlainTextResponse)
def update_address(address_id: int, payload: AddressUpdate = Depends(json_body(AddressUpdate)), db: Session = Depends(get_db)):
    try:
        updated = AddressService(db).update(address_id, payload.address)
    except SQLAlchemyError as e:
        raise _store_failure(db, "Error updating address.", e)
    logger.info(f"Updated address {address_id} ({updated} row(s))")
    return "Address updated successfully."

@addresses_router.delete("/{address_id}", response_class=PlainTextResponse)
def delete_address(address_id: int, db: Session = Depends(get_db)):
    try:
        deleted = AddressService(db).delete(address_id)
    except SQLAlchemyError as e:
        raise _store_failure(db, "Error deleting address.", e)
    logger.info(f"Deleted address {address_id} ({deleted} row(s))")
    return "Address deleted successfully."
