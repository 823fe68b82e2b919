from typing import Optional
from sqlalchemy import select, update, delete, func, distinct, or_
from sqlalchemy.orm import Session
from customer_directory.domain.models import Customer, Address
from .schemas import CustomerCreate, AddressCreate

def _name_contains(term: str):
    return or_(Customer.first_name.contains(term), Customer.last_name.contains(term))

class CustomerService:
    def __init__(self, db: Session):
        self.db = db

    def create(self, data: CustomerCreate) -> int:
        obj = Customer(
            first_name=data.first_name,
            last_name=data.last_name,
            phone_number=data.phone_number,
            email=data.email,
        )
        self.db.add(obj)
        self.db.commit()
        return obj.id

    def get(self, customer_id: int) -> Optional[Customer]:
        return self.db.get(Customer, customer_id)

    def list(
        self,
        page: int = 1,
        limit: int = 10,
        search: str = "",
        filter_name: str = "",
        filter_city: str = "",
    ):
        """Filtered page of customers, one row per customer.

        Each row carries the city of whichever joined address the store
        picks for the group. Empty filters are ignored; the rest are AND-ed
        as substring (LIKE) matches.
        """
        query = (
            select(Customer.id, Customer.first_name, Customer.last_name, Customer.email, Address.city)
            .select_from(Customer)
            .outerjoin(Address, Customer.id == Address.customer_id)
        )
        if search:
            query = query.where(_name_contains(search))
        if filter_name:
            query = query.where(_name_contains(filter_name))
        if filter_city:
            query = query.where(Address.city.contains(filter_city))

        query = query.group_by(Customer.id).limit(limit).offset((page - 1) * limit)
        return [dict(row) for row in self.db.execute(query).mappings()]

    def count(self) -> int:
        return self.db.execute(select(func.count(distinct(Customer.id)))).scalar_one()

    def update(self, customer_id: int, data: CustomerCreate) -> int:
        result = self.db.execute(
            update(Customer)
            .where(Customer.id == customer_id)
            .values(
                first_name=data.first_name,
                last_name=data.last_name,
                phone_number=data.phone_number,
                email=data.email,
            )
        )
        self.db.commit()
        return result.rowcount

    def delete(self, customer_id: int) -> int:
        """Delete the customer and every address pointing at it in one transaction."""
        result = self.db.execute(delete(Customer).where(Customer.id == customer_id))
        self.db.execute(delete(Address).where(Address.customer_id == customer_id))
        self.db.commit()
        return result.rowcount

class AddressService:
    def __init__(self, db: Session):
        self.db = db

    def create(self, data: AddressCreate) -> Address:
        obj = Address(
            customer_id=data.customer_id,
            address=data.address,
            city=data.city,
            state=data.state,
        )
        self.db.add(obj)
        self.db.commit()
        return obj

    def list_for_customer(self, customer_id: int) -> list[Address]:
        query = select(Address).where(Address.customer_id == customer_id).order_by(Address.id)
        return list(self.db.scalars(query).all())

    def update(self, address_id: int, address: Optional[str]) -> int:
        result = self.db.execute(update(Address).where(Address.id == address_id).values(address=address))
        self.db.commit()
        return result.rowcount

    def delete(self, address_id: int) -> int:
        result = self.db.execute(delete(Address).where(Address.id == address_id))
        self.db.commit()
        return result.rowcount
