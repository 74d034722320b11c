from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.api.auth import RequireAnyAuth, RequireCustomers, UserInfo, ensure_customer_or_resource
from parkhub.api.crud import apply_update, delete_or_404, get_or_404
from parkhub.core.cache import SOUVENIR_ORDERS_KEY, Cache, get_cache
from parkhub.core.database import get_db
from parkhub.core.logging_config import get_logger
from parkhub.core.permissions import Resource
from parkhub.models import Customer
from parkhub.schemas.customer import CustomerCreate, CustomerResponse, CustomerUpdate, TopUpBody

router = APIRouter(prefix="/customers", tags=["customers"])
logger = get_logger(__name__)


@router.get("", response_model=list[CustomerResponse])
async def list_customers(
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireCustomers),
):
    result = await db.execute(select(Customer).order_by(Customer.name, Customer.customer_id))
    return result.scalars().all()


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: UserInfo = Depends(RequireAnyAuth),
):
    ensure_customer_or_resource(current_user, customer_id, Resource.CUSTOMERS)
    return await get_or_404(db, Customer, Customer.customer_id, customer_id, "Customer not found")


@router.post("", response_model=CustomerResponse, status_code=201)
async def create_customer(
    data: CustomerCreate,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireCustomers),
):
    customer = Customer(name=data.name.strip(), virtual_balance=data.virtual_balance)
    db.add(customer)
    await db.flush()
    await db.refresh(customer)
    logger.info("Customer created: %s", customer.customer_id)
    return customer


@router.patch("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: str,
    data: CustomerUpdate,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireCustomers),
):
    customer = await get_or_404(db, Customer, Customer.customer_id, customer_id, "Customer not found")
    apply_update(customer, data, required=("name", "virtual_balance"))
    await db.flush()
    await db.refresh(customer)
    return customer


@router.post("/{customer_id}/top-up", response_model=CustomerResponse)
async def top_up_virtual_balance(
    customer_id: str,
    body: TopUpBody,
    db: AsyncSession = Depends(get_db),
    current_user: UserInfo = Depends(RequireAnyAuth),
):
    """Add `amount` (> 0) to the customer's virtual balance."""
    ensure_customer_or_resource(current_user, customer_id, Resource.CUSTOMERS)
    customer = await get_or_404(db, Customer, Customer.customer_id, customer_id, "Customer not found")
    customer.virtual_balance = (customer.virtual_balance or 0) + body.amount
    await db.flush()
    await db.refresh(customer)
    logger.info("Customer %s topped up by %s", customer_id, body.amount)
    return customer


@router.delete("/{customer_id}", status_code=204)
async def delete_customer(
    customer_id: str,
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _user: UserInfo = Depends(RequireCustomers),
):
    await delete_or_404(db, Customer, Customer.customer_id, customer_id, "Customer not found")
    await db.commit()
    await cache.delete(SOUVENIR_ORDERS_KEY)
    logger.info("Customer deleted: %s", customer_id)
