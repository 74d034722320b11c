"""Authorization: staff login by email + password, customer login by id, JWT, resource checks."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer, OAuth2PasswordRequestForm
from pydantic import BaseModel
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.core.database import get_db
from parkhub.core.logging_config import get_logger
from parkhub.core.permissions import CUSTOMER_ROLE, Resource, allowed_resources, can_access_resource
from parkhub.models import Customer, Staff
from parkhub.models.staff import StaffRole
from parkhub.services.auth_service import create_access_token, decode_token, verify_password

router = APIRouter(prefix="/auth", tags=["auth"])
security = HTTPBearer(auto_error=False)
logger = get_logger(__name__)


class UserInfo(BaseModel):
    id: str
    name: str
    role: str
    email: str = ""

    @property
    def is_customer(self) -> bool:
        return self.role == CUSTOMER_ROLE


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserInfo


class CustomerLoginBody(BaseModel):
    customer_id: str


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[UserInfo]:
    if credentials is None or credentials.scheme.lower() != "bearer":
        return None
    payload = decode_token(credentials.credentials)
    if not payload or "sub" not in payload:
        logger.warning("Bearer token rejected (invalid or expired)")
        return None
    return UserInfo(
        id=str(payload["sub"]),
        name=payload.get("name", ""),
        role=payload.get("role", ""),
        email=payload.get("email", ""),
    )


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Authentication required",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def require_any_auth(
    current_user: Optional[UserInfo] = Depends(get_current_user),
) -> UserInfo:
    """Staff or customer."""
    if not current_user:
        raise _unauthorized()
    return current_user


async def require_staff(
    current_user: Optional[UserInfo] = Depends(get_current_user),
) -> UserInfo:
    if not current_user:
        raise _unauthorized()
    try:
        StaffRole(current_user.role)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Staff access only")
    return current_user


def require_resource(resource: Resource):
    async def _check(
        current_user: Optional[UserInfo] = Depends(get_current_user),
    ) -> UserInfo:
        if not current_user:
            raise _unauthorized()
        if not can_access_resource(current_user.role, resource):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return current_user
    return _check


def ensure_customer_or_resource(current_user: UserInfo, customer_id: str, resource: Resource) -> None:
    """A customer may only act for themselves; staff need the resource."""
    if current_user.is_customer:
        if current_user.id != customer_id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Customers may only act for themselves")
        return
    if not can_access_resource(current_user.role, resource):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")


RequireAnyAuth = require_any_auth
RequireStaff = require_staff
RequireCustomers = require_resource(Resource.CUSTOMERS)
RequireStaffAdmin = require_resource(Resource.STAFF)
RequireRestaurants = require_resource(Resource.RESTAURANTS)
RequireRides = require_resource(Resource.RIDES)
RequireRideQueues = require_resource(Resource.RIDE_QUEUES)
RequireStores = require_resource(Resource.STORES)
RequireLostAndFound = require_resource(Resource.LOST_AND_FOUND)
RequireMaintenance = require_resource(Resource.MAINTENANCE)
RequireCustomerService = require_resource(Resource.CUSTOMER_SERVICE)
RequireBroadcasts = require_resource(Resource.BROADCASTS)
RequireReports = require_resource(Resource.REPORTS)


@router.post("/staff/login", response_model=LoginResponse)
async def staff_login(
    form: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_db),
):
    email = (form.username or "").strip().lower()
    if not email:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    result = await db.execute(select(Staff).where(func.lower(Staff.email) == email))
    staff = result.scalar_one_or_none()
    if not staff or not verify_password(form.password, staff.password_hash):
        logger.warning("Failed staff login for %s", email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    token = create_access_token(
        subject=staff.staff_id,
        role=staff.role.value,
        name=staff.name,
        email=staff.email,
    )
    return LoginResponse(
        access_token=token,
        user=UserInfo(id=staff.staff_id, name=staff.name, role=staff.role.value, email=staff.email),
    )


@router.post("/customer/login", response_model=LoginResponse)
async def customer_login(
    body: CustomerLoginBody,
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(select(Customer).where(Customer.customer_id == body.customer_id.strip()))
    customer = result.scalar_one_or_none()
    if not customer:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unknown customer")
    token = create_access_token(subject=customer.customer_id, role=CUSTOMER_ROLE, name=customer.name)
    return LoginResponse(
        access_token=token,
        user=UserInfo(id=customer.customer_id, name=customer.name, role=CUSTOMER_ROLE),
    )


class MeResponse(BaseModel):
    id: str
    name: str
    role: str
    email: str
    resources: List[str]


@router.get("/me", response_model=MeResponse)
async def me(current_user: UserInfo = Depends(RequireAnyAuth)):
    """Current principal and the resources its role may use."""
    return MeResponse(
        id=current_user.id,
        name=current_user.name,
        role=current_user.role,
        email=current_user.email,
        resources=allowed_resources(current_user.role),
    )
