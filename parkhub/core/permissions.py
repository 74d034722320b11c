"""
RBAC: staff role x resource.
Executives (COO, CEO, CFO) see every resource. Customers hold the pseudo role
"Customer" and never pass a resource check; customer-facing routes accept them
explicitly.
"""
from enum import Enum
from typing import List, Optional

from parkhub.models.staff import StaffRole

CUSTOMER_ROLE = "Customer"


class Resource(str, Enum):
    CUSTOMERS = "CUSTOMERS"
    STAFF = "STAFF"
    RESTAURANTS = "RESTAURANTS"        # restaurants, menus, restaurant orders
    RIDES = "RIDES"
    RIDE_QUEUES = "RIDE_QUEUES"
    STORES = "STORES"                  # stores, souvenirs, souvenir orders
    LOST_AND_FOUND = "LOST_AND_FOUND"
    MAINTENANCE = "MAINTENANCE"
    CUSTOMER_SERVICE = "CUSTOMER_SERVICE"  # chats with guests
    BROADCASTS = "BROADCASTS"
    REPORTS = "REPORTS"                # income reports


EXECUTIVE_ROLES = (StaffRole.COO, StaffRole.CEO, StaffRole.CFO)

# Resource -> non-executive roles allowed to use it
RESOURCE_ROLES = {
    Resource.CUSTOMERS: [StaffRole.CUSTOMER_SERVICE_STAFF, StaffRole.CUSTOMER_SERVICE_MANAGER],
    Resource.STAFF: [
        StaffRole.CUSTOMER_SERVICE_MANAGER,
        StaffRole.RIDE_MANAGER,
        StaffRole.MAINTENANCE_MANAGER,
        StaffRole.FB_SUPERVISOR,
        StaffRole.RETAIL_MANAGER,
    ],
    Resource.RESTAURANTS: [StaffRole.FB_SUPERVISOR, StaffRole.CHEF, StaffRole.WAITER],
    Resource.RIDES: [StaffRole.RIDE_STAFF, StaffRole.RIDE_MANAGER, StaffRole.MAINTENANCE_MANAGER],
    Resource.RIDE_QUEUES: [StaffRole.RIDE_STAFF, StaffRole.RIDE_MANAGER],
    Resource.STORES: [StaffRole.SALES_ASSOCIATE, StaffRole.RETAIL_MANAGER],
    Resource.LOST_AND_FOUND: [
        StaffRole.LOST_AND_FOUND_STAFF,
        StaffRole.CUSTOMER_SERVICE_STAFF,
        StaffRole.CUSTOMER_SERVICE_MANAGER,
    ],
    Resource.MAINTENANCE: [
        StaffRole.MAINTENANCE_STAFF,
        StaffRole.MAINTENANCE_MANAGER,
        StaffRole.RIDE_MANAGER,
    ],
    Resource.CUSTOMER_SERVICE: [StaffRole.CUSTOMER_SERVICE_STAFF, StaffRole.CUSTOMER_SERVICE_MANAGER],
    Resource.BROADCASTS: [StaffRole.CUSTOMER_SERVICE_MANAGER],
    Resource.REPORTS: [],
}


def _parse_role(role: str) -> Optional[StaffRole]:
    try:
        return StaffRole(role)
    except ValueError:
        return None


def is_executive(role: str) -> bool:
    return _parse_role(role) in EXECUTIVE_ROLES


def can_access_resource(role: str, resource: Resource) -> bool:
    r = _parse_role(role)
    if r is None:
        return False
    if r in EXECUTIVE_ROLES:
        return True
    return r in RESOURCE_ROLES.get(resource, [])


def allowed_resources(role: str) -> List[str]:
    """Resources shown to the client for this role (empty for customers)."""
    return [res.value for res in Resource if can_access_resource(role, res)]
