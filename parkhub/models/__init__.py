from parkhub.core.database import Base
from parkhub.models.broadcast_message import BroadcastAudience, BroadcastMessage, BroadcastStatus
from parkhub.models.chat import CUSTOMER_SERVICE_CHAT_NAME, Chat, ChatMember, Message
from parkhub.models.customer import Customer
from parkhub.models.lost_item import LostItemLog, LostItemStatus
from parkhub.models.maintenance_task import ACTIVE_MAINTENANCE_STATUSES, MaintenanceStatus, MaintenanceTask
from parkhub.models.menu_item import MenuItem
from parkhub.models.restaurant import Restaurant
from parkhub.models.restaurant_order import RestaurantOrder, RestaurantOrderStatus
from parkhub.models.ride import Ride, RideStatus
from parkhub.models.ride_queue import RideQueueEntry
from parkhub.models.souvenir import Souvenir
from parkhub.models.souvenir_order import SouvenirOrder
from parkhub.models.staff import Staff, StaffRole
from parkhub.models.store import Store

__all__ = [
    "ACTIVE_MAINTENANCE_STATUSES",
    "Base",
    "BroadcastAudience",
    "BroadcastMessage",
    "BroadcastStatus",
    "CUSTOMER_SERVICE_CHAT_NAME",
    "Chat",
    "ChatMember",
    "Customer",
    "LostItemLog",
    "LostItemStatus",
    "MaintenanceStatus",
    "MaintenanceTask",
    "MenuItem",
    "Message",
    "Restaurant",
    "RestaurantOrder",
    "RestaurantOrderStatus",
    "Ride",
    "RideQueueEntry",
    "RideStatus",
    "Souvenir",
    "SouvenirOrder",
    "Staff",
    "StaffRole",
    "Store",
]
