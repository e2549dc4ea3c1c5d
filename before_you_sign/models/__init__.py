from .user import User, Role
from .dealership import DealershipProfile
from .customer import CustomerProfile

__all__ = ["User", "Role", "DealershipProfile", "CustomerProfile"]
