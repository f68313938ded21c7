"""Authentication schemas - login results and session identity."""

from enum import Enum

from pydantic import Field

from foodly_schemas.common import WireModel


class UserRole(str, Enum):
    """Actor roles known to the backend."""

    CUSTOMER = "CUSTOMER"
    RESTAURANT = "RESTAURANT"
    ADMIN = "ADMIN"


class LoginResult(WireModel):
    """Response of POST /auth/login."""

    token: str
    user_id: int = Field(alias="id")
    restaurant_id: int | None = Field(default=None, alias="restaurantId")


class CurrentUser(WireModel):
    """Identity of the logged-in actor."""

    user_id: int
    role: UserRole
    username: str = ""
    restaurant_id: int | None = None


class SignupRequest(WireModel):
    """Customer or restaurant-owner registration."""

    username: str
    email: str
    password: str
    role: UserRole = UserRole.CUSTOMER

    # Restaurant owners only
    restaurant_name: str | None = Field(default=None, alias="restaurantName")
    restaurant_address: str | None = Field(default=None, alias="restaurantAddress")
    restaurant_phone: str | None = Field(default=None, alias="restaurantPhone")
    cuisine_type: str | None = Field(default=None, alias="cuisineType")
