"""Input shapes for the insert operations."""

from dataclasses import dataclass


@dataclass
class UserSchema:
    username: str
    email: str
    password: str


@dataclass
class AddressSchema:
    user_id: int
    city: str
    state: str
    pincode: str
