"""Pydantic schemas for cp_admin API."""

from pydantic import BaseModel

from src.cp_common.enums import UserRole


class AssignRoleRequest(BaseModel):
    role: UserRole


class TransferCardRequest(BaseModel):
    new_owner_id: str


class SwapCollectionsRequest(BaseModel):
    user_a: str
    user_b: str


class RoleResponse(BaseModel):
    user_id: str
    username: str
    role: UserRole


class TransferResponse(BaseModel):
    card_id: int
    previous_owner_id: str
    new_owner_id: str


class SwapResponse(BaseModel):
    user_a: str
    user_b: str
    user_a_card_count: int
    user_b_card_count: int
