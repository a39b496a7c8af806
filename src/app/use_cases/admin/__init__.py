"""
Administration Use Cases

User and invite code management for admins.
"""

from .manage_users_use_case import ManageUsersUseCase
from .manage_invite_codes_use_case import ManageInviteCodesUseCase, generate_invite_code

__all__ = [
    "ManageUsersUseCase",
    "ManageInviteCodesUseCase",
    "generate_invite_code",
]
