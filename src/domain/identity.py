"""
Privileged machine identity

Granted to holders of the shared MACHINE_TOKEN secret. It has no users row
and does not depend on the token service or the database.
"""

from src.domain.entities.enums import UserRole

MACHINE_USER_ID = 0
MACHINE_USERNAME = "machine"


def machine_identity() -> dict:
    return {
        "user_id": MACHINE_USER_ID,
        "username": MACHINE_USERNAME,
        "role": UserRole.admin.value,
    }
