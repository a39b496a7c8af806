"""
Child table routes

Installments, contacts and fees of a research result. All endpoints
require authentication.
"""

from fastapi import APIRouter, Depends, status

from src.api.error import raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.child_tables import (
    ContactData,
    ContactsUseCase,
    FeeData,
    FeesUseCase,
    InstallmentData,
    InstallmentsUseCase,
    NewInstallmentData,
    ReorderContactsData,
)
from src.depends import get_current_user, get_unit_of_work

router = APIRouter(tags=["Child Tables"])

INSTALLMENT_ERRORS = {
    "INVALID_INSTALLMENT_NUMBER": status.HTTP_400_BAD_REQUEST,
    "INSTALLMENT_EXISTS": status.HTTP_409_CONFLICT,
}


# ============================================================================
# Installments
# ============================================================================


@router.get("/counties/{research_id}/installments", status_code=status.HTTP_200_OK)
async def list_installments(
    research_id: int,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await InstallmentsUseCase(uow).list(research_id)
    if result.is_err():
        raise_for_error(result.error)
    return {"success": True, "researchId": research_id, "installments": result.value}


@router.post("/counties/{research_id}/installments", status_code=status.HTTP_201_CREATED)
async def create_installment(
    research_id: int,
    request: NewInstallmentData,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await InstallmentsUseCase(uow).create(research_id, request)
    if result.is_err():
        raise_for_error(result.error, INSTALLMENT_ERRORS)
    return {"success": True, "installment": result.value}


@router.put(
    "/counties/{research_id}/installments/{installment_number}",
    status_code=status.HTTP_200_OK,
)
async def upsert_installment(
    research_id: int,
    installment_number: int,
    request: InstallmentData,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Create or update installment N (1..10) of a research result"""
    result = await InstallmentsUseCase(uow).upsert_by_number(
        research_id, installment_number, request
    )
    if result.is_err():
        raise_for_error(result.error, INSTALLMENT_ERRORS)
    return {"success": True, "installment": result.value}


@router.delete(
    "/counties/{research_id}/installments/{installment_number}",
    status_code=status.HTTP_200_OK,
)
async def delete_installment_by_number(
    research_id: int,
    installment_number: int,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await InstallmentsUseCase(uow).delete_by_number(
        research_id, installment_number
    )
    if result.is_err():
        raise_for_error(result.error, INSTALLMENT_ERRORS)
    return {"success": True, "message": f"Installment {installment_number} deleted"}


@router.put("/installments/{installment_id}", status_code=status.HTTP_200_OK)
async def update_installment(
    installment_id: int,
    request: InstallmentData,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await InstallmentsUseCase(uow).update(installment_id, request)
    if result.is_err():
        raise_for_error(result.error)
    return {"success": True, "installment": result.value}


@router.delete("/installments/{installment_id}", status_code=status.HTTP_200_OK)
async def delete_installment(
    installment_id: int,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await InstallmentsUseCase(uow).delete(installment_id)
    if result.is_err():
        raise_for_error(result.error)
    return {"success": True}


# ============================================================================
# Contacts
# ============================================================================


@router.get("/contact-types", status_code=status.HTTP_200_OK)
async def list_contact_types(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ContactsUseCase(uow).contact_types()
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/counties/{research_id}/contacts", status_code=status.HTTP_200_OK)
async def list_contacts(
    research_id: int,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ContactsUseCase(uow).list(research_id)
    if result.is_err():
        raise_for_error(result.error)
    return {"success": True, "researchId": research_id, "contacts": result.value}


@router.post("/counties/{research_id}/contacts", status_code=status.HTTP_201_CREATED)
async def create_contact(
    research_id: int,
    request: ContactData,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ContactsUseCase(uow).create(research_id, request)
    if result.is_err():
        raise_for_error(result.error)
    return {"success": True, "contact": result.value}


@router.put("/counties/{research_id}/contacts/reorder", status_code=status.HTTP_200_OK)
async def reorder_contacts(
    research_id: int,
    request: ReorderContactsData,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """sort_order becomes each id's position in orderedIds"""
    result = await ContactsUseCase(uow).reorder(research_id, request.ordered_ids)
    if result.is_err():
        raise_for_error(result.error)
    return {"success": True, "updated": result.value}


@router.put("/contacts/{contact_id}", status_code=status.HTTP_200_OK)
async def update_contact(
    contact_id: int,
    request: ContactData,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ContactsUseCase(uow).update(contact_id, request)
    if result.is_err():
        raise_for_error(result.error)
    return {"success": True, "contact": result.value}


@router.delete("/contacts/{contact_id}", status_code=status.HTTP_200_OK)
async def delete_contact(
    contact_id: int,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ContactsUseCase(uow).delete(contact_id)
    if result.is_err():
        raise_for_error(result.error)
    return {"success": True}


# ============================================================================
# Fees
# ============================================================================


@router.get("/fee-types", status_code=status.HTTP_200_OK)
async def list_fee_types(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await FeesUseCase(uow).fee_types()
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/counties/{research_id}/fees", status_code=status.HTTP_200_OK)
async def list_fees(
    research_id: int,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await FeesUseCase(uow).list(research_id)
    if result.is_err():
        raise_for_error(result.error)
    return {"success": True, "researchId": research_id, "fees": result.value}


@router.post("/counties/{research_id}/fees", status_code=status.HTTP_201_CREATED)
async def create_fee(
    research_id: int,
    request: FeeData,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await FeesUseCase(uow).create(research_id, request)
    if result.is_err():
        raise_for_error(result.error)
    return {"success": True, "fee": result.value}


@router.put("/fees/{fee_id}", status_code=status.HTTP_200_OK)
async def update_fee(
    fee_id: int,
    request: FeeData,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await FeesUseCase(uow).update(fee_id, request)
    if result.is_err():
        raise_for_error(result.error)
    return {"success": True, "fee": result.value}


@router.delete("/fees/{fee_id}", status_code=status.HTTP_200_OK)
async def delete_fee(
    fee_id: int,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await FeesUseCase(uow).delete(fee_id)
    if result.is_err():
        raise_for_error(result.error)
    return {"success": True}
