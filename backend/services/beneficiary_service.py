"""
Beneficiary administration: registration, profile edits, identity review.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from core import store
from core.exceptions import conflict_exception, not_found_exception, validation_exception
from models.beneficiary import BeneficiaryCreate, BeneficiaryUpdate
from models.common import AccountStatus, IdentityStatus

logger = logging.getLogger(__name__)

# Identity review: rejected documents may be re-uploaded (back to pending)
IDENTITY_TRANSITIONS: dict[IdentityStatus, list[IdentityStatus]] = {
    IdentityStatus.PENDING:  [IdentityStatus.VERIFIED, IdentityStatus.REJECTED],
    IdentityStatus.REJECTED: [IdentityStatus.PENDING],
    IdentityStatus.VERIFIED: [],
}


def _beneficiary_id() -> str:
    return f"ben_{uuid.uuid4().hex[:12]}"


async def _check_affiliation(organization_id: Optional[str], family_id: Optional[str]) -> None:
    if organization_id and family_id:
        raise validation_exception("A beneficiary belongs to an organization or a family, not both")
    if organization_id and not await store.organizations.get(organization_id):
        raise not_found_exception("Organization")
    if family_id and not await store.families.get(family_id):
        raise not_found_exception("Family")


async def get_beneficiary(beneficiary_id: str) -> dict:
    beneficiary = await store.beneficiaries.get(beneficiary_id)
    if not beneficiary:
        raise not_found_exception("Beneficiary")
    return beneficiary


async def create_beneficiary(data: BeneficiaryCreate) -> dict:
    if await store.beneficiaries.count({"national_id": data.national_id}):
        raise validation_exception(f"National id {data.national_id} is already registered")
    await _check_affiliation(data.organization_id, data.family_id)

    now = datetime.now(timezone.utc)
    beneficiary_doc = {
        "beneficiary_id":  _beneficiary_id(),
        "name":            data.name,
        "full_name":       data.full_name or data.name,
        "national_id":     data.national_id,
        "phone":           data.phone,
        "address":         data.address.model_dump(),
        "location":        data.location.model_dump() if data.location else None,
        "organization_id": data.organization_id,
        "family_id":       data.family_id,
        "identity_status": IdentityStatus.PENDING.value,
        "status":          AccountStatus.ACTIVE.value,
        "total_packages":  0,
        "last_received":   None,
        "notes":           data.notes,
        "created_at":      now,
        "updated_at":      now,
    }
    created = await store.beneficiaries.insert(beneficiary_doc)
    logger.info("Beneficiary %s registered", beneficiary_doc["beneficiary_id"])
    return created


async def update_beneficiary(beneficiary_id: str, data: BeneficiaryUpdate) -> dict:
    """Profile fields only; identity and account status have their own operations."""
    beneficiary = await get_beneficiary(beneficiary_id)
    fields = data.model_dump(exclude_unset=True)
    if not fields:
        return beneficiary

    merged = {**beneficiary, **fields}
    await _check_affiliation(merged.get("organization_id"), merged.get("family_id"))

    await store.beneficiaries.update(beneficiary_id, fields)
    return await store.beneficiaries.get(beneficiary_id)


async def set_identity_status(
    beneficiary_id: str,
    new_status: IdentityStatus,
    admin_id: str,
    notes: Optional[str] = None,
) -> dict:
    beneficiary = await get_beneficiary(beneficiary_id)
    current = IdentityStatus(beneficiary["identity_status"])
    if new_status not in IDENTITY_TRANSITIONS[current]:
        raise conflict_exception(f"Forbidden identity transition: {current.value} → {new_status.value}")

    fields: dict = {"identity_status": new_status.value}
    if notes is not None:
        fields["notes"] = notes
    applied = await store.beneficiaries.update(
        beneficiary_id, fields, expected={"identity_status": current.value}
    )
    if not applied:
        raise conflict_exception(f"Beneficiary {beneficiary_id} identity changed concurrently")
    logger.info(
        "Beneficiary %s identity: %s → %s (by %s)",
        beneficiary_id, current.value, new_status.value, admin_id,
    )
    return await store.beneficiaries.get(beneficiary_id)


async def set_account_status(beneficiary_id: str, status: AccountStatus) -> dict:
    await get_beneficiary(beneficiary_id)
    await store.beneficiaries.update(beneficiary_id, {"status": status.value})
    return await store.beneficiaries.get(beneficiary_id)
