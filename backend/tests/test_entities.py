import pydantic
import pytest

from core import store
from core.exceptions import NotFoundError, StateConflictError, ValidationError
from models.beneficiary import BeneficiaryCreate, BeneficiaryUpdate
from models.common import AccountStatus, Address, IdentityStatus, PackageCategory, TaskStatus, TemplateStatus
from models.courier import CourierUpdate, LocationUpdate
from models.package_template import ContentItem, PackageTemplateCreate
from models.requester import FamilyUpdate
from services import (
    beneficiary_service, courier_service, request_service, requester_service, task_service, template_service,
)


# ── Beneficiaries ───────────────────────────────────────────────────────────

async def test_new_beneficiary_starts_pending_and_active(make):
    beneficiary = await make.beneficiary()

    assert beneficiary["beneficiary_id"].startswith("ben_")
    assert beneficiary["identity_status"] == IdentityStatus.PENDING.value
    assert beneficiary["status"] == AccountStatus.ACTIVE.value
    assert beneficiary["total_packages"] == 0


async def test_national_id_is_unique(make):
    existing = await make.beneficiary()

    with pytest.raises(ValidationError):
        await beneficiary_service.create_beneficiary(BeneficiaryCreate(
            name="Someone else",
            national_id=existing["national_id"],
            address=Address(governorate="Gaza", city="Gaza City", district="Al-Rimal"),
        ))


def test_affiliation_is_exclusive_at_the_model_level():
    with pytest.raises(pydantic.ValidationError):
        BeneficiaryCreate(
            name="Both", national_id="499999999",
            address=Address(governorate="Gaza", city="Gaza City", district="Al-Rimal"),
            organization_id="org_1", family_id="fam_1",
        )


async def test_update_cannot_add_a_second_affiliation(make):
    organization = await make.organization()
    family = await make.family()
    beneficiary = await make.beneficiary(organization_id=organization["organization_id"])

    with pytest.raises(ValidationError):
        await beneficiary_service.update_beneficiary(
            beneficiary["beneficiary_id"], BeneficiaryUpdate(family_id=family["family_id"]),
        )

    moved = await beneficiary_service.update_beneficiary(
        beneficiary["beneficiary_id"],
        BeneficiaryUpdate(organization_id=None, family_id=family["family_id"]),
    )
    assert moved["organization_id"] is None
    assert moved["family_id"] == family["family_id"]


async def test_unknown_affiliation_is_not_found(make):
    with pytest.raises(NotFoundError):
        await make.beneficiary(organization_id="org_missing")


async def test_identity_review_transitions(make):
    beneficiary = await make.beneficiary()
    bid = beneficiary["beneficiary_id"]

    rejected = await beneficiary_service.set_identity_status(bid, IdentityStatus.REJECTED, "adm_1", notes="Blurry scan")
    assert rejected["identity_status"] == IdentityStatus.REJECTED.value
    assert rejected["notes"] == "Blurry scan"

    # Re-upload puts the file back in review
    await beneficiary_service.set_identity_status(bid, IdentityStatus.PENDING, "adm_1")
    verified = await beneficiary_service.set_identity_status(bid, IdentityStatus.VERIFIED, "adm_1")
    assert verified["identity_status"] == IdentityStatus.VERIFIED.value

    with pytest.raises(StateConflictError):
        await beneficiary_service.set_identity_status(bid, IdentityStatus.REJECTED, "adm_1")


async def test_account_suspension(make):
    beneficiary = await make.beneficiary()

    suspended = await beneficiary_service.set_account_status(beneficiary["beneficiary_id"], AccountStatus.SUSPENDED)

    assert suspended["status"] == AccountStatus.SUSPENDED.value
    with pytest.raises(NotFoundError):
        await beneficiary_service.set_account_status("ben_missing", AccountStatus.ACTIVE)


# ── Couriers ────────────────────────────────────────────────────────────────

def test_courier_rating_is_bounded():
    with pytest.raises(pydantic.ValidationError):
        CourierUpdate(rating=5.5)
    with pytest.raises(pydantic.ValidationError):
        CourierUpdate(rating=-1)


async def test_courier_update_and_location(make):
    courier = await make.courier()

    updated = await courier_service.update_courier(
        courier["courier_id"], CourierUpdate(status="busy", service_areas=["Al-Shati"]),
    )
    assert updated["status"] == "busy"
    assert updated["service_areas"] == ["Al-Shati"]

    moved = await courier_service.update_location(courier["courier_id"], LocationUpdate(lat=31.52, lng=34.44))
    assert moved["current_location"] == {"lat": 31.52, "lng": 34.44}


async def test_courier_with_active_tasks_cannot_be_deleted(make):
    beneficiary = await make.beneficiary()
    template = await make.template()
    courier = await make.courier()
    created = await make.request(template["template_id"], 1, beneficiary_ids=[beneficiary["beneficiary_id"]])
    await request_service.approve_request(created["request_id"], 1, courier["courier_id"], admin_id="adm_1")

    with pytest.raises(StateConflictError):
        await courier_service.delete_courier(courier["courier_id"])

    task = (await task_service.list_tasks(courier_id=courier["courier_id"]))[0]
    await task_service.update_task_status(task["task_id"], TaskStatus.FAILED, failure_reason="absent")
    await courier_service.delete_courier(courier["courier_id"])

    assert await store.couriers.get(courier["courier_id"]) is None


# ── Templates ───────────────────────────────────────────────────────────────

async def test_template_weight_defaults_to_kilogram_contents():
    template = await template_service.create_template(PackageTemplateCreate(
        name="Family food parcel",
        category=PackageCategory.FOOD,
        estimated_cost=50,
        contents=[
            ContentItem(name="Rice", quantity=5, unit="kg"),
            ContentItem(name="Flour", quantity=10, unit="kg"),
            ContentItem(name="Oil", quantity=2, unit="liter"),
        ],
    ))

    assert template["total_weight"] == 15.0
    assert template["usage_count"] == 0
    assert template["status"] == TemplateStatus.ACTIVE.value


async def test_template_listing_and_status(make):
    food = await make.template()
    await make.template(name="First aid kit", category=PackageCategory.MEDICAL)
    await template_service.set_template_status(food["template_id"], TemplateStatus.INACTIVE)

    assert len(await template_service.list_templates()) == 2
    assert [t["name"] for t in await template_service.list_templates(category="medical")] == ["First aid kit"]
    assert [t["name"] for t in await template_service.list_templates(status="inactive")] == ["Food parcel"]
    with pytest.raises(NotFoundError):
        await template_service.get_template("tpl_missing")


# ── Requesters ──────────────────────────────────────────────────────────────

async def test_requester_listing_and_update(make):
    await make.organization(name="Gaza Relief Network")
    await make.organization(name="Rafah Clinic")
    family = await make.family()

    found = await requester_service.list_organizations(search="relief")
    assert [o["name"] for o in found] == ["Gaza Relief Network"]
    assert "beneficiaries_count" in found[0]

    updated = await requester_service.update_family(family["family_id"], FamilyUpdate(members_count=8))
    assert updated["members_count"] == 8
    assert len(await requester_service.list_families(status="active")) == 1

    with pytest.raises(NotFoundError):
        await requester_service.get_organization("org_missing")
