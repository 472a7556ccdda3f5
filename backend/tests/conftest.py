import itertools

import pytest
from mongomock_motor import AsyncMongoMockClient

import database
from models.beneficiary import BeneficiaryCreate
from models.common import (
    Address, CourierStatus, GeoPin, PackageCategory, Priority, RequestType, RequesterType, TemplateStatus,
)
from models.courier import CourierCreate
from models.distribution_request import DistributionRequestCreate
from models.package_template import PackageTemplateCreate
from models.requester import FamilyCreate, OrganizationCreate
from services import beneficiary_service, courier_service, request_service, requester_service, template_service


@pytest.fixture(autouse=True)
def mock_db(monkeypatch):
    """Every test gets an empty in-memory Motor database behind `database.db`."""
    mock = AsyncMongoMockClient()["aidflow_test"]
    monkeypatch.setattr(database, "_db_instance", mock)
    return mock


class Factory:
    """Builds valid records through the services, with overridable defaults."""

    def __init__(self):
        self._seq = itertools.count(1)

    async def template(self, estimated_cost=50.0, status=TemplateStatus.ACTIVE, name="Food parcel",
                       category=PackageCategory.FOOD):
        template = await template_service.create_template(PackageTemplateCreate(
            name=name, category=category, estimated_cost=estimated_cost,
        ))
        if status != TemplateStatus.ACTIVE:
            template = await template_service.set_template_status(template["template_id"], status)
        return template

    async def courier(self, approved=True, status=CourierStatus.ACTIVE, service_areas=None, location=None,
                      name="Courier"):
        return await courier_service.create_courier(CourierCreate(
            name=name,
            phone=f"+97059{next(self._seq):07d}",
            status=status,
            is_humanitarian_approved=approved,
            service_areas=service_areas or [],
            current_location=GeoPin(**location) if location else None,
        ))

    async def beneficiary(self, governorate="Khan Younis", city="Khan Younis", district="Al-Amal",
                          location=None, organization_id=None, family_id=None, name=None):
        n = next(self._seq)
        return await beneficiary_service.create_beneficiary(BeneficiaryCreate(
            name=name or f"Beneficiary {n}",
            national_id=f"4{n:08d}",
            phone=f"+97056{n:07d}",
            address=Address(governorate=governorate, city=city, district=district),
            location=GeoPin(**location) if location else None,
            organization_id=organization_id,
            family_id=family_id,
        ))

    async def beneficiaries(self, count, **kwargs):
        return [await self.beneficiary(**kwargs) for _ in range(count)]

    async def organization(self, name="Gaza Relief Network"):
        return await requester_service.create_organization(OrganizationCreate(name=name))

    async def family(self, name="Al-Masri family", members_count=5):
        return await requester_service.create_family(FamilyCreate(name=name, members_count=members_count))

    def request_data(self, template_id, requested_quantity, type=RequestType.INDIVIDUAL, **kwargs):
        fields = {
            "requester_id":        "org_test",
            "requester_type":      RequesterType.ORGANIZATION,
            "requester_name":      "Test NGO",
            "type":                type,
            "package_template_id": template_id,
            "requested_quantity":  requested_quantity,
            "priority":            Priority.NORMAL,
        }
        fields.update(kwargs)
        return DistributionRequestCreate(**fields)

    async def request(self, template_id, requested_quantity, **kwargs):
        return await request_service.create_request(
            self.request_data(template_id, requested_quantity, **kwargs)
        )


@pytest.fixture
def make():
    return Factory()
