"""
Demo dataset for a local AidFlow instance: Gaza governorates, a few
requesters, couriers, templates and one pending request.

    python seed_data.py
"""
import asyncio
from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorClient

from config import settings


def _beneficiary(n, name, national_id, governorate, city, district, lat, lng, now,
                 organization_id=None, family_id=None, identity_status="verified"):
    return {
        "beneficiary_id":  f"ben_demo{n:04d}",
        "name":            name,
        "full_name":       name,
        "national_id":     national_id,
        "phone":           f"+97059{n:07d}",
        "address":         {"governorate": governorate, "city": city, "district": district, "street": None},
        "location":        {"lat": lat, "lng": lng},
        "organization_id": organization_id,
        "family_id":       family_id,
        "identity_status": identity_status,
        "status":          "active",
        "total_packages":  0,
        "last_received":   None,
        "notes":           "",
        "created_at":      now,
        "updated_at":      now,
    }


def build_demo_documents(now: datetime) -> dict:
    """Collection name → documents. Ids are fixed so reseeding is idempotent."""
    organizations = [
        {
            "organization_id": "org_demo0001",
            "name":            "Gaza Relief Network",
            "type":            "ngo",
            "phone":           "+970599000001",
            "email":           "contact@gazarelief.example",
            "address":         "Al-Rimal, Gaza City",
            "status":          "active",
            "created_at":      now,
            "updated_at":      now,
        },
    ]
    families = [
        {
            "family_id":      "fam_demo0001",
            "name":           "Al-Masri family",
            "head_of_family": "Ahmad Al-Masri",
            "phone":          "+970599000101",
            "members_count":  6,
            "status":         "active",
            "created_at":     now,
            "updated_at":     now,
        },
    ]
    beneficiaries = [
        _beneficiary(1, "Ahmad Al-Masri", "400000001", "Khan Younis", "Khan Younis", "Al-Amal", 31.3462, 34.3063, now, family_id="fam_demo0001"),
        _beneficiary(2, "Fatima Al-Masri", "400000002", "Khan Younis", "Khan Younis", "Al-Amal", 31.3470, 34.3071, now, family_id="fam_demo0001"),
        _beneficiary(3, "Mariam Hassan", "400000003", "Khan Younis", "Khan Younis", "Bani Suheila", 31.3421, 34.3245, now, organization_id="org_demo0001"),
        _beneficiary(4, "Omar Khalil", "400000004", "Gaza", "Gaza City", "Al-Rimal", 31.5240, 34.4413, now, organization_id="org_demo0001"),
        _beneficiary(5, "Layla Nasser", "400000005", "Gaza", "Gaza City", "Al-Shati", 31.5310, 34.4450, now, organization_id="org_demo0001", identity_status="pending"),
        _beneficiary(6, "Yousef Darwish", "400000006", "Rafah", "Rafah", "Tel al-Sultan", 31.2968, 34.2435, now),
        _beneficiary(7, "Huda Saleh", "400000007", "Deir al-Balah", "Deir al-Balah", "Al-Bureij", 31.4180, 34.3500, now),
        _beneficiary(8, "Khaled Abu Zaid", "400000008", "North Gaza", "Jabalia", "Jabalia Camp", 31.5320, 34.4830, now, identity_status="rejected"),
    ]
    couriers = [
        {
            "courier_id":               "cou_demo0001",
            "name":                     "Mahmoud Barakat",
            "phone":                    "+970599100001",
            "email":                    "",
            "status":                   "active",
            "is_humanitarian_approved": True,
            "rating":                   4.7,
            "completed_tasks":          0,
            "current_location":         {"lat": 31.3450, "lng": 34.3060},
            "service_areas":            ["Al-Amal", "Bani Suheila", "Khan Younis"],
            "created_at":               now,
            "updated_at":               now,
        },
        {
            "courier_id":               "cou_demo0002",
            "name":                     "Samir Odeh",
            "phone":                    "+970599100002",
            "email":                    "",
            "status":                   "active",
            "is_humanitarian_approved": True,
            "rating":                   4.2,
            "completed_tasks":          0,
            "current_location":         {"lat": 31.5250, "lng": 34.4420},
            "service_areas":            ["Al-Rimal", "Al-Shati", "Gaza City"],
            "created_at":               now,
            "updated_at":               now,
        },
        {
            "courier_id":               "cou_demo0003",
            "name":                     "Rami Jaber",
            "phone":                    "+970599100003",
            "email":                    "",
            "status":                   "offline",
            "is_humanitarian_approved": False,
            "rating":                   3.9,
            "completed_tasks":          0,
            "current_location":         None,
            "service_areas":            ["Rafah"],
            "created_at":               now,
            "updated_at":               now,
        },
    ]
    package_templates = [
        {
            "template_id":    "tpl_demo0001",
            "name":           "Family food parcel",
            "category":       "food",
            "contents":       [
                {"name": "Rice", "quantity": 5, "unit": "kg"},
                {"name": "Flour", "quantity": 10, "unit": "kg"},
                {"name": "Cooking oil", "quantity": 2, "unit": "liter"},
                {"name": "Canned beans", "quantity": 6, "unit": "piece"},
            ],
            "total_weight":   17.0,
            "estimated_cost": 50.0,
            "status":         "active",
            "usage_count":    1,
            "created_at":     now,
            "updated_at":     now,
        },
        {
            "template_id":    "tpl_demo0002",
            "name":           "First aid kit",
            "category":       "medical",
            "contents":       [
                {"name": "Bandages", "quantity": 10, "unit": "piece"},
                {"name": "Antiseptic", "quantity": 1, "unit": "liter"},
            ],
            "total_weight":   1.5,
            "estimated_cost": 35.0,
            "status":         "active",
            "usage_count":    0,
            "created_at":     now,
            "updated_at":     now,
        },
        {
            "template_id":    "tpl_demo0003",
            "name":           "Winter clothing (retired)",
            "category":       "clothing",
            "contents":       [],
            "total_weight":   4.0,
            "estimated_cost": 80.0,
            "status":         "inactive",
            "usage_count":    0,
            "created_at":     now,
            "updated_at":     now,
        },
    ]
    distribution_requests = [
        {
            "request_id":              "req_demo0001",
            "requester_id":            "fam_demo0001",
            "requester_type":          "family",
            "requester_name":          "Al-Masri family",
            "type":                    "family_bulk",
            "priority":                "high",
            "package_template_id":     "tpl_demo0001",
            "beneficiary_ids":         ["ben_demo0001", "ben_demo0002"],
            "target_governorate":      None,
            "target_city":             None,
            "target_district":         None,
            "requested_quantity":      2,
            "approved_quantity":       None,
            "status":                  "pending",
            "request_date":            now,
            "notes":                   "Household of six, no income since displacement",
            "estimated_cost":          100.0,
            "estimated_delivery_time": "1-2 days",
            "assigned_courier_id":     None,
            "admin_notes":             None,
            "approved_by":             None,
            "approval_date":           None,
            "rejection_reason":        None,
            "generated_task_ids":      [],
            "created_at":              now,
            "updated_at":              now,
        },
    ]
    return {
        "organizations":         organizations,
        "families":              families,
        "beneficiaries":         beneficiaries,
        "couriers":              couriers,
        "package_templates":     package_templates,
        "distribution_requests": distribution_requests,
    }


ID_FIELDS = {
    "organizations":         "organization_id",
    "families":              "family_id",
    "beneficiaries":         "beneficiary_id",
    "couriers":              "courier_id",
    "package_templates":     "template_id",
    "distribution_requests": "request_id",
}


async def seed(database) -> dict:
    """Inserts the demo documents that are not there yet. Returns inserted counts."""
    now = datetime.now(timezone.utc)
    inserted = {}
    for collection, docs in build_demo_documents(now).items():
        id_field = ID_FIELDS[collection]
        inserted[collection] = 0
        for doc in docs:
            if await database[collection].find_one({id_field: doc[id_field]}):
                continue
            await database[collection].insert_one(doc)
            inserted[collection] += 1
    return inserted


async def main():
    print(f"🔌 Connecting to MongoDB: {settings.DB_NAME}")
    client = AsyncIOMotorClient(settings.MONGO_URL)
    try:
        inserted = await seed(client[settings.DB_NAME])
        for collection, count in inserted.items():
            print(f"✅ {collection}: {count} document(s) inserted")
    finally:
        client.close()


if __name__ == "__main__":
    asyncio.run(main())
