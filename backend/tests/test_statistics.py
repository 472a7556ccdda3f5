from core import store
from models.common import IdentityStatus, TaskStatus
from models.courier import CourierUpdate
from services import beneficiary_service, courier_service, request_service, statistics_service, task_service


async def test_empty_store_yields_zero_rates():
    report = await statistics_service.comprehensive_report()

    assert report["beneficiaries"]["total"] == 0
    assert report["beneficiaries"]["verification_rate"] == 0.0
    assert report["tasks"]["success_rate"] == 0.0
    assert report["couriers"]["average_rating"] == 0.0
    assert report["families"]["average_members"] == 0.0
    assert report["requests"]["total"] == 0


async def test_identity_counts_partition_the_total(make):
    b1, b2, _ = await make.beneficiaries(3)
    await beneficiary_service.set_identity_status(b1["beneficiary_id"], IdentityStatus.VERIFIED, "adm_1")
    await beneficiary_service.set_identity_status(b2["beneficiary_id"], IdentityStatus.REJECTED, "adm_1")

    stats = await statistics_service.beneficiary_statistics()

    assert (stats["verified"], stats["pending"], stats["rejected"]) == (1, 1, 1)
    assert stats["verified"] + stats["pending"] + stats["rejected"] == stats["total"]
    assert stats["active"] == 3


async def test_courier_statistics(make):
    first = await make.courier()
    await make.courier(approved=False)
    await courier_service.update_courier(first["courier_id"], CourierUpdate(rating=4.0))

    stats = await statistics_service.courier_statistics()

    assert stats["total"] == 2
    assert stats["active"] == 2
    assert stats["approved"] == 1
    assert stats["average_rating"] == 2.0
    assert stats["total_completed_tasks"] == 0


async def test_task_success_rate_and_requester_summaries(make):
    organization = await make.organization()
    members = await make.beneficiaries(3, organization_id=organization["organization_id"])
    template = await make.template()
    courier = await make.courier()
    created = await make.request(
        template["template_id"], 3, beneficiary_ids=[b["beneficiary_id"] for b in members],
    )
    await request_service.approve_request(created["request_id"], 3, courier["courier_id"], admin_id="adm_1")
    tasks = await task_service.list_tasks(request_id=created["request_id"])
    await task_service.update_task_status(tasks[0]["task_id"], TaskStatus.IN_PROGRESS)
    await task_service.update_task_status(tasks[0]["task_id"], TaskStatus.DELIVERED)

    task_stats = await statistics_service.task_statistics()
    assert task_stats["total"] == 3
    assert task_stats["by_status"]["delivered"] == 1
    assert task_stats["by_status"]["assigned"] == 2
    assert task_stats["success_rate"] == 33.3
    assert sum(task_stats["by_status"].values()) == task_stats["total"]

    summary = await statistics_service.organization_summary(
        await store.organizations.get(organization["organization_id"])
    )
    assert summary["beneficiaries_count"] == 3
    assert summary["packages_count"] == 3
    assert summary["delivered_count"] == 1
    assert summary["completion_rate"] == 33.3


async def test_family_summary_without_members(make):
    family = await make.family()

    assert family["beneficiaries_count"] == 0
    assert family["packages_count"] == 0
    assert family["completion_rate"] == 0.0


async def test_report_breaks_beneficiaries_down_by_governorate(make):
    await make.beneficiaries(2, governorate="Khan Younis")
    await make.beneficiary(governorate="Rafah", city="Rafah", district="Tel al-Sultan")
    await make.family(members_count=4)
    await make.family(name="Odeh family", members_count=7)

    report = await statistics_service.comprehensive_report()

    assert report["beneficiaries"]["by_governorate"] == {"Khan Younis": 2, "Rafah": 1}
    assert report["families"] == {"total": 2, "average_members": 5.5}
    assert report["organizations"] == {"total": 0, "active": 0}
