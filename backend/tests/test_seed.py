from models.common import RequestStatus
from seed_data import seed
from services import alert_service, request_service, statistics_service


async def test_seed_is_idempotent(mock_db):
    first = await seed(mock_db)
    second = await seed(mock_db)

    assert first["beneficiaries"] == 8
    assert first["couriers"] == 3
    assert sum(second.values()) == 0


async def test_seeded_data_feeds_the_report(mock_db):
    await seed(mock_db)

    report = await statistics_service.comprehensive_report()

    assert report["beneficiaries"]["total"] == 8
    assert report["beneficiaries"]["verified"] == 6
    assert report["beneficiaries"]["verification_rate"] == 75.0
    assert report["beneficiaries"]["by_governorate"]["Khan Younis"] == 3
    assert report["couriers"]["active"] == 2
    assert report["requests"]["by_status"]["pending"] == 1


async def test_seeded_request_can_be_approved(mock_db):
    await seed(mock_db)

    approved = await request_service.approve_request("req_demo0001", 2, "cou_demo0001", admin_id="adm_1")

    assert approved["status"] == RequestStatus.APPROVED.value
    assert len(approved["generated_task_ids"]) == 2
    assert await alert_service.derive_pending_requests_alert() is None
