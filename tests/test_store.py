"""
Tests for the survey record store and its key-value slot
"""
import json
import pytest
from app.surveys.exceptions import DuplicateSurveyRecordException, MalformedSurveyDataError
from app.surveys.models import Department
from app.surveys.repository import STORAGE_KEY, SurveyRecordStore
from app.surveys.service import SurveyService


@pytest.mark.asyncio
async def test_load_empty_slot_returns_seed(store, slot):
    records = await store.load()

    assert [r.id for r in records] == ["1", "2"]
    assert records[0].department == Department.ER
    assert records[1].department == Department.ICU
    # Seed is not written until the first append
    assert await slot.read() is None


@pytest.mark.asyncio
async def test_append_prepends_and_persists(store, slot, record_factory):
    await store.load()
    prior = len(store)

    r1 = record_factory()
    r2 = record_factory()
    await store.append(r1)
    records = await store.append(r2)

    assert len(records) == prior + 2
    assert records[0].id == r2.id
    assert records[1].id == r1.id
    assert [r.id for r in records[2:]] == ["1", "2"]

    stored = json.loads(await slot.read())
    assert [item["id"] for item in stored] == [r.id for r in records]


@pytest.mark.asyncio
async def test_persisted_shape_uses_camel_case_and_literals(store, slot, record_factory):
    await store.load()
    await store.append(record_factory(department=Department.OUTPATIENT, top_challenges=["光線不足"]))

    first = json.loads(await slot.read())[0]
    assert first["department"] == "門診"
    assert first["experienceYears"] == 3
    assert first["topChallenges"] == ["光線不足"]
    assert "patientAgeGroup" in first
    assert "injection_site" not in first


@pytest.mark.asyncio
async def test_reload_round_trips_records(store, slot, record_factory):
    await store.load()
    record = record_factory(recommender="王小美", feedback_text="ok")
    await store.append(record)

    fresh = SurveyRecordStore(slot)
    records = await fresh.load()

    assert records[0] == record
    assert len(records) == 3


@pytest.mark.asyncio
async def test_append_duplicate_id_rejected(store, slot, record_factory):
    await store.load()
    record = record_factory(id="dup")
    await store.append(record)

    with pytest.raises(DuplicateSurveyRecordException):
        await store.append(record_factory(id="dup"))

    assert len(store) == 3
    assert len(json.loads(await slot.read())) == 3


@pytest.mark.asyncio
async def test_load_invalid_json_raises(store, slot):
    await slot.write("{not json")

    with pytest.raises(MalformedSurveyDataError):
        await store.load()


@pytest.mark.asyncio
async def test_load_wrong_shape_raises(store, slot):
    await slot.write(json.dumps([{"id": "x", "department": "nowhere"}]))

    with pytest.raises(MalformedSurveyDataError):
        await store.load()


@pytest.mark.asyncio
async def test_service_falls_back_to_seed_on_malformed_data(store, slot):
    await slot.write(json.dumps({"unexpected": True}))

    records = await SurveyService(store).load_records()

    assert [r.id for r in records] == ["1", "2"]
    assert store.records == records


@pytest.mark.asyncio
async def test_malformed_data_survives_next_append(store, slot, record_factory):
    good = record_factory(id="kept")
    payload = json.dumps([good.to_storage(), {**good.to_storage(), "id": "bad", "confidenceLevel": 0}])
    await slot.write(payload)

    await SurveyService(store).load_records()
    await store.append(record_factory())

    backup = await store.backup_slot.read()
    assert store.backup_slot.key == f"{STORAGE_KEY}.malformed"
    assert backup == payload
    assert json.loads(backup)[0]["id"] == "kept"
    assert await slot.read() != payload


@pytest.mark.asyncio
async def test_valid_data_leaves_no_backup(store, slot, record_factory):
    await slot.write(json.dumps([record_factory().to_storage()]))

    await store.load()

    assert await store.backup_slot.read() is None


@pytest.mark.asyncio
async def test_load_existing_data_without_seed(store, slot, record_factory):
    record = record_factory()
    await slot.write(json.dumps([record.to_storage()]))

    records = await store.load()

    assert [r.id for r in records] == [record.id]


@pytest.mark.asyncio
async def test_slot_overwrites_value(slot):
    await slot.write("[]")
    await slot.write('["second"]')

    assert await slot.read() == '["second"]'
