from datetime import date

import pytest

from timeledger.core.errors import BlockOverlapError, InvalidTimeRangeError, NotFoundError
from timeledger.models.block_validation import BlockValidation
from timeledger.models.scheduled_block import BlockPriority
from timeledger.schemas.block import BlockCreate, BlockUpdate
from timeledger.services import blocks as blocks_service

from conftest import OWNER, make_category

DAY = date(2024, 3, 4)


def _create(db, category, start, end, on_date=DAY, **extra):
    payload = BlockCreate(
        category_id=category.id, date=on_date, start_time=start, end_time=end, **extra
    )
    return blocks_service.create_block(db, OWNER, payload)


def test_create_block_adds_pending_validation(db, work):
    block = _create(db, work, "09:00", "10:30", priority="high")

    assert block.priority == 7
    assert not block.crosses_midnight
    assert block.validation.status == "pending"
    assert db.query(BlockValidation).count() == 1


def test_create_block_rejects_overlap(db, work):
    _create(db, work, "09:00", "10:00")

    with pytest.raises(BlockOverlapError):
        _create(db, work, "09:30", "11:00")
    # Touching endpoints are fine
    _create(db, work, "10:00", "11:00")
    assert len(blocks_service.list_blocks_for_date(db, OWNER, DAY)) == 2


def test_create_block_rejects_previous_day_spill_over(db, work):
    _create(db, work, "23:00", "02:00", on_date=date(2024, 3, 3))

    with pytest.raises(BlockOverlapError):
        _create(db, work, "01:00", "03:00")
    _create(db, work, "02:00", "03:00")


def test_create_block_rejects_degenerate_interval(db, work):
    with pytest.raises(InvalidTimeRangeError):
        _create(db, work, "09:00", "09:00")
    assert db.query(BlockValidation).count() == 0


def test_create_block_requires_owned_category(db):
    foreign = make_category(db, "Other", owner_id="someone-else")
    with pytest.raises(NotFoundError):
        _create(db, foreign, "09:00", "10:00")


def test_blocks_are_isolated_per_owner(db, work):
    block = _create(db, work, "09:00", "10:00")
    with pytest.raises(NotFoundError):
        blocks_service.get_block(db, "someone-else", block.id)


def test_update_block_rechecks_overlap_excluding_itself(db, work):
    first = _create(db, work, "09:00", "10:00")
    _create(db, work, "11:00", "12:00")

    moved = blocks_service.update_block(
        db, OWNER, first.id, BlockUpdate(start_time="09:30", end_time="10:45")
    )
    assert moved.start_time == "09:30"

    with pytest.raises(BlockOverlapError):
        blocks_service.update_block(db, OWNER, first.id, BlockUpdate(end_time="11:30"))


def test_update_block_refreshes_midnight_flag(db, work):
    block = _create(db, work, "21:00", "23:00")
    updated = blocks_service.update_block(db, OWNER, block.id, BlockUpdate(end_time="01:00"))
    assert updated.crosses_midnight


def test_delete_block_cascades_validation(db, work):
    block = _create(db, work, "09:00", "10:00")
    blocks_service.delete_block(db, OWNER, block.id)
    assert db.query(BlockValidation).count() == 0


def test_list_blocks_in_range_is_ordered(db, work):
    _create(db, work, "14:00", "15:00", on_date=date(2024, 3, 5))
    _create(db, work, "09:00", "10:00", on_date=date(2024, 3, 5))
    _create(db, work, "20:00", "21:00", on_date=DAY)

    blocks = blocks_service.list_blocks_in_range(db, OWNER, DAY, date(2024, 3, 5))
    assert [(b.date.day, b.start_time) for b in blocks] == [
        (4, "20:00"),
        (5, "09:00"),
        (5, "14:00"),
    ]


@pytest.mark.parametrize(
    "label,expected", [("low", 3), ("medium", 5), ("high", 7), ("critical", 10)]
)
def test_priority_labels_map_to_values(db, work, label, expected):
    payload = BlockCreate(
        category_id=work.id, date=DAY, start_time="09:00", end_time="10:00", priority=label
    )
    assert payload.priority is BlockPriority(label)
    assert blocks_service.priority_value(payload.priority) == expected
    assert blocks_service.create_block(db, OWNER, payload).priority == expected


def test_priority_value_labels():
    assert blocks_service.priority_value("CRITICAL") == 10
    assert blocks_service.priority_value(BlockPriority.LOW) == 3
    assert blocks_service.priority_value(None) == 5
    assert blocks_service.priority_value(3) == 3
