import json
from datetime import datetime, timezone

import pytest

from reviewer_karma.storage import (
    ZERO_TIME,
    KarmaData,
    KarmaStorageError,
    Storage,
    new_empty_karma_data,
)


@pytest.fixture
def storage(tmp_path):
    path = tmp_path / "karma_test"
    path.touch()
    return Storage(path)


def test_load_empty_file(storage):
    data = storage.load()
    assert data.reviewers == {}
    assert data.processed_prs == {}
    assert data.last_updated == ZERO_TIME


def test_load_missing_file(tmp_path):
    data = Storage(tmp_path / "absent.json").load()
    assert data == KarmaData()


def test_save_and_load(storage):
    now = datetime.now(timezone.utc)
    test_data = KarmaData(
        reviewers={"alice": 10, "bob": 5},
        processed_prs={1: now, 2: now},
    )
    storage.save(test_data)
    loaded = storage.load()
    assert len(loaded.reviewers) == 2
    assert loaded.reviewers["alice"] == 10
    assert len(loaded.processed_prs) == 2
    assert loaded.processed_prs[1] == now


def test_save_stamps_last_updated(storage):
    data = KarmaData()
    storage.save(data)
    assert data.last_updated > ZERO_TIME
    assert storage.load().last_updated == data.last_updated


def test_update_karma(storage):
    storage.update_karma(1, {"alice": 5, "bob": 3})
    storage.update_karma(2, {"alice": 2, "carol": 4})
    data = storage.load()
    assert data.reviewers["alice"] == 7
    assert data.reviewers["bob"] == 3
    assert data.reviewers["carol"] == 4
    assert storage.processed_pr_numbers() == {1, 2}


def test_clear(storage):
    storage.update_karma(1, {"alice": 5})
    storage.clear()
    data = storage.load()
    assert len(data.reviewers) == 0
    assert len(data.processed_prs) == 0


def test_file_layout(storage):
    storage.save(
        KarmaData(
            reviewers={"bob": 1, "alice": 2},
            processed_prs={10: datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)},
        )
    )
    text = storage.path.read_text(encoding="utf-8")
    document = json.loads(text)
    assert list(document) == ["reviewers", "last_updated", "processed_prs"]
    assert list(document["reviewers"]) == ["alice", "bob"]
    assert document["processed_prs"] == {"10": "2024-01-02T03:04:05Z"}
    assert text.startswith('{\n  "reviewers": {\n    "alice": 2,')


def test_load_nanosecond_times(storage):
    storage.path.write_text(
        json.dumps(
            {
                "reviewers": {"alice": 3},
                "last_updated": "2024-03-01T10:00:00.123456789+02:00",
                "processed_prs": {"7": "2024-03-01T08:00:00Z"},
            }
        ),
        encoding="utf-8",
    )
    data = storage.load()
    assert data.reviewers == {"alice": 3}
    assert data.last_updated.microsecond == 123456
    assert data.last_updated.utcoffset().total_seconds() == 7200
    assert data.processed_prs == {7: datetime(2024, 3, 1, 8, tzinfo=timezone.utc)}


def test_load_null_maps(storage):
    storage.path.write_text('{"reviewers": null, "processed_prs": null}', encoding="utf-8")
    data = storage.load()
    assert data.reviewers == {}
    assert data.processed_prs == {}


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        "[1, 2]",
        '{"reviewers": {"alice": "ten"}}',
        '{"reviewers": {"alice": 1.5}}',
        '{"processed_prs": {"abc": "2024-01-01T00:00:00Z"}}',
        '{"last_updated": "yesterday"}',
    ],
)
def test_load_invalid_content(storage, content):
    storage.path.write_text(content, encoding="utf-8")
    with pytest.raises(KarmaStorageError):
        storage.load()


def test_save_to_missing_directory(tmp_path):
    with pytest.raises(KarmaStorageError, match="failed to write karma data"):
        Storage(tmp_path / "missing" / "data.json").save(KarmaData())


def test_new_empty_karma_data():
    data = new_empty_karma_data()
    assert data.reviewers == {}
    assert data.processed_prs == {}
    assert data.last_updated > ZERO_TIME