import pytest

from shortcut_hub.models import ShortcutKind, ShortcutRecord
from shortcut_hub.store import ShortcutStore, find, touch


@pytest.fixture
def store(tmp_path):
    return ShortcutStore(tmp_path / "data" / "shortcuts.yml")


def _record(id_, **kw):
    data = {"id": id_, "name": f"Shortcut {id_}", "target": "notepad"}
    data.update(kw)
    return ShortcutRecord.model_validate(data)


class TestShortcutStore:
    def test_missing_file_loads_empty(self, store):
        assert store.load() == []

    def test_save_then_load_keeps_order_and_fields(self, store):
        records = [
            _record("2", kind="web-app", target="https://example.com", category="Web"),
            _record("1", parameters="-v", workingDirectory="/srv", icon="Zap"),
        ]
        assert store.save(records) is True

        loaded = store.load()
        assert [r.id for r in loaded] == ["2", "1"]
        assert loaded[0].kind == ShortcutKind.WEB_APP
        assert loaded[1].workingDirectory == "/srv"
        assert loaded[1].createdAt == records[1].createdAt

    def test_malformed_items_are_skipped(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text(
            "- id: '1'\n  name: ok\n  target: ls\n"
            "- id: '2'\n  name: no target\n"
            "- id: '3'\n  name: bad kind\n  target: ls\n  kind: teleport\n",
            encoding="utf-8",
        )
        assert [r.id for r in store.load()] == ["1"]

    def test_non_list_file_loads_empty(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text("shortcuts: 3\n", encoding="utf-8")
        assert store.load() == []

    def test_legacy_field_names(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text(
            "- id: a\n  name: Docs\n  executable: https://docs.local\n  type: url\n",
            encoding="utf-8",
        )
        [record] = store.load()
        assert record.target == "https://docs.local"
        assert record.kind == ShortcutKind.URL

    def test_save_failure_returns_false(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        store = ShortcutStore(blocker / "shortcuts.yml")
        assert store.save([_record("1")]) is False


def test_find_and_touch():
    records = [_record("1"), _record("2")]
    assert find(records, "2") is records[1]
    assert find(records, "3") is None

    touched = touch(records[0])
    assert touched.lastUsed is not None
    assert records[0].lastUsed is None


def test_record_to_request():
    request = _record("1", target="build.sh", parameters="--fast", kind="script",
                      workingDirectory="").to_request()
    assert request.target == "build.sh"
    assert request.kind == ShortcutKind.SCRIPT
    assert request.working_directory is None
