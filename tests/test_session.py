import json

from wireframe_studio.layouts import DEFAULT_PAGE_SECTIONS
from wireframe_studio.section_store import StoreResult
from wireframe_studio.session import EditorSession
from wireframe_studio.wireframe_repository import InMemoryWireframeRepository, LocalWireframeRepository


def test_empty_repository_starts_with_default_wireframe():
    session = EditorSession(repository=InMemoryWireframeRepository())
    wireframe = session.load()

    assert wireframe.name == "New Wireframe"
    assert [section.type for section in wireframe.sections] == list(DEFAULT_PAGE_SECTIONS)
    assert session.store.active_id == wireframe.sections[0].id


def test_applied_mutations_are_persisted(tmp_path, travel_wireframe):
    repository = LocalWireframeRepository(base_path=tmp_path)
    session = EditorSession(repository=repository)
    session.replace(travel_wireframe)

    result = session.apply(lambda store: store.move("footer", "up"))

    assert result is StoreResult.applied
    reloaded = EditorSession(repository=LocalWireframeRepository(base_path=tmp_path)).load()
    assert [section.id for section in reloaded.sections][-2:] == ["footer", "testimonials"]
    assert reloaded.id == "wf-travel-booking"
    assert reloaded.updated_at > travel_wireframe.updated_at


def test_ignored_mutations_are_not_saved(travel_wireframe):
    repository = InMemoryWireframeRepository(travel_wireframe)
    session = EditorSession(repository=repository)
    session.load()

    result = session.apply(lambda store: store.delete("missing"))

    assert result is StoreResult.ignored_not_found
    assert repository.load().updated_at == travel_wireframe.updated_at


def test_unreadable_state_starts_fresh(tmp_path):
    repository = LocalWireframeRepository(base_path=tmp_path)
    repository.file_path.write_text(json.dumps({"sections": "not a list"}), encoding="utf-8")

    wireframe = EditorSession(repository=repository).load()

    assert [section.type for section in wireframe.sections] == list(DEFAULT_PAGE_SECTIONS)


def test_clear_removes_persisted_state(tmp_path, travel_wireframe):
    repository = LocalWireframeRepository(base_path=tmp_path)
    session = EditorSession(repository=repository)
    session.replace(travel_wireframe)
    assert repository.file_path.exists()

    wireframe = session.clear()

    assert not repository.file_path.exists()
    assert wireframe.id != travel_wireframe.id


def test_wireframe_property_reflects_store_edits(travel_wireframe):
    session = EditorSession(repository=InMemoryWireframeRepository(travel_wireframe))
    session.load()

    session.apply(lambda store: store.delete("hero"))

    assert "hero" not in [section.id for section in session.wireframe.sections]
    assert session.store.active_id == "header"


def test_state_file_with_invalid_utf8_starts_fresh(tmp_path):
    repository = LocalWireframeRepository(base_path=tmp_path)
    repository.file_path.write_bytes(b'{"name": "\xff\xfe"}')

    wireframe = EditorSession(repository=repository).load()

    assert wireframe.name == "New Wireframe"
    assert len(wireframe.sections) == len(DEFAULT_PAGE_SECTIONS)


def test_unreadable_state_path_starts_fresh(tmp_path):
    repository = LocalWireframeRepository(base_path=tmp_path)
    repository.file_path.mkdir()

    wireframe = EditorSession(repository=repository).load()

    assert [section.type for section in wireframe.sections] == list(DEFAULT_PAGE_SECTIONS)
