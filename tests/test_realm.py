import sys
import uuid
import zipfile

import pytest

from usecase_runner.classpath import ClassRealm, RuntimeClasspathInjector
from usecase_runner.errors import ClasspathInjectionError


def test_inject_adds_locations_in_order(tmp_path):
    first = tmp_path / "a"
    second = tmp_path / "b"
    first.mkdir()
    second.mkdir()
    realm = ClassRealm()

    added = RuntimeClasspathInjector(realm).inject([first, second])

    assert added == [str(first.resolve()), str(second.resolve())]
    assert realm.entries == added


def test_reinjecting_the_same_location_is_a_no_op(tmp_path):
    realm = ClassRealm()
    injector = RuntimeClasspathInjector(realm)

    injector.inject([tmp_path])
    added = injector.inject([tmp_path, str(tmp_path)])

    assert added == []
    assert realm.entries == [str(tmp_path.resolve())]


def test_missing_location_is_accepted(tmp_path):
    realm = ClassRealm()

    added = RuntimeClasspathInjector(realm).inject([tmp_path / "missing.zip"])

    assert added == [str(tmp_path.resolve() / "missing.zip")]
    assert realm.entries == added


def test_non_archive_file_is_fatal(tmp_path):
    plain = tmp_path / "notes.txt"
    plain.write_text("hello", encoding="utf-8")

    with pytest.raises(ClasspathInjectionError, match="not a directory or zip archive"):
        RuntimeClasspathInjector(ClassRealm()).inject([plain])


def test_injection_stops_at_first_bad_location(tmp_path):
    good = tmp_path / "good"
    good.mkdir()
    plain = tmp_path / "notes.txt"
    plain.write_text("hello", encoding="utf-8")
    realm = ClassRealm()

    with pytest.raises(ClasspathInjectionError):
        RuntimeClasspathInjector(realm).inject([good, plain, tmp_path])

    assert realm.entries == [str(good.resolve())]


def test_modules_import_from_zip_archives(tmp_path):
    module = f"zipped_{uuid.uuid4().hex[:10]}"
    archive = tmp_path / "dep.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr(f"{module}.py", "VALUE = 'from-zip'\n")

    realm = ClassRealm()
    RuntimeClasspathInjector(realm).inject([archive])
    try:
        assert realm.import_module(module).VALUE == "from-zip"
    finally:
        sys.modules.pop(module, None)


def test_activation_is_scoped(tmp_path):
    realm = ClassRealm()
    realm.add(tmp_path)
    entry = str(tmp_path.resolve())
    before = list(sys.path)

    with realm.activated():
        assert sys.path[0] == entry

    assert sys.path == before


def test_entry_points_are_found_on_realm_locations(plugin_project):
    realm = ClassRealm()
    realm.add(plugin_project.root)

    names = {ep.name for ep in realm.entry_points("usecase_runner.strategies")}

    assert {"rename", "factory"} <= names


def test_empty_realm_has_no_entry_points():
    assert ClassRealm().entry_points("usecase_runner.strategies") == []


def test_entry_already_on_sys_path_moves_to_front(tmp_path, monkeypatch):
    entry = str(tmp_path.resolve())
    monkeypatch.setattr(sys, "path", list(sys.path) + [entry])
    before = list(sys.path)
    realm = ClassRealm()
    realm.add(tmp_path)

    with realm.activated():
        assert sys.path[0] == entry
        assert sys.path.count(entry) == 1

    assert sys.path == before


def test_paths_added_while_active_are_kept(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "path", list(sys.path))
    before = list(sys.path)
    extra = str(tmp_path / "engine-plugins")
    realm = ClassRealm()
    realm.add(tmp_path)

    with realm.activated():
        sys.path.append(extra)

    assert sys.path == before + [extra]
