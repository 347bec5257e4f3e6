"""Unit tests for the ascending directory walk."""

from pathlib import Path

import pytest

from pmdetect.detector.walker import NoStop, StopAtPath, StopDir, StopWhen, lookup


@pytest.fixture
def nested(tmp_path):
    deep = tmp_path / "a" / "b" / "c"
    deep.mkdir(parents=True)
    return tmp_path


class TestLookup:
    def test_child_first(self, nested):
        dirs = list(lookup(nested / "a" / "b" / "c", stop_dir=nested))
        assert dirs == [nested / "a" / "b" / "c", nested / "a" / "b", nested / "a"]

    def test_stop_dir_is_not_yielded(self, nested):
        dirs = list(lookup(nested / "a" / "b" / "c", stop_dir=nested / "a"))
        assert nested / "a" not in dirs
        assert dirs == [nested / "a" / "b" / "c", nested / "a" / "b"]

    def test_stop_dir_as_string(self, nested):
        dirs = list(lookup(str(nested / "a" / "b"), stop_dir=str(nested / "a")))
        assert dirs == [nested / "a" / "b"]

    def test_stop_at_cwd_yields_nothing(self, nested):
        assert list(lookup(nested / "a", stop_dir=nested / "a")) == []

    def test_predicate(self, nested):
        dirs = list(lookup(nested / "a" / "b" / "c", stop_dir=lambda d: d.name == "a"))
        assert dirs == [nested / "a" / "b" / "c", nested / "a" / "b"]

    def test_never_yields_root(self, nested):
        dirs = list(lookup(nested))
        root = Path(nested.anchor)
        assert root not in dirs
        assert dirs[0] == nested
        assert dirs[-1].parent == root

    def test_non_ancestor_stop_dir_runs_to_root(self, nested):
        dirs = list(lookup(nested / "a", stop_dir=nested / "elsewhere"))
        assert dirs[-1].parent == Path(nested.anchor)

    def test_relative_cwd_is_made_absolute(self, nested, monkeypatch):
        monkeypatch.chdir(nested / "a")
        dirs = list(lookup("b", stop_dir=nested))
        assert dirs == [nested / "a" / "b", nested / "a"]

    def test_is_lazy(self, nested):
        calls = []

        def predicate(directory):
            calls.append(directory)
            return False

        walk = lookup(nested / "a" / "b" / "c", stop_dir=predicate)
        assert next(walk) == nested / "a" / "b" / "c"
        assert calls == [nested / "a" / "b" / "c"]


class TestStopDir:
    def test_none_is_no_stop(self):
        assert isinstance(StopDir.from_value(None), NoStop)

    def test_path_is_normalized(self, tmp_path):
        stop = StopDir.from_value(tmp_path / "x" / "..")
        assert stop == StopAtPath(tmp_path)

    def test_callable_is_predicate(self):
        stop = StopDir.from_value(lambda d: True)
        assert isinstance(stop, StopWhen)
        assert stop.matches(Path("/anything"))

    def test_existing_variant_passes_through(self, tmp_path):
        stop = StopAtPath(tmp_path)
        assert StopDir.from_value(stop) is stop

    def test_rejects_other_types(self):
        with pytest.raises(TypeError):
            StopDir.from_value(42)

    def test_base_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            StopDir()
