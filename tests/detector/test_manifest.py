"""Unit tests for the package.json manifest reader."""

import json
from pathlib import Path

import pytest

from pmdetect.detector.manifest import (
    detect_from_manifest,
    detect_from_manifest_async,
    parse_manifest_fields,
    read_manifest,
    read_manifest_async,
)
from pmdetect.detector.types import Agent, AgentName, DetectResult, Strategy

BOTH_FIELDS = (Strategy.PACKAGE_MANAGER_FIELD, Strategy.DEV_ENGINES_FIELD)


def _write_pkg(directory: Path, data) -> None:
    (directory / "package.json").write_text(json.dumps(data), encoding="utf-8")


class TestReadManifest:
    def test_reads_object(self, tmp_path):
        _write_pkg(tmp_path, {"name": "demo"})
        assert read_manifest(tmp_path / "package.json") == {"name": "demo"}

    def test_missing_file_is_none(self, tmp_path):
        assert read_manifest(tmp_path / "package.json") is None

    def test_invalid_json_is_none(self, tmp_path):
        (tmp_path / "package.json").write_text("not json {{")
        assert read_manifest(tmp_path / "package.json") is None

    def test_invalid_utf8_is_none(self, tmp_path):
        (tmp_path / "package.json").write_bytes(b'{"name": "\xff\xfe"}')
        assert read_manifest(tmp_path / "package.json") is None

    def test_directory_is_none(self, tmp_path):
        (tmp_path / "package.json").mkdir()
        assert read_manifest(tmp_path / "package.json") is None

    def test_non_object_document_is_none(self, tmp_path):
        _write_pkg(tmp_path, ["packageManager", "npm@10.0.0"])
        assert read_manifest(tmp_path / "package.json") is None

    @pytest.mark.asyncio
    async def test_async_matches_blocking(self, tmp_path):
        _write_pkg(tmp_path, {"packageManager": "pnpm@8.0.0"})
        path = tmp_path / "package.json"
        assert await read_manifest_async(path) == read_manifest(path)
        assert await read_manifest_async(tmp_path / "missing.json") is None


class TestPackageManagerField:
    def test_string_field(self):
        result = parse_manifest_fields({"packageManager": "pnpm@6.14.0"}, BOTH_FIELDS)
        assert result == DetectResult(name=AgentName.PNPM, agent=Agent.PNPM_6, version="6.14.0")

    def test_non_string_field_is_ignored(self):
        assert parse_manifest_fields({"packageManager": 7}, BOTH_FIELDS) is None

    def test_missing_fields_is_none(self):
        assert parse_manifest_fields({"name": "demo"}, BOTH_FIELDS) is None

    def test_disabled_strategy_is_ignored(self):
        data = {"packageManager": "npm@10.0.0"}
        assert parse_manifest_fields(data, (Strategy.DEV_ENGINES_FIELD,)) is None

    def test_wins_over_dev_engines(self):
        data = {
            "packageManager": "npm@10.0.0",
            "devEngines": {"packageManager": {"name": "bun", "version": "1.1.0"}},
        }
        assert parse_manifest_fields(data, BOTH_FIELDS).agent == Agent.NPM

    def test_unknown_goes_to_handler(self):
        fixed = DetectResult(name=AgentName.NPM, agent=Agent.NPM)
        result = parse_manifest_fields({"packageManager": "foo@1.0.0"}, BOTH_FIELDS, lambda _: fixed)
        assert result is fixed


class TestDevEnginesField:
    def test_object_form(self):
        data = {"devEngines": {"packageManager": {"name": "yarn", "version": "^3.2.0"}}}
        result = parse_manifest_fields(data, BOTH_FIELDS)
        assert result == DetectResult(name=AgentName.YARN, agent=Agent.YARN_BERRY, version="berry")

    def test_list_form_uses_first_entry(self):
        data = {
            "devEngines": {
                "packageManager": [
                    {"name": "pnpm", "version": "9.0.0"},
                    {"name": "npm"},
                ]
            }
        }
        result = parse_manifest_fields(data, BOTH_FIELDS)
        assert result == DetectResult(name=AgentName.PNPM, agent=Agent.PNPM, version="9.0.0")

    def test_name_only(self):
        data = {"devEngines": {"packageManager": {"name": "bun"}}}
        result = parse_manifest_fields(data, BOTH_FIELDS)
        assert result == DetectResult(name=AgentName.BUN, agent=Agent.BUN, version=None)

    @pytest.mark.parametrize(
        "dev_engines",
        [
            "npm",
            {"packageManager": "npm@10.0.0"},
            {"packageManager": []},
            {"packageManager": {"version": "1.0.0"}},
            {"packageManager": {"name": ""}},
            {"runtime": {"name": "node"}},
        ],
    )
    def test_malformed_is_none(self, dev_engines):
        assert parse_manifest_fields({"devEngines": dev_engines}, BOTH_FIELDS) is None

    def test_disabled_strategy_is_ignored(self):
        data = {"devEngines": {"packageManager": {"name": "bun"}}}
        assert parse_manifest_fields(data, (Strategy.PACKAGE_MANAGER_FIELD,)) is None


class TestDetectFromManifest:
    def test_reads_directory_manifest(self, tmp_path):
        _write_pkg(tmp_path, {"packageManager": "npm@10.1.0"})
        result = detect_from_manifest(tmp_path, BOTH_FIELDS)
        assert result == DetectResult(name=AgentName.NPM, agent=Agent.NPM, version="10.1.0")

    def test_no_manifest(self, tmp_path):
        assert detect_from_manifest(tmp_path, BOTH_FIELDS) is None

    @pytest.mark.asyncio
    async def test_async_matches_blocking(self, tmp_path):
        _write_pkg(tmp_path, {"packageManager": "yarn@3.2.0"})
        expected = detect_from_manifest(tmp_path, BOTH_FIELDS)
        assert await detect_from_manifest_async(tmp_path, BOTH_FIELDS) == expected


class TestDeepNesting:
    def test_recursion_limit_is_no_signal(self, tmp_path):
        depth = 100_000
        (tmp_path / "package.json").write_text('{"a": ' + "[" * depth + "]" * depth + "}")
        assert read_manifest(tmp_path / "package.json") is None
