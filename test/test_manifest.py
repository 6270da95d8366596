from __future__ import annotations

import json

from osaurus_music.config.models import PluginMetadata
from osaurus_music.manifest import build_manifest, check_manifest, render_manifest
from osaurus_music.tools.builtin import build_builtin_registry
from osaurus_music.tools.permissions import PermissionConfig

# Tool ids of the hand-maintained manifest the plugin originally shipped.
PUBLISHED_IDS = [
    "open_music", "play", "pause", "next_track", "previous_track", "set_volume",
    "get_current_track", "get_library_stats", "search_songs", "play_song",
]


def _tools_by_id(manifest):
    return {t["id"]: t for t in manifest["capabilities"]["tools"]}


def test_manifest_matches_registry():
    reg = build_builtin_registry()
    manifest = build_manifest(reg)
    assert [t["id"] for t in manifest["capabilities"]["tools"]] == reg.names()
    assert check_manifest(manifest, reg).ok


def test_manifest_metadata_defaults():
    manifest = build_manifest(build_builtin_registry())
    assert manifest["plugin_id"] == "osaurus.music"
    assert manifest["name"] == "Apple Music"
    assert manifest["version"] == "0.1.0"
    assert manifest["min_macos"] == "15.0"
    assert manifest["min_osaurus"] == "0.5.0"
    assert manifest["authors"] == []


def test_manifest_tool_entries():
    tools = _tools_by_id(build_manifest(build_builtin_registry()))
    assert tools["play_song"]["permission_policy"] == "ask"
    assert tools["play"]["permission_policy"] == "auto"
    assert tools["set_volume"]["parameters"]["required"] == ["level"]
    assert tools["search_songs"]["parameters"]["properties"]["limit"]["type"] == "integer"
    assert tools["get_current_track"]["parameters"] == {"type": "object", "properties": {}}
    assert all(t["requirements"] == ["automation"] for t in tools.values())


def test_permission_overrides_apply():
    perms = PermissionConfig(overrides={"play_song": "auto", "pause": "ask"})
    tools = _tools_by_id(build_manifest(build_builtin_registry(), permissions=perms))
    assert tools["play_song"]["permission_policy"] == "auto"
    assert tools["pause"]["permission_policy"] == "ask"


def test_custom_metadata():
    meta = PluginMetadata(version="2.0.0", authors=["someone"])
    manifest = build_manifest(build_builtin_registry(), metadata=meta)
    assert manifest["version"] == "2.0.0"
    assert manifest["authors"] == ["someone"]


def test_render_is_valid_json():
    manifest = build_manifest(build_builtin_registry())
    assert json.loads(render_manifest(manifest)) == manifest


def test_published_ids_are_in_sync():
    published = {"capabilities": {"tools": [{"id": i} for i in PUBLISHED_IDS]}}
    assert check_manifest(published, build_builtin_registry()).ok


def test_drift_is_reported_both_ways():
    published = {"capabilities": {"tools": [{"id": "play"}, {"id": "shuffle"}]}}
    drift = check_manifest(published, build_builtin_registry())
    assert not drift.ok
    assert drift.missing_in_registry == ["shuffle"]
    assert "play" not in drift.missing_in_manifest
    assert "play_song" in drift.missing_in_manifest


def test_check_manifest_tolerates_garbage():
    drift = check_manifest("not a manifest", build_builtin_registry())
    assert drift.missing_in_registry == []
    assert len(drift.missing_in_manifest) == 10
