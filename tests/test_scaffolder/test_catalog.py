"""Tests for the template catalog (devicegen.scaffolder.catalog).

Tests cover:
- Loading and validating descriptors
- Resolving entries against derived names
- Agreement of sequential and simultaneous substitution for the packaged
  catalog across awkward device and display names
"""

from __future__ import annotations

import re
from pathlib import Path

import pytest
from pydantic import ValidationError

from devicegen.config import DEFAULT_TEMPLATE_DIR
from devicegen.scaffolder.catalog import CatalogEntry, RuleSpec, TemplateCatalog
from devicegen.scaffolder.errors import CatalogError
from devicegen.scaffolder.models import Invocation
from devicegen.scaffolder.names import derive_names

pytestmark = pytest.mark.unit


def _names(device_name: str, display_name: str | None = None, dest: Path = Path("/srv")):
    return derive_names(
        Invocation(device_name=device_name, display_name=display_name, destination_dir=dest)
    )


def _simultaneous(rules, text: str) -> str:
    """Apply every rule in one left-to-right pass over the original text."""
    lookup = {rule.match: rule.replace for rule in rules}
    pattern = re.compile("|".join(re.escape(rule.match) for rule in rules))
    return pattern.sub(lambda m: lookup[m.group(0)], text)


class TestPackagedCatalog:
    def test_entry_count(self, default_catalog):
        assert len(default_catalog.entries) == 11

    def test_sources_are_installed(self, default_catalog):
        for source in default_catalog.sources():
            assert DEFAULT_TEMPLATE_DIR.joinpath(*Path(source).parts).is_file(), source

    def test_only_launch_script_is_executable(self, default_catalog):
        executable = [e.dest for e in default_catalog.entries if e.executable]
        assert executable == ["bin/edgex-launch.sh"]

    def test_profile_has_no_rules(self, default_catalog):
        profile = default_catalog.entries[-1]
        assert profile.source.endswith("Simple-Driver.yaml")
        assert profile.rules == ()

    def test_resolved_destinations(self, default_catalog, tmp_path):
        names = _names("mydevice", "MyDevice", tmp_path)
        root = tmp_path / names.service_name
        entries = default_catalog.resolve(names, DEFAULT_TEMPLATE_DIR, root)
        assert [e.dest_path.relative_to(root).as_posix() for e in entries] == [
            "Makefile",
            "Dockerfile",
            "README.md",
            "bin/edgex-launch.sh",
            "version.go",
            "internal/driver/mydevicedriver.go",
            "cmd/main.go",
            "cmd/res/configuration.toml",
            "cmd/res/docker/configuration.toml",
            "go.mod",
            "cmd/res/mydevice-device-profile.yaml",
        ]

    def test_main_rules_resolved(self, default_catalog, tmp_path):
        names = _names("mydevice", "MyDevice", tmp_path)
        entries = default_catalog.resolve(names, DEFAULT_TEMPLATE_DIR, tmp_path / names.service_name)
        main = next(e for e in entries if e.dest_path.name == "main.go")
        assert main.description == "service entry point"
        assert [(r.match, r.replace) for r in main.rules] == [
            ("device-simple", "device-mydevice"),
            (
                "github.com/edgexfoundry/device-sdk-go/example/driver",
                "github.com/edgexfoundry/device-mydevice-go/internal/driver",
            ),
            ('github.com/edgexfoundry/device-sdk-go"', 'github.com/edgexfoundry/device-mydevice-go"'),
            ("device.Version", "device_mydevice.Version"),
            ("SimpleDriver", "MyDeviceDriver"),
            (" a simple example of a device service", ".."),
        ]

    def test_source_paths_under_template_dir(self, default_catalog, tmp_path):
        names = _names("abc", None, tmp_path)
        entries = default_catalog.resolve(names, tmp_path / "tpl", tmp_path / "out")
        assert all(e.source_path.is_relative_to(tmp_path / "tpl") for e in entries)


@pytest.mark.parametrize(
    "device_name",
    [
        "simple",
        "simple-x",
        "sdk",
        "sdk-go",
        "device",
        "device-simple",
        "driver",
        "example",
        "go",
        "version",
        "a",
        "x-",
        "my-device",
    ],
)
@pytest.mark.parametrize(
    "display_name",
    [None, "Simple", "SimpleDriver", "Device", "Version", "Simple-simple", "Ssimple"],
)
def test_substitution_order_does_not_matter(default_catalog, device_name, display_name, tmp_path):
    names = _names(device_name, display_name, tmp_path)
    entries = default_catalog.resolve(names, DEFAULT_TEMPLATE_DIR, tmp_path / names.service_name)
    for entry in entries:
        if not entry.rules:
            continue
        text = entry.source_path.read_text(encoding="utf-8")
        assert entry.render(text) == _simultaneous(entry.rules, text), entry.dest_path


class TestFromDict:
    def test_minimal(self):
        catalog = TemplateCatalog.from_dict({"entries": [{"source": "a.txt", "dest": "a.txt"}]})
        assert catalog.entries == (CatalogEntry(source="a.txt", dest="a.txt"),)
        assert catalog.sources() == ["a.txt"]

    def test_rules_parsed(self, mini_catalog):
        assert mini_catalog.entries[0].rules[0] == RuleSpec(
            match="<<<DS_NAME>>>", replace="{{ device_name }}"
        )

    @pytest.mark.parametrize("data", [None, [], "entries", 3])
    def test_not_a_mapping(self, data):
        with pytest.raises(CatalogError, match="mapping"):
            TemplateCatalog.from_dict(data)

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"entries": []},
            {"entries": [{"source": "a"}]},
            {"entries": [{"source": "", "dest": "a"}]},
            {"entries": [{"source": "a", "dest": "a", "mode": "0755"}]},
            {"entries": [{"source": "a", "dest": "a", "rules": [{"match": "", "replace": "x"}]}]},
            {"entries": [], "extra": True},
        ],
    )
    def test_invalid_descriptor(self, data):
        with pytest.raises(CatalogError, match="Invalid catalog"):
            TemplateCatalog.from_dict(data)

    def test_frozen(self, mini_catalog):
        with pytest.raises(ValidationError):
            mini_catalog.entries = ()


class TestLoad:
    def test_load_file(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text(
            "entries:\n"
            "  - source: a.txt\n"
            "    dest: 'out/{{ device_name }}.txt'\n"
            "    executable: true\n",
            encoding="utf-8",
        )
        catalog = TemplateCatalog.load(path)
        assert catalog.entries[0].executable is True

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError, match="Cannot read"):
            TemplateCatalog.load(tmp_path / "nope.yaml")

    def test_bad_yaml(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text("entries: [unclosed\n", encoding="utf-8")
        with pytest.raises(CatalogError, match="not valid YAML"):
            TemplateCatalog.load(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(CatalogError):
            TemplateCatalog.load(path)


class TestResolve:
    def test_duplicate_destination(self, tmp_path):
        catalog = TemplateCatalog.from_dict(
            {
                "entries": [
                    {"source": "a", "dest": "{{ device_name }}.txt"},
                    {"source": "b", "dest": "abc.txt"},
                ]
            }
        )
        with pytest.raises(CatalogError, match="Duplicate"):
            catalog.resolve(_names("abc", None, tmp_path), tmp_path, tmp_path / "root")

    def test_escaping_destination(self, tmp_path):
        catalog = TemplateCatalog.from_dict({"entries": [{"source": "a", "dest": "../a"}]})
        with pytest.raises(CatalogError):
            catalog.resolve(_names("abc", None, tmp_path), tmp_path, tmp_path / "root")

    def test_unknown_variable_in_rule(self, tmp_path):
        catalog = TemplateCatalog.from_dict(
            {"entries": [{"source": "a", "dest": "a", "rules": [{"match": "x", "replace": "{{ nope }}"}]}]}
        )
        with pytest.raises(CatalogError):
            catalog.resolve(_names("abc", None, tmp_path), tmp_path, tmp_path / "root")

    def test_mini_catalog(self, mini_catalog, tmp_path):
        names = _names("abc", None, tmp_path)
        root = tmp_path / names.service_name
        entries = mini_catalog.resolve(names, tmp_path / "payload", root)
        assert entries[0].dest_path == root / "cmd" / "abc.txt"
        assert entries[0].render("<<<DS_NAME>>>/<<<DS_CAMEL_CASE_NAME>>>") == "abc/Abc"
        assert entries[2].executable is True
        assert entries[2].description == ""
        assert entries[2].rules[0].replace == "device-abc"
