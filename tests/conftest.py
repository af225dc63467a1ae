"""Shared pytest fixtures for the devicegen test suite.

Provides reusable fixtures for:
- Temporary destination directories
- A miniature template payload and catalog for engine tests
- The packaged catalog and a default generator
"""

from __future__ import annotations

from pathlib import Path

import pytest

from devicegen.config import Config
from devicegen.scaffolder.catalog import TemplateCatalog
from devicegen.scaffolder.generator import ServiceGenerator


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def dest_dir(tmp_path: Path) -> Path:
    """Existing destination directory for generated services."""
    out = tmp_path / "services"
    out.mkdir()
    yield out


# ---------------------------------------------------------------------------
# Miniature payload
# ---------------------------------------------------------------------------

@pytest.fixture
def mini_payload(tmp_path: Path) -> Path:
    """A tiny template directory: one text template, one binary blob, a license."""
    root = tmp_path / "payload"
    (root / "templates").mkdir(parents=True)
    (root / "templates" / "hello.txt").write_bytes(
        b"hello <<<DS_NAME>>>\r\nfrom <<<DS_CAMEL_CASE_NAME>>>\r\n"
    )
    (root / "blob.bin").write_bytes(b"\x00\xff\xfe<<<DS_NAME>>>\x80")
    (root / "run.sh").write_text("#!/bin/sh\necho <<<DS_NAME>>>\n", encoding="utf-8")
    (root / "LICENSE").write_text("Mini license\n", encoding="utf-8")
    return root


@pytest.fixture
def mini_catalog() -> TemplateCatalog:
    """Catalog matching :func:`mini_payload`."""
    return TemplateCatalog.from_dict(
        {
            "entries": [
                {
                    "source": "templates/hello.txt",
                    "dest": "cmd/{{ device_name }}.txt",
                    "rules": [
                        {"match": "<<<DS_NAME>>>", "replace": "{{ device_name }}"},
                        {"match": "<<<DS_CAMEL_CASE_NAME>>>", "replace": "{{ camel_name }}"},
                    ],
                },
                {"source": "blob.bin", "dest": "internal/blob.bin"},
                {
                    "source": "run.sh",
                    "dest": "bin/run.sh",
                    "executable": True,
                    "rules": [{"match": "<<<DS_NAME>>>", "replace": "{{ service_id }}"}],
                },
            ]
        }
    )


@pytest.fixture
def mini_config(mini_payload: Path) -> Config:
    """Config pointing at the miniature payload."""
    return Config(template_dir=mini_payload)


@pytest.fixture
def mini_generator(mini_config: Config, mini_catalog: TemplateCatalog) -> ServiceGenerator:
    return ServiceGenerator(mini_config, mini_catalog)


# ---------------------------------------------------------------------------
# Packaged catalog
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def default_catalog() -> TemplateCatalog:
    """The catalog shipped with the package."""
    return TemplateCatalog.default()


@pytest.fixture
def generator() -> ServiceGenerator:
    """Generator using the packaged payload and catalog."""
    return ServiceGenerator(Config())


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove every DEVICEGEN_* variable from the environment."""
    for var in (
        "DEVICEGEN_TEMPLATE_DIR",
        "DEVICEGEN_CATALOG",
        "DEVICEGEN_VERSION",
        "DEVICEGEN_ATOMIC",
    ):
        monkeypatch.delenv(var, raising=False)
