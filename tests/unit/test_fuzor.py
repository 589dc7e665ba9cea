"""Tests for .fuzor import and export."""

import json

import pytest

from llmforge.core.exceptions import StoreError
from llmforge.library.fuzor import export_transformer, import_transformers, redact_paths
from llmforge.library.manager import TransformerManager
from llmforge.models.transformer_config import Input, InputType
from llmforge.store.library_store import InMemoryLibraryStore


@pytest.fixture
def manager():
    return TransformerManager(InMemoryLibraryStore())


@pytest.fixture
def shared_config(make_config):
    return make_config(
        prompt="Translate {{doc}} into {{lang::string}}",
        inputs=[
            Input(name="doc", type=InputType.FILE, value="/home/me/private/notes.md"),
            Input(name="lang", type=InputType.STRING, value="German"),
        ],
        output_folder="/home/me/out",
    )


class TestExport:
    """Tests for export_transformer."""

    def test_redacts_local_paths(self, shared_config):
        redacted = redact_paths(shared_config)
        assert [i.value for i in redacted.input] == ["/", "German"]
        assert redacted.output_folder == "/"
        assert shared_config.output_folder == "/home/me/out"

    def test_writes_indented_array(self, temp_dir, shared_config):
        target = export_transformer(shared_config, temp_dir / "shared.fuzor")

        text = target.read_text()
        records = json.loads(text)
        assert isinstance(records, list) and len(records) == 1
        assert records[0]["outputFolder"] == "/"
        assert records[0]["input"][0]["value"] == "/"
        assert '\n        "id": "t-1"' in text

    def test_directory_target(self, temp_dir, shared_config):
        target = export_transformer(shared_config, temp_dir)
        assert target == temp_dir / "summarize.fuzor"


class TestImport:
    """Tests for import_transformers."""

    def test_import_exported_file(self, temp_dir, shared_config, manager):
        path = export_transformer(shared_config, temp_dir / "shared.fuzor")

        assert import_transformers(manager, path) == (1, 1)
        imported = manager.get_transformer("t-1")
        assert imported.prompt == shared_config.prompt
        assert imported.output_folder == "/"

    def test_partial_import(self, temp_dir, shared_config, manager):
        manager.create_transformer(shared_config)
        records = [
            shared_config.to_dict(),
            {**shared_config.to_dict(), "id": "t-2", "name": "second"},
            {"id": "t-3", "name": "broken"},
            "not a record",
        ]
        path = temp_dir / "many.fuzor"
        path.write_text(json.dumps(records))

        assert import_transformers(manager, path) == (1, 4)
        assert manager.get_transformer("t-2") is not None

    def test_unreadable_file(self, temp_dir, manager):
        path = temp_dir / "bad.fuzor"
        path.write_text("[{")
        with pytest.raises(StoreError):
            import_transformers(manager, path)

    def test_not_an_array(self, temp_dir, manager):
        path = temp_dir / "bad.fuzor"
        path.write_text('"text"')
        with pytest.raises(StoreError):
            import_transformers(manager, path)
