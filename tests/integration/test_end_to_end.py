"""End-to-end integration tests for complete transformer runs."""

import json

import pytest

from llmforge import from_yaml, run_transformer
from llmforge.core.exceptions import EngineError, ValidationError
from llmforge.core.reconciler import reconcile
from llmforge.library.fuzor import export_transformer, import_transformers
from llmforge.library.manager import TransformerManager
from llmforge.models.settings import Settings
from llmforge.store.library_store import LocalLibraryStore


def _write_docs(root, names):
    docs = root / "docs"
    docs.mkdir()
    for name in names:
        (docs / name).write_text(f"content of {name}")
    return docs


@pytest.mark.integration
class TestEndToEndRuns:
    """End-to-end tests from definition file to output files."""

    def test_each_file_run(self, temp_dir, settings, fake_gateway):
        """Definition file → library → run over every file of a folder."""
        _write_docs(temp_dir, ["b.txt", "a.txt", ".hidden.txt"])
        definition = temp_dir / "summarize.yaml"
        definition.write_text(
            """
id: sum-1
name: summarize
description: Summarize each document
prompt: |
  Summarize for {{audience::string}}:
  {{doc::folder}}
input:
  - name: doc
    type: folder
    value: docs
outputFolder: out
outputFileName: "*.summary.md"
temperature: 0.2
"""
        )

        manager = TransformerManager(LocalLibraryStore(temp_dir / "library.json"))
        manager.create_transformer(reconcile(from_yaml(str(definition))))

        stored = manager.require_transformer("summarize")
        audience = stored.get_input("audience").model_copy(update={"value": "engineers"})
        config = stored.with_inputs([stored.get_input("doc"), audience])

        fake_gateway.response = lambda prompt: prompt.splitlines()[1].upper()
        run = run_transformer(config, settings, gateway=fake_gateway)

        assert run.status.value == "completed"
        out = temp_dir.resolve() / "out"
        assert run.outputs == [str(out / "a.summary.md"), str(out / "b.summary.md")]
        assert (out / "a.summary.md").read_text() == "CONTENT OF A.TXT"
        assert all(p.startswith("Summarize for engineers:") for p in fake_gateway.prompts)
        assert [o.temperature for o in fake_gateway.options] == [0.2, 0.2]
        assert run.metrics.items_processed == 2

    def test_join_files_run(self, temp_dir, settings, fake_gateway, make_config):
        _write_docs(temp_dir, ["one.md", "two.md"])
        config = make_config(
            prompt="Merge {{doc::folder}}",
            inputs=[{"name": "doc", "type": "folder", "value": "docs"}],
            process_format="joinFiles",
            output_file_name="merged.md",
        )

        run = run_transformer(config, settings, gateway=fake_gateway)

        assert len(fake_gateway.prompts) == 1
        prompt = fake_gateway.prompts[0]
        assert "FileName: one.md\ncontent of one.md" in prompt
        assert "FileName: two.md\ncontent of two.md" in prompt
        assert "matching merged.md" in prompt
        assert run.outputs == [str(temp_dir.resolve() / "out" / "merged.md")]

    def test_failing_file_does_not_stop_the_batch(self, temp_dir, settings, gateway_factory, make_config):
        _write_docs(temp_dir, ["a.txt", "b.txt", "c.txt"])
        gateway = gateway_factory()
        gateway.fail_on = "content of b.txt"
        config = make_config(
            prompt="Echo {{doc::folder}}",
            inputs=[{"name": "doc", "type": "folder", "value": "docs"}],
            output_file_name="*.txt",
        )

        run = run_transformer(config, settings, gateway=gateway)

        assert [p.rsplit("/", 1)[-1] for p in run.outputs] == ["a.txt", "c.txt"]
        assert run.metrics.errors == 1

    def test_single_file_failure_fails_the_run(self, temp_dir, settings, gateway_factory, make_config):
        (temp_dir / "doc.txt").write_text("text")
        gateway = gateway_factory()
        gateway.fail_on = "Summarize"

        with pytest.raises(EngineError, match='Failed to execute transformer "summarize"'):
            run_transformer(make_config(), settings, gateway=gateway)

    def test_terms_not_accepted(self, temp_dir, gateway_factory, make_config):
        (temp_dir / "doc.txt").write_text("text")
        gateway = gateway_factory()
        settings = Settings(workspace_root=str(temp_dir))

        with pytest.raises(ValidationError, match="terms of service"):
            run_transformer(make_config(), settings, gateway=gateway)
        assert gateway.prompts == []


@pytest.mark.integration
class TestSharing:
    def test_export_import_between_libraries(self, temp_dir, make_config):
        source = TransformerManager(LocalLibraryStore(temp_dir / "source.json"))
        source.create_transformer(make_config(output_folder=str(temp_dir / "private")))

        fuzor_path = export_transformer(source.require_transformer("t-1"), temp_dir)

        assert fuzor_path == temp_dir / "summarize.fuzor"
        exported = json.loads(fuzor_path.read_text())
        assert exported[0]["outputFolder"] == "/"
        assert exported[0]["input"][0]["value"] == "/"

        target = TransformerManager(LocalLibraryStore(temp_dir / "target.json"))
        assert import_transformers(target, fuzor_path) == (1, 1)
        assert import_transformers(target, fuzor_path) == (0, 1)
        assert target.require_transformer("summarize").output_folder == "/"
