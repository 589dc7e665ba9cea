"""Tests for the command line interface."""

import json

import pytest
import yaml
from click.testing import CliRunner

from llmforge.cli.main import main
from llmforge.store.library_store import LocalLibraryStore


class StubProvider:
    name = "Stub"

    def __init__(self, response="LLM says hi"):
        self.response = response
        self.prompts = []

    def send_request(self, prompt_or_messages, options=None):
        self.prompts.append(prompt_or_messages)
        return self.response


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def workspace(temp_dir):
    """Workspace with settings, an input folder and a transformer definition."""
    settings_path = temp_dir / "settings.yaml"
    settings_path.write_text(
        yaml.safe_dump(
            {
                "ai_provider": "OpenAI",
                "api_key": "sk-test",
                "accept_terms": True,
                "workspace_root": str(temp_dir),
            }
        )
    )
    docs = temp_dir / "docs"
    docs.mkdir()
    (docs / "a.txt").write_text("alpha")
    (docs / "b.txt").write_text("beta")

    definition = temp_dir / "summarize.yaml"
    definition.write_text(
        """
id: sum-1
name: summarize
description: Summarize each document
prompt: "Summarize {{doc::folder}} in {{lang::string}}"
input:
  - name: doc
    type: folder
    value: docs
outputFolder: out
outputFileName: "*.md"
"""
    )
    return temp_dir


@pytest.fixture
def stub_provider(monkeypatch):
    provider = StubProvider()
    monkeypatch.setattr("llmforge.llm.client.get_provider", lambda p, s: provider)
    return provider


def _invoke(runner, workspace, *args, input=None):
    options = [
        "--settings",
        str(workspace / "settings.yaml"),
        "--library",
        str(workspace / "library.json"),
    ]
    return runner.invoke(main, [*args, *options], input=input)


def _create(runner, workspace):
    result = _invoke(runner, workspace, "create", str(workspace / "summarize.yaml"))
    assert result.exit_code == 0, result.output
    return result


class TestLibraryCommands:
    """Tests for create, list, show, update, duplicate and delete."""

    def test_create_reconciles_inputs(self, runner, workspace):
        result = _create(runner, workspace)

        assert "Created transformer 'summarize' (sum-1)" in result.output
        stored = LocalLibraryStore(workspace / "library.json").load_all()["sum-1"].config
        assert [(i.name, i.type.value, i.value) for i in stored.input] == [
            ("doc", "folder", "docs"),
            ("lang", "string", ""),
        ]

    def test_create_duplicate_id_fails(self, runner, workspace):
        _create(runner, workspace)
        result = _invoke(runner, workspace, "create", str(workspace / "summarize.yaml"))
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_list_and_show(self, runner, workspace):
        _create(runner, workspace)

        listed = _invoke(runner, workspace, "list")
        assert "- summarize (sum-1)" in listed.output

        shown = _invoke(runner, workspace, "show", "summarize")
        assert shown.exit_code == 0
        assert yaml.safe_load(shown.output)["outputFileName"] == "*.md"

    def test_list_empty_and_search(self, runner, workspace):
        assert "The library is empty" in _invoke(runner, workspace, "list").output
        _create(runner, workspace)
        result = _invoke(runner, workspace, "list", "--search", "EACH DOC")
        assert "- summarize (sum-1)" in result.output

    def test_show_unknown(self, runner, workspace):
        result = _invoke(runner, workspace, "show", "nope")
        assert result.exit_code == 1
        assert "Transformer not found: nope" in result.output

    def test_update(self, runner, workspace):
        _create(runner, workspace)
        shown = _invoke(runner, workspace, "show", "sum-1").output
        data = yaml.safe_load(shown)
        data["prompt"] = "Shorten {{doc::folder}}"
        (workspace / "edited.yaml").write_text(yaml.safe_dump(data))

        result = _invoke(runner, workspace, "update", str(workspace / "edited.yaml"))

        assert result.exit_code == 0, result.output
        assert "doc::folder = 'docs'" in result.output
        assert "lang" not in result.output

    def test_duplicate_and_delete(self, runner, workspace):
        _create(runner, workspace)
        result = _invoke(runner, workspace, "duplicate", "summarize")
        assert "summarize (Copy)" in result.output

        result = _invoke(runner, workspace, "delete", "summarize", "--yes")
        assert result.exit_code == 0
        remaining = LocalLibraryStore(workspace / "library.json").load_all()
        assert [i.name for i in remaining.values()] == ["summarize (Copy)"]

    def test_delete_asks_for_confirmation(self, runner, workspace):
        _create(runner, workspace)
        result = _invoke(runner, workspace, "delete", "sum-1", input="n\n")
        assert result.exit_code == 1
        assert "sum-1" in LocalLibraryStore(workspace / "library.json").load_all()

    def test_folders_and_move(self, runner, workspace):
        _create(runner, workspace)
        result = _invoke(runner, workspace, "folder", "create", "Docs")
        folder_id = result.output.strip().rsplit("(", 1)[1].rstrip(")")

        assert _invoke(runner, workspace, "move", "summarize", "--to", folder_id).exit_code == 0
        assert _invoke(runner, workspace, "folder", "rename", folder_id, "Guides").exit_code == 0

        listed = _invoke(runner, workspace, "list").output.splitlines()
        assert listed == [f"[Guides] ({folder_id})", "  - summarize (sum-1)"]


class TestValidateAndPreview:
    def test_validate_stored(self, runner, workspace):
        _create(runner, workspace)
        result = _invoke(runner, workspace, "validate", "summarize")
        assert result.exit_code == 0
        assert "✓ Transformer 'summarize' is valid" in result.output
        assert "Inputs: doc::folder, lang::string" in result.output

    def test_validate_file_with_missing_input(self, runner, workspace):
        result = _invoke(runner, workspace, "validate", str(workspace / "summarize.yaml"))
        assert result.exit_code == 1
        assert "lang::string" in result.output

    def test_validate_execution_blank_input(self, runner, workspace):
        _create(runner, workspace)
        result = _invoke(runner, workspace, "validate", "summarize", "--execution")
        assert result.exit_code == 1
        assert "Input value cannot be empty: lang" in result.output

        result = _invoke(
            runner, workspace, "validate", "summarize", "--execution", "--set", "lang=French"
        )
        assert result.exit_code == 0, result.output

    def test_preview(self, runner, workspace):
        _create(runner, workspace)
        result = _invoke(
            runner,
            workspace,
            "preview",
            "summarize",
            "--set",
            "doc=docs",
            "--set",
            "lang=French",
        )
        assert result.exit_code == 0, result.output
        assert result.output.startswith("Summarize docs in French")

    def test_preview_missing_folder(self, runner, workspace):
        _create(runner, workspace)
        result = _invoke(
            runner, workspace, "preview", "summarize", "--set", "doc=missing", "--set", "lang=en"
        )
        assert result.exit_code == 1
        assert "Input folder does not exist: missing" in result.output


class TestRun:
    """Tests for the run command."""

    def test_run_each_file(self, runner, workspace, stub_provider):
        _create(runner, workspace)
        result = _invoke(runner, workspace, "run", "summarize", "--set", "lang=French")

        assert result.exit_code == 0, result.output
        assert "Running transformer: summarize" in result.output
        assert "Transformer execution completed" in result.output
        assert (workspace / "out" / "a.md").read_text() == "LLM says hi"
        assert (workspace / "out" / "b.md").read_text() == "LLM says hi"
        assert stub_provider.prompts[0].startswith("Summarize alpha in French")

    def test_run_output_folder_override(self, runner, workspace, stub_provider):
        _create(runner, workspace)
        result = _invoke(
            runner, workspace, "run", "sum-1", "--set", "lang=en", "--output-folder", "elsewhere"
        )
        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in (workspace / "elsewhere").iterdir()) == ["a.md", "b.md"]

    def test_run_validation_error(self, runner, workspace, stub_provider):
        _create(runner, workspace)
        result = _invoke(runner, workspace, "run", "summarize")
        assert result.exit_code == 1
        assert "Validation error" in result.output
        assert stub_provider.prompts == []

    def test_run_unknown_input(self, runner, workspace, stub_provider):
        _create(runner, workspace)
        result = _invoke(runner, workspace, "run", "summarize", "--set", "nope=1")
        assert result.exit_code == 1
        assert "Unknown input(s): nope" in result.output

    def test_run_bad_override_format(self, runner, workspace):
        _create(runner, workspace)
        result = _invoke(runner, workspace, "run", "summarize", "--set", "lang")
        assert result.exit_code == 1
        assert "Invalid input format" in result.output


class TestSharingCommands:
    """Tests for export, import and pull."""

    def test_export_and_import(self, runner, workspace):
        _create(runner, workspace)
        target = workspace / "shared.fuzor"
        result = _invoke(runner, workspace, "export", "summarize", "--output", str(target))
        assert result.exit_code == 0, result.output
        assert json.loads(target.read_text())[0]["outputFolder"] == "/"

        other_library = workspace / "other.json"
        result = runner.invoke(
            main,
            [
                "import",
                str(target),
                "--settings",
                str(workspace / "settings.yaml"),
                "--library",
                str(other_library),
            ],
        )
        assert result.exit_code == 0, result.output
        assert "Successfully imported 1 of 1 transformers" in result.output
        assert "sum-1" in LocalLibraryStore(other_library).load_all()

    def test_import_existing_reports_partial(self, runner, workspace):
        _create(runner, workspace)
        target = workspace / "shared.fuzor"
        _invoke(runner, workspace, "export", "summarize", "--output", str(target))

        result = _invoke(runner, workspace, "import", str(target))
        assert result.exit_code == 1
        assert "Successfully imported 0 of 1 transformers" in result.output

    def test_pull(self, runner, workspace, monkeypatch):
        library = {
            "Docs": {
                "One": {
                    "id": "remote-1",
                    "name": "remote",
                    "description": "Remote transformer",
                    "prompt": "Do {{doc::file}}",
                    "input": [{"name": "doc", "type": "file", "value": "/"}],
                    "outputFolder": "/",
                }
            }
        }
        requested = []

        class FakeClient:
            def __init__(self, token=None):
                pass

            def fetch_library(self, repository):
                requested.append(repository)
                return library

        monkeypatch.setattr("llmforge.cli.commands.share.GitHubLibraryClient", FakeClient)

        listed = _invoke(runner, workspace, "pull", "--repo", "acme/prompts", "--list")
        assert "  - remote (remote-1)" in listed.output
        assert LocalLibraryStore(workspace / "library.json").load_all() == {}

        result = _invoke(runner, workspace, "pull", "--repo", "acme/prompts")
        assert "Successfully imported 1 of 1 transformers" in result.output
        assert requested == ["acme/prompts", "acme/prompts"]

    def test_pull_without_repository(self, runner, workspace):
        result = _invoke(runner, workspace, "pull")
        assert result.exit_code == 1
        assert "No repository given" in result.output


class TestMiscCommands:
    def test_providers(self, runner, workspace):
        result = _invoke(runner, workspace, "providers")
        assert "* OpenAI" in result.output
        assert "- Google Gemini" in result.output

    def test_enhance_apply(self, runner, workspace, stub_provider):
        _create(runner, workspace)
        stub_provider.response = "Write a crisp summary of {{doc::folder}}"

        result = _invoke(runner, workspace, "enhance", "summarize", "--apply")

        assert result.exit_code == 0, result.output
        assert "Write a crisp summary of {{doc::folder}}" in result.output
        stored = LocalLibraryStore(workspace / "library.json").load_all()["sum-1"].config
        assert stored.prompt == "Write a crisp summary of {{doc::folder}}"
        assert [i.name for i in stored.input] == ["doc"]

    def test_init(self, runner, temp_dir):
        settings_path = temp_dir / "conf" / "settings.yaml"
        result = runner.invoke(
            main,
            ["init", "--output-dir", str(temp_dir), "--settings", str(settings_path)],
        )

        assert result.exit_code == 0, result.output
        assert settings_path.exists()
        definition = yaml.safe_load((temp_dir / "summarize.yaml").read_text())
        assert "{{document::folder}}" in definition["prompt"]
        assert (temp_dir / "summarize_input").is_dir()

        again = runner.invoke(
            main, ["init", "--output-dir", str(temp_dir), "--settings", str(settings_path)]
        )
        assert again.exit_code == 1
