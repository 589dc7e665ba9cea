"""Tests for reconciling inputs with prompt placeholders."""

import pytest

from llmforge.core.exceptions import ValidationError
from llmforge.core.reconciler import check_input_catalog, reconcile
from llmforge.models.transformer_config import Input, InputType


class TestReconcile:
    """Tests for reconcile."""

    def test_creates_missing_inputs(self, make_config):
        config = make_config(prompt="Use {{doc}} and {{tone::select::[\"a\"]}}", inputs=[])
        result = reconcile(config)

        assert [(i.name, i.type) for i in result.input] == [
            ("doc", InputType.FILE),
            ("tone", InputType.SELECT),
        ]
        assert result.input[0].description == "Input for doc"
        assert result.input[0].value == ""
        assert result.input[0].required is True
        assert result.input[1].options == '["a"]'

    def test_keeps_matching_values(self, make_config):
        existing = Input(name="doc", type=InputType.FILE, value="notes.md", description="Notes")
        result = reconcile(make_config(prompt="Use {{doc}}", inputs=[existing]))
        assert result.input == [existing]

    def test_type_change_resets_input(self, make_config):
        """Test that an input is replaced when its placeholder changes type."""
        existing = Input(name="doc", type=InputType.FILE, value="notes.md")
        result = reconcile(make_config(prompt="Use {{doc::folder}}", inputs=[existing]))
        assert result.input[0].type == InputType.FOLDER
        assert result.input[0].value == ""

    def test_drops_orphans_and_orders_by_prompt(self, make_config):
        inputs = [
            Input(name="b", type=InputType.STRING, value="B"),
            Input(name="old", type=InputType.FILE, value="x"),
            Input(name="a", type=InputType.FILE, value="A"),
        ]
        result = reconcile(make_config(prompt="{{a}} then {{b::string}}", inputs=inputs))
        assert [(i.name, i.value) for i in result.input] == [("a", "A"), ("b", "B")]

    def test_original_is_unchanged(self, make_config):
        config = make_config(prompt="{{a}}", inputs=[])
        reconcile(config)
        assert config.input == []

    def test_invalid_prompt_raises(self, make_config):
        with pytest.raises(ValidationError):
            reconcile(make_config(prompt="no placeholders"))

    @pytest.mark.parametrize(
        "prompt,inputs",
        [
            ("Use {{doc}} and {{tone::string}}", []),
            ("Use {{doc}}", [Input(name="stale", type=InputType.TEXT, value="x")]),
            ("Use {{doc::folder}}", [Input(name="doc", type=InputType.FILE, value="a.md")]),
            (
                "Pick {{tone::select::[\"short\",\"long\"]}} for {{doc}}",
                [Input(name="doc", type=InputType.FILE, value="a.md")],
            ),
        ],
    )
    def test_idempotent(self, make_config, prompt, inputs):
        """Test that reconciling an already reconciled config changes nothing."""
        once = reconcile(make_config(prompt=prompt, inputs=inputs))
        assert reconcile(once) == once


class TestCheckInputCatalog:
    """Tests for check_input_catalog."""

    def test_consistent(self, make_config):
        check_input_catalog(make_config())

    def test_missing_and_orphan(self, make_config):
        config = make_config(
            prompt="{{doc}}", inputs=[Input(name="other", type=InputType.FILE, value="x")]
        )
        with pytest.raises(ValidationError) as exc_info:
            check_input_catalog(config)
        assert exc_info.value.context["missing"] == ["doc::file"]
        assert exc_info.value.context["orphans"] == ["other::file"]

    def test_duplicates(self, make_config):
        inputs = [
            Input(name="doc", type=InputType.FILE, value="a"),
            Input(name="doc", type=InputType.FILE, value="b"),
        ]
        with pytest.raises(ValidationError) as exc_info:
            check_input_catalog(make_config(prompt="{{doc}}", inputs=inputs))
        assert exc_info.value.context["duplicates"] == ["doc"]
