"""Transformer configuration models."""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from llmforge.core.exceptions import ValidationError


class InputType(str, Enum):
    """Kinds of data an input can supply to a prompt."""

    TEXT = "text"
    TEXT_AREA = "textArea"
    STRING = "string"
    SELECT = "select"
    FILE = "file"
    FOLDER = "folder"


LITERAL_INPUT_TYPES = frozenset(
    {InputType.TEXT, InputType.TEXT_AREA, InputType.STRING, InputType.SELECT}
)
PATH_INPUT_TYPES = frozenset({InputType.FILE, InputType.FOLDER})


class ProcessFormat(str, Enum):
    """How a folder input is turned into LLM requests."""

    EACH_FILE = "eachFile"
    JOIN_FILES = "joinFiles"


class Input(BaseModel):
    """A named data source feeding one prompt placeholder."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(description="Input name, matches a placeholder name")
    description: str = Field(default="", description="Human readable description")
    type: InputType = Field(default=InputType.FILE, description="Input type")
    value: Optional[str] = Field(
        default="", description="Literal text, or a file/folder path"
    )
    required: bool = Field(default=True, description="Whether a value is required")
    options: Optional[str] = Field(
        default=None, description="JSON array literal of choices for select inputs"
    )


class TransformerConfig(BaseModel):
    """A named transformation recipe: prompt template, inputs and output target."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: str = Field(description="Stable unique identity")
    name: str = Field(description="Transformer name")
    description: str = Field(default="", description="What the transformer does")
    prompt: str = Field(description="Prompt template with {{name::type::options}} tokens")
    input: List[Input] = Field(default_factory=list, description="Declared inputs")
    output_folder: str = Field(default="", description="Folder receiving outputs")
    output_file_name: Optional[str] = Field(
        default=None, description="Output file name, may contain one '*' wildcard"
    )
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    process_format: ProcessFormat = Field(default=ProcessFormat.EACH_FILE)
    parent_folder_id: Optional[str] = Field(
        default=None, description="Library folder holding this transformer"
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TransformerConfig":
        """Create a TransformerConfig from a camelCase or snake_case dictionary.

        Raises:
            ValidationError: If the dictionary does not describe a valid configuration
        """
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid transformer configuration: {e}",
                context={"id": data.get("id") if isinstance(data, dict) else None},
            ) from e

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the camelCase keys of the library and .fuzor formats."""
        return self.model_dump(mode="json", by_alias=True)

    def get_input(self, name: str) -> Optional[Input]:
        """Return the first input called ``name``, if any."""
        return next((i for i in self.input if i.name == name), None)

    def folder_input(self) -> Optional[Input]:
        """Return the folder-typed input, if the configuration has one."""
        return next((i for i in self.input if i.type == InputType.FOLDER), None)

    def with_inputs(self, inputs: List[Input]) -> "TransformerConfig":
        """Return a copy of this configuration with a different input list."""
        return self.model_copy(update={"input": list(inputs)})
