"""Library tree models: transformer and folder records."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from llmforge.core.exceptions import ValidationError
from llmforge.models.transformer_config import TransformerConfig


class LibraryFolder(BaseModel):
    """A folder grouping transformers in the library tree."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    id: str
    name: str
    description: Optional[str] = None
    parent_folder_id: Optional[str] = None


class LibraryItem(BaseModel):
    """Persisted library record: ``{type: transformer, config}`` or ``{type: folder, folder}``."""

    model_config = ConfigDict(frozen=True)

    type: Literal["transformer", "folder"]
    config: Optional[TransformerConfig] = None
    folder: Optional[LibraryFolder] = None

    @model_validator(mode="after")
    def _check_payload(self) -> "LibraryItem":
        if self.type == "transformer" and self.config is None:
            raise ValueError("transformer record requires a config")
        if self.type == "folder" and self.folder is None:
            raise ValueError("folder record requires a folder")
        return self

    @property
    def id(self) -> str:
        """Identity of the wrapped transformer or folder."""
        if self.type == "transformer":
            return self.config.id
        return self.folder.id

    @property
    def name(self) -> str:
        if self.type == "transformer":
            return self.config.name
        return self.folder.name

    @property
    def parent_folder_id(self) -> Optional[str]:
        if self.type == "transformer":
            return self.config.parent_folder_id
        return self.folder.parent_folder_id

    @classmethod
    def for_transformer(cls, config: TransformerConfig) -> "LibraryItem":
        return cls(type="transformer", config=config)

    @classmethod
    def for_folder(cls, folder: LibraryFolder) -> "LibraryItem":
        return cls(type="folder", folder=folder)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LibraryItem":
        """Create a LibraryItem from its persisted dictionary form.

        Raises:
            ValidationError: If the record is malformed
        """
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid library record: {e}") from e

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
