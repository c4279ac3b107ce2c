"""Per-call options for temporary file and directory creation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from tempwrite.errors import InvalidArgument

DEFAULT_FILE_PREFIX = "temp-"
DEFAULT_DIR_PREFIX = "temp-dir-"
DEFAULT_MODE = 0o600
DEFAULT_DIR_MODE = 0o700


class DirOptions(BaseModel):
    """Options for creating a temporary directory."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    dir: Path | None = Field(
        default=None, description="Parent directory (defaults to the system temp root)"
    )
    prefix: str = Field(default=DEFAULT_DIR_PREFIX, description="Directory name prefix")
    cleanup: bool = Field(default=True, description="Track the directory for automatic cleanup")
    mode: int = Field(
        default=DEFAULT_DIR_MODE, ge=0, le=0o7777, description="Permission bits for the directory"
    )


class WriteOptions(BaseModel):
    """Options for writing a temporary file."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    dir: Path | None = Field(
        default=None, description="Target directory (defaults to the system temp root)"
    )
    prefix: str = Field(default=DEFAULT_FILE_PREFIX, description="Filename prefix")
    cleanup: bool = Field(default=True, description="Track the file for automatic cleanup")
    mode: int = Field(
        default=DEFAULT_MODE, ge=0, le=0o7777, description="Permission bits for the file"
    )


class CsvOptions(WriteOptions):
    """Options for writing a temporary CSV file."""

    delimiter: str = Field(default=",", min_length=1, description="Cell delimiter")


def resolve_options[O: BaseModel](
    model: type[O],
    base: BaseModel | None,
    options: BaseModel | dict[str, Any] | None,
    overrides: dict[str, Any],
) -> O:
    """Merge defaults, explicit options and keyword overrides into one model.

    Later sources win. Option models only contribute the fields ``model``
    knows, so ``CsvOptions`` can be passed where ``WriteOptions`` is expected
    and file defaults can feed directory options. Plain dicts and keyword
    overrides are strict.

    Raises:
        InvalidArgument: If a value fails validation or a key is unknown
    """
    data: dict[str, Any] = {}
    for source in (base, options):
        if isinstance(source, BaseModel):
            data.update(
                {
                    k: v
                    for k, v in source.model_dump(exclude_unset=True).items()
                    if k in model.model_fields
                }
            )
        elif source is not None:
            data.update(source)
    data.update(overrides)

    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise InvalidArgument(f"Invalid options: {e}") from e
