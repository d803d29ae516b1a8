"""Per-tool argument models, validated before any credential lookup or HTTP call."""
from typing import Annotated, Any, ClassVar, Optional, Type, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError

from core.errors import InvalidArgumentError


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


NonBlankStr = Annotated[str, AfterValidator(_not_blank)]


class ToolArguments(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    tool: ClassVar[str]

    client_key: Optional[str] = Field(default=None, alias="clientKey")


class ListTemplatesArgs(ToolArguments):
    tool: ClassVar[str] = "list_templates"


class ReadTemplateArgs(ToolArguments):
    tool: ClassVar[str] = "read_template"

    template_key: NonBlankStr = Field(alias="templateKey")


class ListPlaceholdersArgs(ToolArguments):
    tool: ClassVar[str] = "list_placeholders"

    template_key: NonBlankStr = Field(alias="templateKey")


class CreateContractArgs(ToolArguments):
    tool: ClassVar[str] = "create_contract"

    name: NonBlankStr
    value: NonBlankStr


ArgsT = TypeVar("ArgsT", bound=ToolArguments)


def parse_arguments(model: Type[ArgsT], **values: Any) -> ArgsT:
    """Validate keyword arguments (wire names) against `model`.

    Raises InvalidArgumentError naming the first missing or blank field.
    """
    try:
        return model.model_validate(values)
    except ValidationError as e:
        errors = e.errors()
        loc = errors[0]["loc"] if errors else ()
        field = str(loc[0]) if loc else "arguments"
        raise InvalidArgumentError(field) from e
