__all__ = ["DataModel"]

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, ValidationError

from .exceptions import BaseError, InvalidParametersError


class DataModel(BaseModel):
    """Data model."""

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        extra="ignore",
        populate_by_name=True,
    )

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=exclude_none)

    def to_json(self, indent: int | None = None) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)

    @classmethod
    def from_dict(cls, obj: dict | None) -> Self:
        return cls.model_validate(obj)

    @classmethod
    def from_json(cls, json: str) -> Self:
        return cls.model_validate_json(json)

    @classmethod
    def parse(
        cls,
        obj: Any,
        error: type[BaseError] = InvalidParametersError,
        message: str | None = None,
    ) -> Self:
        """Validate a value into this model.

        Args:
            obj:
                Model instance, dict or None.
            error:
                Error raised when validation fails.
            message:
                Message prefix for the raised error.

        Returns:
            Model instance.
        """
        if isinstance(obj, cls):
            return obj
        try:
            return cls.model_validate(obj if obj is not None else {})
        except ValidationError as e:
            prefix = message or f"Invalid {cls.__name__}"
            raise error(f"{prefix}: {_summarize(e)}") from e


def _summarize(e: ValidationError) -> str:
    errors = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "value"
        errors.append(f"{loc} {err['msg']}")
    return "; ".join(errors)
