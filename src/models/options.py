"""
Parser option model

The fixed set of options a Parser can be constructed with, validated with
pydantic so that option_set() rejects unknown keys and ill-typed values the
same way the constructor does.
"""

from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import appsettings


LinkTemplate = Union[str, Callable[..., str]]


class ParserOptions(BaseModel):
    """
    Rendering options of one Parser instance

    Defaults come from AppSettings (and so from WIKICREOLE_* environment
    variables).

    Attributes:
        url_base: Prefix for internal wiki link targets
        img_base: Prefix for image sources without a path separator
        external_link_format: Template or callable (url, text) for external links
        internal_link_format: Template or callable for links to existing pages
        notcreated_link_format: Template or callable for links to missing pages
        free_url_format: Template or callable for URLs in running text
        existing_pages: Collection of page slugs, predicate slug -> bool, or
                        None when every page should be treated as existing
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        validate_default=True,
        arbitrary_types_allowed=True,
    )

    url_base: str = Field(default_factory=lambda: appsettings.url_base)
    img_base: str = Field(default_factory=lambda: appsettings.img_base)
    external_link_format: LinkTemplate = Field(
        default_factory=lambda: appsettings.external_link_format
    )
    internal_link_format: LinkTemplate = Field(
        default_factory=lambda: appsettings.internal_link_format
    )
    notcreated_link_format: LinkTemplate = Field(
        default_factory=lambda: appsettings.notcreated_link_format
    )
    free_url_format: LinkTemplate = Field(
        default_factory=lambda: appsettings.free_url_format
    )
    existing_pages: Optional[Any] = None

    @field_validator(
        "external_link_format",
        "internal_link_format",
        "notcreated_link_format",
        "free_url_format",
    )
    @classmethod
    def linkTemplate_check(cls, value: LinkTemplate) -> LinkTemplate:
        """
        Reject format strings that cannot be filled from {url} and {text}

        Callables are accepted as they are; they are only called while
        rendering.
        """
        if not isinstance(value, str):
            return value
        try:
            value.format(url="", text="")
        except (KeyError, IndexError, AttributeError) as e:
            raise ValueError(f"Link template may only use {{url}} and {{text}}, got {e!r}") from e
        except ValueError as e:
            raise ValueError(f"Malformed link template: {e}") from e
        return value

    @field_validator("existing_pages")
    @classmethod
    def existingPages_normalize(cls, value: Any) -> Any:
        """
        Accept None, a predicate, or any iterable of slugs

        Mappings contribute their keys. Iterables are frozen into a set so
        membership tests stay cheap.
        """
        if value is None or callable(value):
            return value
        if isinstance(value, (str, bytes)):
            raise ValueError("existing_pages must be a collection of slugs, not a string")
        try:
            return frozenset(value)
        except TypeError as e:
            raise ValueError(f"existing_pages must be iterable or callable: {e}") from e

    @classmethod
    def keys(cls) -> list[str]:
        """Names of all recognised options"""
        return list(cls.model_fields)
