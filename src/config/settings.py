"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use WIKICREOLE_ prefix (e.g., WIKICREOLE_URL_BASE=/wiki/).

Settings can also be loaded from a .env file in the project root. These are
only the defaults; a Parser can override every rendering option per instance.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use WIKICREOLE_ prefix.

    Examples:
        WIKICREOLE_URL_BASE=/wiki/
        WIKICREOLE_IMG_BASE=/wiki/images/
        WIKICREOLE_CODE_STYLE=monokai
    """

    model_config = SettingsConfigDict(
        env_prefix="WIKICREOLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Link and image configuration
    url_base: str = Field(
        default="",
        description="Prefix prepended to page slugs in internal wiki links",
    )

    img_base: str = Field(
        default="",
        description="Prefix prepended to image sources that carry no path separator",
    )

    external_link_format: str = Field(
        default='<a href="{url}" class="external">{text}</a>',
        description="Template for links to external URLs",
    )

    internal_link_format: str = Field(
        default='<a href="{url}">{text}</a>',
        description="Template for links to wiki pages that exist",
    )

    notcreated_link_format: str = Field(
        default=(
            '<a href="{url}" class="notcreated" '
            'title="This wiki page does not exist yet. Click to create it.">{text}</a>'
        ),
        description="Template for links to wiki pages that do not exist yet",
    )

    free_url_format: str = Field(
        default='<a href="{url}" class="external">{url}</a>',
        description="Template for URLs found in running text",
    )

    # Parser configuration
    placeholder_prefix: str = Field(
        default="\x00NOWIKI_",
        description="Prefix for inline nowiki placeholders (uses null byte to avoid collisions)",
    )

    placeholder_suffix: str = Field(
        default="\x00",
        description="Suffix for inline nowiki placeholders (uses null byte to avoid collisions)",
    )

    # Macro configuration
    code_style: str = Field(
        default="default",
        description="Pygments style used by the built-in code macro",
    )

    def placeHolder_make(self, index: int) -> str:
        """
        Generate a placeholder string for an inline nowiki span at given index.

        Args:
            index: Zero-based index into the inline nowiki buffer

        Returns:
            Placeholder string (e.g., "\\x00NOWIKI_0\\x00")

        Example:
            >>> settings = AppSettings()
            >>> settings.placeHolder_make(0)
            '\\x00NOWIKI_0\\x00'
        """
        return f"{self.placeholder_prefix}{index}{self.placeholder_suffix}"

    def spanIndex_extract(self, placeholder: str) -> int | None:
        """
        Extract the buffer index from a placeholder string.

        Args:
            placeholder: Placeholder string to parse

        Returns:
            Buffer index if valid placeholder, None otherwise

        Example:
            >>> settings = AppSettings()
            >>> settings.spanIndex_extract('\\x00NOWIKI_3\\x00')
            3
        """
        if not placeholder.startswith(self.placeholder_prefix):
            return None
        if not placeholder.endswith(self.placeholder_suffix):
            return None

        content = placeholder[len(self.placeholder_prefix) : -len(self.placeholder_suffix)]

        try:
            return int(content)
        except ValueError:
            return None


# Singleton instance - import this in your code
appsettings = AppSettings()
