"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use OVERMARK_ prefix (e.g., OVERMARK_STRIP_COMMENTS=true).

Settings can also be loaded from a .env file in the project root.

The defaults are the contract with the Overture runtime: generated modules
import ``el`` from ``overture/dom`` and export ``draw(ctx)``. Change them only
when targeting a runtime that exposes the same primitive under another name.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use OVERMARK_ prefix.

    Examples:
        OVERMARK_ELEMENT_MODULE=overture/dom
        OVERMARK_STRIP_COMMENTS=true
        OVERMARK_INDENT=4
    """

    model_config = SettingsConfigDict(
        env_prefix="OVERMARK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Runtime contract
    element_module: str = Field(
        default="overture/dom",
        description="Module the element-construction primitive is imported from",
    )

    element_factory: str = Field(
        default="el",
        description="Name of the element-construction primitive",
    )

    draw_function: str = Field(
        default="draw",
        description="Name of the exported draw function",
    )

    context_param: str = Field(
        default="ctx",
        description="Name of the draw function's single parameter",
    )

    # Embedded code
    script_tag: str = Field(
        default="script",
        description="Tag name of embedded-code blocks",
    )

    module_mode: str = Field(
        default="module",
        description="Value of the script 'type' attribute that selects module mode",
    )

    # Document handling
    strip_comments: bool = Field(
        default=False,
        description="Drop HTML comments instead of rejecting them during synthesis",
    )

    source_suffix: str = Field(
        default=".md",
        description="File suffix handled by module_load() and the CLI",
    )

    output_suffix: str = Field(
        default=".js",
        description="Suffix of modules written by the CLI",
    )

    # Output configuration
    indent: int = Field(
        default=2,
        ge=0,
        description="Spaces per indentation level in generated modules",
    )

    debug_mode: bool = Field(
        default=False,
        description="Enable debug output during compilation",
    )

    def indent_make(self, depth: int) -> str:
        """
        Generate the leading whitespace for a nesting depth.

        Args:
            depth: Zero-based nesting depth

        Returns:
            Indentation string

        Example:
            >>> settings = AppSettings()
            >>> settings.indent_make(2)
            '    '
        """
        return " " * (self.indent * depth)

    def sourcePath_matches(self, name: str) -> bool:
        """Check whether a file name is a compilable document"""
        return name.endswith(self.source_suffix)


# Singleton instance - import this in your code
appsettings = AppSettings()
