from typing import List, Sequence

from pydantic import BaseModel, Field

APP_NAME = "pokelookup"


class RenderConfig(BaseModel):
    """Formatting choices passed to the renderers instead of living in globals."""

    app_name: str = Field(default=APP_NAME, description="Program name used in tips")
    column_width: int = Field(default=12, ge=1, description="Width of each table column")
    column_gap: str = Field(default=" ", description="Text placed between table columns")


def table_header(titles: Sequence[str], config: RenderConfig) -> List[str]:
    """Centered titles followed by a dashed rule, one cell per column."""
    width = config.column_width
    return [
        config.column_gap.join(f"{title:^{width}}" for title in titles),
        config.column_gap.join("-" * width for _ in titles),
    ]


def table_row(cells: Sequence[str], config: RenderConfig) -> str:
    width = config.column_width
    return config.column_gap.join(f"{cell:<{width}}" for cell in cells)


def tip(suggestion: str, config: RenderConfig) -> str:
    return f"tip: try running '{config.app_name} {suggestion}'"
