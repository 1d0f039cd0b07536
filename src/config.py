from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from models import LayoutConfig

# .env file sits in the project root (parent of src/)
# Only use if it exists (CI uses environment variables directly)
_ENV_FILE = Path(__file__).parent.parent / ".env"
_ENV_FILE = _ENV_FILE if _ENV_FILE.exists() else None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PEDIGREE_",
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Node box and band geometry (SVG user units)
    node_width: float = 200
    node_height: float = 140
    generation_gap: float = 200
    sibling_gap: float = 30

    # Graphviz layered layout (multi-root view), in points
    dot_program: str = "dot"
    dot_node_gap: float = 80
    dot_rank_gap: float = 120

    # Traversal bounds
    max_generations: int = 5  # visible scope around a selection
    common_ancestor_generations: int = 10
    include_descendants: bool = True

    # Viewport used by fit-to-view
    viewport_width: float = 1200
    viewport_height: float = 800
    fit_padding: float = 50

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    def layout_config(self) -> LayoutConfig:
        return LayoutConfig(
            node_width=self.node_width,
            node_height=self.node_height,
            generation_gap=self.generation_gap,
            sibling_gap=self.sibling_gap,
        )


settings = Settings()
