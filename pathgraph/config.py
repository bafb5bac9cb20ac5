"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for all configuration:
where graph files live and how they are parsed, which algorithm builds
the engine, where result edges are written, and how logging behaves.

Configuration can be overridden via environment variables:
- PG_GRAPH_DATA_DIR=/path/to/data
- PG_GRAPH_DIRECTED=false
- PG_GRAPH_WEIGHT_COLUMNS='["distance", "toll"]'
- PG_ENGINE_ALGORITHM=dijkstra
- PG_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.errors import UnsupportedAlgorithmError
from .domain.models import Algorithm


class GraphConfig(BaseSettings):
    """Graph data configuration.

    Environment variables prefixed with PG_GRAPH_.
    """

    model_config = SettingsConfigDict(env_prefix="PG_GRAPH_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "data"
    )
    source: Literal["csv", "mixed"] = "csv"
    nodes_file: str = "nodes.csv"
    edges_file: str = "edges.csv"
    graph_file: str = "graph.txt"
    delimiter: str = ","
    id_type: Literal["str", "int"] = "str"
    # Summed into the edge weight; more than one column gives a composite weight
    weight_columns: List[str] = Field(default_factory=lambda: ["weight"])
    directed: bool = True

    @field_validator("delimiter")
    @classmethod
    def _single_character(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError(f"delimiter must be a single character, got {value!r}")
        return value

    @field_validator("weight_columns")
    @classmethod
    def _at_least_one_column(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("weight_columns must name at least one column")
        return value

    @property
    def nodes_path(self) -> Path:
        """Full path to the nodes CSV file."""
        return self.data_dir / self.nodes_file

    @property
    def edges_path(self) -> Path:
        """Full path to the edges CSV file."""
        return self.data_dir / self.edges_file

    @property
    def graph_path(self) -> Path:
        """Full path to the single mixed node/edge file."""
        return self.data_dir / self.graph_file


class EngineConfig(BaseSettings):
    """Shortest-path engine configuration.

    Environment variables prefixed with PG_ENGINE_.
    """

    model_config = SettingsConfigDict(env_prefix="PG_ENGINE_")

    algorithm: str = "dijkstra"

    @field_validator("algorithm")
    @classmethod
    def _implemented_algorithm(cls, value: str) -> str:
        try:
            return Algorithm.parse(value).value
        except UnsupportedAlgorithmError as e:
            raise ValueError(e.message) from e

    @property
    def selected_algorithm(self) -> Algorithm:
        return Algorithm.parse(self.algorithm)


class OutputConfig(BaseSettings):
    """Result output configuration.

    Environment variables prefixed with PG_OUTPUT_.
    """

    model_config = SettingsConfigDict(env_prefix="PG_OUTPUT_")

    output_dir: Path = Field(default_factory=Path.cwd)
    tree_file: str = "optimized_graph.txt"
    write_header: bool = True

    @property
    def tree_path(self) -> Path:
        """Default file the shortest-path tree edges are written to."""
        return self.output_dir / self.tree_file


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with PG_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="PG_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.graph.nodes_path)
        print(config.engine.selected_algorithm)

    Environment variables prefixed with PG_.
    """

    model_config = SettingsConfigDict(env_prefix="PG_")

    graph: GraphConfig = Field(default_factory=GraphConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
