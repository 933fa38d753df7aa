"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ROOT_ENV_VAR = "FOLDERQUERY_ROOT"


def _get_default_corpus_root() -> Path:
    """Get the default corpus root from the environment or the local data folder."""
    env_root = os.environ.get(ROOT_ENV_VAR)
    if env_root:
        return Path(env_root)
    return Path("data/orders")


@dataclass(slots=True)
class AppConfig:
    corpus_root: Path | None = None
    identity_field: str = "pi_order_id_str"
    path_field: str = "pi_path_to_order_xml"
    marker_name: str = "order.xml"
    folder_prefix: str = "order"
    default_rows: int = 10

    def __post_init__(self) -> None:
        if self.corpus_root is None:
            self.corpus_root = _get_default_corpus_root()

    def resolve_corpus_root(self, base_dir: Path | None = None) -> Path:
        if self.corpus_root is None:
            self.corpus_root = _get_default_corpus_root()
        if Path(self.corpus_root).is_absolute() or base_dir is None:
            return Path(self.corpus_root)
        return base_dir / self.corpus_root
