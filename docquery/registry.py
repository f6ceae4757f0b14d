import importlib
import logging
import typing as t
from pathlib import Path

import yaml

log = logging.getLogger("registry")


class EntityMeta(t.TypedDict, total=False):
    model: str
    maxPageSize: int


class RegistryEntry(t.TypedDict):
    model: t.Any  # record type; dict when no model is configured
    maxPageSize: int


def _import_model(path: str) -> t.Any:
    """Resolve 'package.module:ClassName'."""
    module_name, sep, attr = path.partition(":")
    if not sep or not attr:
        raise RuntimeError(f"Bad model path {path!r}, expected 'module:Class'")
    module = importlib.import_module(module_name)
    return getattr(module, attr)


class Registry:
    def __init__(self, path: Path, max_page_size: int = 1000):
        self.path = Path(path)
        self.max_page_size = max_page_size
        self.entities_cfg: dict[str, EntityMeta] = {}

    def load_entities(self) -> None:
        if not self.path.exists():
            raise RuntimeError(f"Entity mapping file not found: {self.path}")
        with self.path.open("r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
        ents = cfg.get("entities", {}) or {}
        norm: dict[str, EntityMeta] = {}
        for k, v in ents.items():
            v = v or {}
            if not isinstance(v, dict):
                raise RuntimeError(f"Bad entity mapping for {k}: {v}")
            item: EntityMeta = {}
            if "model" in v:
                item["model"] = str(v["model"])
            if "maxPageSize" in v:
                item["maxPageSize"] = int(v["maxPageSize"])
            norm[k] = item
        self.entities_cfg = norm
        log.info("Loaded %d entities from %s", len(norm), self.path)

    def ensure_entity(self, name: str) -> RegistryEntry:
        if name not in self.entities_cfg:
            raise KeyError(f"Unknown entity: {name}")
        cfg = self.entities_cfg[name]
        model = _import_model(cfg["model"]) if "model" in cfg else dict
        return {
            "model": model,
            "maxPageSize": int(cfg.get("maxPageSize", self.max_page_size)),
        }

    def refresh_all(self) -> dict[str, str]:
        """Re-read the entity file and re-resolve every model."""
        self.load_entities()
        summaries: dict[str, str] = {}
        for name in self.entities_cfg:
            try:
                entry = self.ensure_entity(name)
                summaries[name] = f"ok ({getattr(entry['model'], '__name__', entry['model'])})"
            except Exception as e:
                summaries[name] = f"error: {e}"
        return summaries
