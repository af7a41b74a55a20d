# alfa_reader/core/conventions.py
from __future__ import annotations
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

_LOG = logging.getLogger(__name__)

_DEFAULT_CONFIG = Path(__file__).resolve().parent.parent / "config.yaml"


@dataclass(frozen=True)
class NamingConventions:
    delimiter: str = ","
    field_prefix: str = "field."          # marks dataset-specific columns
    time_marker: str = "%time"            # backs the per-record date/time
    header_seq_suffix: str = "header.seq"
    header_stamp_suffix: str = "header.stamp"
    header_frame_id_suffix: str = "header.frame_id"
    fault_topic_prefix: str = "failure_status"

    @property
    def header_seq_label(self) -> str:
        return self.field_prefix + self.header_seq_suffix

    @property
    def header_stamp_label(self) -> str:
        return self.field_prefix + self.header_stamp_suffix

    @property
    def header_frame_id_label(self) -> str:
        return self.field_prefix + self.header_frame_id_suffix


# ----- defaults (used if configure_from_config isn't called) -----
_CONVENTIONS: NamingConventions = NamingConventions()


def load_config(cfg_path: Path | None = None) -> dict:
    path = Path(cfg_path) if cfg_path is not None else _DEFAULT_CONFIG
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def conventions_from_config(cfg: dict | None) -> NamingConventions:
    """
    Build conventions from the ``conventions`` section of a config dict.
    Unknown keys are ignored, missing keys keep their defaults.
    """
    section = (cfg or {}).get("conventions", {}) if cfg else {}
    known = {f.name for f in fields(NamingConventions)}
    overrides = {}
    for key, value in (section or {}).items():
        if key not in known:
            _LOG.debug("ignoring unknown convention '%s'", key)
            continue
        overrides[key] = "" if value is None else str(value)
    # str.split() cannot take an empty separator
    if overrides.get("delimiter", ",") == "":
        _LOG.warning("empty CSV delimiter in config, keeping '%s'", NamingConventions.delimiter)
        del overrides["delimiter"]
    return replace(NamingConventions(), **overrides)


def configure_from_config(cfg: dict | None) -> None:
    """
    Optional: call once at startup to override the default conventions.
    Topics created afterwards pick them up unless given their own.
    """
    global _CONVENTIONS
    # reset to defaults each call so repeated invocations do not accumulate
    _CONVENTIONS = conventions_from_config(cfg)


def current_conventions() -> NamingConventions:
    return _CONVENTIONS


def is_fault_topic_name(name: str, conventions: NamingConventions | None = None) -> bool:
    """True iff ``name`` starts with the fault-topic prefix (case-sensitive)."""
    prefix = (conventions or _CONVENTIONS).fault_topic_prefix
    # a name shorter than the prefix can never be a fault topic
    if len(name) < len(prefix):
        return False
    return name[:len(prefix)] == prefix
