"""Configuration helpers for the StyleSync recommendation service."""

from dataclasses import dataclass, field
from pathlib import Path
import os
from typing import Dict, Optional, Tuple

from models.color_theory import DEFAULT_AFFINITY, ColorAffinityTable

DEFAULT_WEIGHTS: Dict[str, float] = {
    "color_harmony": 0.5,
    "coverage": 0.2,
    "occasion_fit": 0.3,
}


@dataclass
class EngineConfig:
    """Tunable policy of the outfit engine.

    Weights, temperature bands and the color affinity overrides are policy
    choices rather than fixed behaviour, so they live here instead of in the
    scoring code.
    """

    weights: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))
    unconstrained_occasion_credit: float = 0.5
    cold_threshold_c: float = 10.0
    hot_threshold_c: float = 25.0
    min_outerwear_warmth: int = 2
    max_accessories: int = 2
    accessory_min_affinity: float = 0.6
    default_affinity: float = DEFAULT_AFFINITY
    affinity_overrides: Dict[Tuple[str, str], float] = field(default_factory=dict)
    default_max_results: int = 5
    default_max_skeletons: int = 200

    def __post_init__(self) -> None:
        missing = set(DEFAULT_WEIGHTS) - set(self.weights)
        if missing:
            raise ValueError(f"Missing score weights: {sorted(missing)}")
        if any(value < 0 for value in self.weights.values()):
            raise ValueError("Score weights must be non-negative")
        if abs(sum(self.weights[key] for key in DEFAULT_WEIGHTS) - 1.0) > 1e-6:
            raise ValueError("Score weights must sum to 1.0")
        if not 0.0 <= self.unconstrained_occasion_credit <= 1.0:
            raise ValueError("unconstrained_occasion_credit must be within [0, 1]")
        if self.cold_threshold_c > self.hot_threshold_c:
            raise ValueError("cold_threshold_c cannot exceed hot_threshold_c")
        if self.max_accessories < 0:
            raise ValueError("max_accessories cannot be negative")
        self._affinity_table = ColorAffinityTable(self.affinity_overrides, default=self.default_affinity)

    @property
    def affinity_table(self) -> ColorAffinityTable:
        return self._affinity_table

    @classmethod
    def from_env(cls, yaml_config: Optional[dict] = None) -> "EngineConfig":
        """Build engine policy from ``STYLESYNC_*`` variables over optional YAML values."""

        yaml_config = yaml_config or {}

        def get_value(key: str) -> Optional[str]:
            return os.getenv(f"STYLESYNC_{key.upper()}", yaml_config.get(key))

        kwargs: Dict[str, object] = {}
        weights = dict(DEFAULT_WEIGHTS)
        for weight_key in DEFAULT_WEIGHTS:
            raw = get_value(f"weight_{weight_key}")
            if raw is not None:
                weights[weight_key] = float(raw)
        kwargs["weights"] = weights

        float_keys = (
            "unconstrained_occasion_credit",
            "cold_threshold_c",
            "hot_threshold_c",
            "accessory_min_affinity",
            "default_affinity",
        )
        int_keys = ("min_outerwear_warmth", "max_accessories", "default_max_results", "default_max_skeletons")
        for key in float_keys:
            raw = get_value(key)
            if raw is not None:
                kwargs[key] = float(raw)
        for key in int_keys:
            raw = get_value(key)
            if raw is not None:
                kwargs[key] = int(raw)

        # Format: "red:green=0.3,navy:olive=0.8"
        raw_overrides = get_value("affinity_overrides")
        if raw_overrides:
            kwargs["affinity_overrides"] = _parse_affinity_overrides(str(raw_overrides))
        return cls(**kwargs)


def _parse_affinity_overrides(raw: str) -> Dict[Tuple[str, str], float]:
    overrides: Dict[Tuple[str, str], float] = {}
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        pair, _, value = chunk.partition("=")
        color1, _, color2 = pair.partition(":")
        if not color1 or not color2 or not value:
            raise ValueError(f"Malformed affinity override '{chunk}', expected 'color:color=value'")
        overrides[(color1.strip(), color2.strip())] = float(value)
    return overrides


@dataclass
class AppConfig:
    """Configuration values for the StyleSync service.

    Collaborator settings (item store path, weather credentials) sit next to
    the engine policy so one object wires the whole application.
    """

    wardrobe_db_path: str = "data/wardrobe.db"
    weather_api_key: Optional[str] = None
    default_location: Optional[str] = None
    hemisphere: str = "north"
    environment: Optional[str] = None
    engine: EngineConfig = field(default_factory=EngineConfig)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is merged with environment variables so that secrets can be
        injected by the runtime environment.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("STYLESYNC_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        hemisphere = str(get_value("hemisphere", "north") or "north").lower()
        if hemisphere not in {"north", "south"}:
            raise ValueError(f"Unsupported hemisphere '{hemisphere}', expected 'north' or 'south'")

        return cls(
            wardrobe_db_path=str(get_value("wardrobe_db_path", "data/wardrobe.db")),
            weather_api_key=get_value("openweather_api_key"),
            default_location=get_value("default_location"),
            hemisphere=hemisphere,
            environment=env_name,
            engine=EngineConfig.from_env(yaml_config),
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a minimal YAML/INI-style config without external dependencies."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config


__all__ = ["AppConfig", "EngineConfig", "DEFAULT_WEIGHTS"]
