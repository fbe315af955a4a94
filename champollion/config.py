"""
Champollion - Configuration Module
Centralized thresholds, index locations and performance settings
"""
import os
from dataclasses import dataclass, field
from typing import Dict, Any, Optional

from champollion.base import InvalidConfiguration, CONTAINMENT_MODES


DEFAULT_INDEX_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'data', 'index')


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None or value == '':
        return default
    try:
        return int(value)
    except ValueError:
        raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name)
    if value is None or value == '':
        return default
    try:
        return float(value)
    except ValueError:
        raise InvalidConfiguration(f"{name} must be a number, got {value!r}")


@dataclass
class TranslationDefaults:
    """Default translation parameters"""
    frequency_threshold: int = 5
    dice_threshold: float = 0.1
    containment: str = 'substring'

    @classmethod
    def from_env(cls) -> 'TranslationDefaults':
        """Create translation defaults from environment variables"""
        containment = os.environ.get('CHAMPOLLION_CONTAINMENT', 'substring').lower()
        if containment not in CONTAINMENT_MODES:
            raise InvalidConfiguration(
                f"CHAMPOLLION_CONTAINMENT must be one of {', '.join(CONTAINMENT_MODES)}, got {containment!r}"
            )
        return cls(
            frequency_threshold=_env_int('CHAMPOLLION_TF', 5),
            dice_threshold=_env_float('CHAMPOLLION_TD', 0.1),
            containment=containment,
        )


@dataclass
class ClosedClassConfig:
    """Target-language function words excluded from candidacy"""
    language: str = 'de'
    words_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> 'ClosedClassConfig':
        return cls(
            language=os.environ.get('CHAMPOLLION_LANGUAGE', 'de'),
            words_file=os.environ.get('CHAMPOLLION_CLOSED_CLASS_FILE') or None,
        )


@dataclass
class IndexConfig:
    """Where the sentence indexes live and which corpora feed them"""
    index_dir: str = DEFAULT_INDEX_DIR
    source_path: Optional[str] = None
    target_path: Optional[str] = None

    @classmethod
    def from_env(cls) -> 'IndexConfig':
        return cls(
            index_dir=os.environ.get('CHAMPOLLION_INDEX_DIR', DEFAULT_INDEX_DIR),
            source_path=os.environ.get('CHAMPOLLION_SOURCE') or None,
            target_path=os.environ.get('CHAMPOLLION_TARGET') or None,
        )


@dataclass
class PerformanceConfig:
    """Performance-related settings"""
    max_workers: int = 1
    max_cache_size: int = 10000
    search_timeout_seconds: float = 300

    @classmethod
    def from_env(cls) -> 'PerformanceConfig':
        config = cls(
            max_workers=_env_int('CHAMPOLLION_MAX_WORKERS', 1),
            max_cache_size=_env_int('CHAMPOLLION_CACHE_SIZE', 10000),
            search_timeout_seconds=_env_float('CHAMPOLLION_TIMEOUT', 300),
        )
        if config.max_workers < 1:
            raise InvalidConfiguration("CHAMPOLLION_MAX_WORKERS must be at least 1")
        if config.max_cache_size < 0:
            raise InvalidConfiguration("CHAMPOLLION_CACHE_SIZE must not be negative")
        return config


@dataclass
class AppConfig:
    """Main application configuration"""
    translation_defaults: TranslationDefaults = field(default_factory=TranslationDefaults)
    closed_class: ClosedClassConfig = field(default_factory=ClosedClassConfig)
    index: IndexConfig = field(default_factory=IndexConfig)
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)
    debug_mode: bool = False

    @classmethod
    def load(cls) -> 'AppConfig':
        """Load configuration from environment and defaults"""
        return cls(
            translation_defaults=TranslationDefaults.from_env(),
            closed_class=ClosedClassConfig.from_env(),
            index=IndexConfig.from_env(),
            performance=PerformanceConfig.from_env(),
            debug_mode=os.environ.get('DEBUG', '').lower() in ('true', '1', 'yes'),
        )

    def get_translation_settings(self, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Get translation settings with optional overrides"""
        settings = {
            'tf': self.translation_defaults.frequency_threshold,
            'td': self.translation_defaults.dice_threshold,
            'containment': self.translation_defaults.containment,
        }

        if overrides:
            settings.update({k: v for k, v in overrides.items() if v is not None})

        return settings
