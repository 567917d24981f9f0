# -*- coding: utf-8 -*-
"""
Container Factory Module

Responsible for creating and assembling all application dependencies.

This is the **only** instance creation point (Composition Root) for the application.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from app.container import AppContainer
    from services.config_service import ConfigService

logger = logging.getLogger(__name__)


class AppContainerFactory:
    """Application Container Factory
    
    Usage Example:
        container = AppContainerFactory.create()
        
        # In tests
        container = AppContainerFactory.create_for_testing(tmp_path)
    """
    
    @staticmethod
    def create(config_path: Optional[str] = None) -> "AppContainer":
        """Create Application Container
        
        Args:
            config_path: Configuration file path (defaults to the user config file)
            
        Returns:
            A configured AppContainer instance
        
        Raises:
            StorageUnavailable, StorageCorrupt: The preset file cannot be loaded
        """
        from services.config_service import ConfigService
        
        logger.info("Creating application container...")
        config = ConfigService(config_path)
        container = AppContainerFactory._assemble(config, config.get_data_dir())
        logger.info("Application container creation complete")
        return container
    
    @staticmethod
    def create_for_testing(
        data_dir: Union[str, Path],
        bundled_presets_file: Optional[Union[str, Path]] = None,
    ) -> "AppContainer":
        """Create a container for testing
        
        Keeps configuration, presets and settings under data_dir.
        
        Args:
            data_dir: Directory for all files
            bundled_presets_file: Seed file; defaults to the packaged presets
        """
        from services.config_service import ConfigService
        
        data_dir = Path(data_dir)
        ConfigService.reset_instance()
        config = ConfigService(str(data_dir / "config.yaml"))
        if bundled_presets_file is not None:
            config.set("equalizer.bundled_presets_file", str(bundled_presets_file))
        return AppContainerFactory._assemble(config, data_dir)
    
    @staticmethod
    def _assemble(config: "ConfigService", data_dir: Path) -> "AppContainer":
        from app.container import AppContainer
        from core.event_bus import EventBus
        from core.preset_store import BUNDLED_PRESETS_PATH, PRESETS_FILE_NAME, PresetStore
        from models.band_config import DEFAULT_BANDS
        from services.equalizer_service import EqualizerService
        from services.local_settings import EqualizerSettings, LocalSettings
        
        # === 1. Storage ===
        store = PresetStore(
            config.get_path("equalizer.presets_file", data_dir / PRESETS_FILE_NAME),
            bundled_path=config.get_path("equalizer.bundled_presets_file", BUNDLED_PRESETS_PATH),
            plist_format=config.get("equalizer.plist_format", "binary"),
        )
        settings = LocalSettings(config.get_path("equalizer.settings_file", data_dir / "settings.yaml"))
        
        # === 2. Event Bus ===
        event_bus = EventBus()
        
        # === 3. Service Layer ===
        equalizer = EqualizerService(
            store,
            EqualizerSettings(settings),
            event_bus=event_bus,
            default_bands=config.get("equalizer.default_bands", DEFAULT_BANDS),
            default_gain=config.get("equalizer.default_gain", 0.0),
        )
        logger.debug("Presets file: %s", store.path)
        
        return AppContainer(
            config=config,
            event_bus=event_bus,
            equalizer=equalizer,
            preset_store=store,
            settings=settings,
        )
