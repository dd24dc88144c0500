"""
Input/Output Manager
Handles writing the generated texture and saving/loading settings presets (.json).
"""
import json
import logging
import os
from importlib.metadata import version, PackageNotFoundError

from PIL import Image

from titletexture.model.state import TitleSettings

# Get module logger
logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("titletexture")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"

PRESET_SUFFIX = ".json"
TEXTURE_SUFFIX = ".png"


class IOManager:

    @staticmethod
    def save_texture(image: Image.Image, filepath: str) -> str:
        """
        Writes the texture as PNG, creating missing directories.
        Returns the path actually written (with the .png suffix).
        """
        if not filepath.lower().endswith(TEXTURE_SUFFIX):
            filepath += TEXTURE_SUFFIX

        directory = os.path.dirname(filepath)
        if directory:
            os.makedirs(directory, exist_ok=True)

        logger.info(f"Saving {image.width}x{image.height} texture to: {filepath}")
        image.save(filepath, format="PNG")
        return filepath

    @staticmethod
    def save_preset(settings: TitleSettings, filepath: str) -> str:
        if not filepath.lower().endswith(PRESET_SUFFIX):
            filepath += PRESET_SUFFIX

        logger.info(f"Saving preset to: {filepath}")
        payload = {
            "version": APP_VERSION,
            "settings": settings.to_dict(),
        }
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
        return filepath

    @staticmethod
    def load_preset(filepath: str) -> TitleSettings:
        logger.info(f"Loading preset from: {filepath}")
        with open(filepath, "r", encoding="utf-8") as f:
            try:
                payload = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Preset is not valid JSON: {e}") from None

        if not isinstance(payload, dict) or not isinstance(payload.get("settings"), dict):
            raise ValueError("Preset has no 'settings' object.")

        file_version = payload.get("version", "unknown")
        if file_version != APP_VERSION:
            logger.debug(f"Preset was written by version {file_version} (running {APP_VERSION}).")

        settings = TitleSettings.from_dict(payload["settings"])
        settings.validate()
        return settings
