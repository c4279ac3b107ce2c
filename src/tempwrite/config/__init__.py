"""Configuration loading."""

from tempwrite.config.runtime import Config

__all__ = ["Config"]
