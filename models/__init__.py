"""Data models and schemas for the Magic 8 Ball service."""

from models.schemas import MagicEightBallRequest, ResponseRecord, ResponseStatus, SystemConfig

__all__ = ["MagicEightBallRequest", "ResponseRecord", "ResponseStatus", "SystemConfig"]
