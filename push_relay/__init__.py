"""Relay batched push notifications to the Expo push service."""

from .main import handle, handler

__all__ = ["handle", "handler"]
