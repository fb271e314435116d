"""Clients for talking to a running Creator Station server."""

from .http_client import CreatorStationClient, HttpImageService, HttpSpeechService, DEFAULT_BASE_URL

__all__ = ["CreatorStationClient", "HttpImageService", "HttpSpeechService", "DEFAULT_BASE_URL"]
