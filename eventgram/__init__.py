"""Eventgram: time-boxed events with user posts and images."""

__version__ = "1.0.0"
