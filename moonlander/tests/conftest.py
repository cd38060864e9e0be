"""Pytest configuration for moonlander tests."""
from __future__ import annotations

import os

# Headless pygame for render smoke tests.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
