# tests/conftest.py

import os

# Headless pygame for surfaces and events.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from canvas_map import CanvasMap, EventBus, SectionStore, Viewport


@pytest.fixture
def screen():
    return pygame.Surface((800, 600), pygame.SRCALPHA, 32)


@pytest.fixture
def sections():
    return SectionStore(64)


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def viewport(screen, sections, bus):
    return Viewport(screen, sections=sections, bus=bus, smooth=False)


@pytest.fixture
def canvas_map(screen, sections, bus):
    return CanvasMap(screen, sections=sections, bus=bus, smooth=False)
