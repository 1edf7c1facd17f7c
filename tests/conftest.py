import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from libration.core.config import SIM_CFG
from libration.core.model import SimulationState


@pytest.fixture
def state():
    return SimulationState.from_config(SIM_CFG)


@pytest.fixture
def playing_state():
    s = SimulationState.from_config(SIM_CFG)
    s.toggle_play()
    return s


@pytest.fixture
def display():
    pygame.init()
    screen = pygame.display.set_mode((320, 240))
    yield screen
    pygame.quit()
