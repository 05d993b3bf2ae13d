"""Application screens for Wedding Run."""

from .base import BaseScreen, ScreenContext
from .game import GameScreen
from .manager import ScreenManager
from .pin import LoadingScreen, PinScreen
from .ranking import RankingScreen
from .result import ResultScreen
from .title import TitleScreen

ALL_SCREENS = [
    LoadingScreen,
    PinScreen,
    TitleScreen,
    GameScreen,
    ResultScreen,
    RankingScreen,
]

__all__ = [
    "ALL_SCREENS",
    "BaseScreen",
    "GameScreen",
    "LoadingScreen",
    "PinScreen",
    "RankingScreen",
    "ResultScreen",
    "ScreenContext",
    "ScreenManager",
    "TitleScreen",
]
