"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import GamePhase, GameSession, GameState, LetterResult, LetterState

__all__ = ['GamePhase', 'GameSession', 'GameState', 'LetterResult', 'LetterState']
