"""Gymnasium environment wrapping a Weiqi game session."""

from .gym_env import WeiqiEnv

__all__ = ["WeiqiEnv"]
