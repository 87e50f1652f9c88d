"""Common type definitions for the application.

This module provides shared type aliases used across multiple modules
to avoid duplication and ensure consistency.
"""

from collections.abc import Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncSession

# Type alias for async session factory functions
# Used by services that need to create database sessions
SessionFactory = Callable[[], AsyncSession]

# Returns the number of seconds to wait before the next step
DelayPolicy = Callable[[], float]

# Awaitable pause, asyncio.sleep in production
SleepFunc = Callable[[float], Awaitable[None]]

__all__ = [
    "DelayPolicy",
    "SessionFactory",
    "SleepFunc",
]
