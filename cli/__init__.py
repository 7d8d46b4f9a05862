"""CLI package for the reading log"""
from .main import cli

__all__ = ['cli']
