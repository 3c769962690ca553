"""
Allow running the package directly: python -m forktal
"""
from .app import run

run()
