"""PantherBot - Minecraft chat helper bot and kill feed watcher"""

__version__ = "0.1.0"
