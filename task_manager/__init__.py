"""Personal task manager: task store gateway and task console."""

__version__ = "1.0.0"
