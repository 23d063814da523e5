"""TaskRoster - people and task tracking API with an audit side-channel."""

__version__ = "0.1.0"
