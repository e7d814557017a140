"""Building blocks for MQTT v5 clients: message models, topic routing, topic aliases, send quota and session stores."""

__version__ = "0.1.0"

__all__ = [
    "logs",
    "properties",
    "publish",
    "messages",
    "router",
    "topicaliases",
    "sendquota",
    "memorystore",
    "filestore",
]